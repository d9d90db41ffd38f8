from __future__ import annotations

from functools import lru_cache

from pydantic import BaseModel, ConfigDict

from core.settings.modules.inwx_settings import InwxSettings


class AppSettings(BaseModel):
    """
    Application settings aggregator.

    Each integration keeps its own env prefix; this model only groups them.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="ignore")

    inwx: InwxSettings


@lru_cache()
def get_app_settings() -> AppSettings:
    return AppSettings(
        inwx=InwxSettings(),
    )
