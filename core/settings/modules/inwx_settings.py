from __future__ import annotations

import json
from typing import Annotated, Literal, Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import NoDecode, SettingsConfigDict

from core.domain.value_objects import PermissionPolicy
from core.settings.base_settings import RegbridgeBaseSettings

PRODUCTION_URL = "https://api.domrobot.com/jsonrpc/"
OTE_URL = "https://api.ote.domrobot.com/jsonrpc/"


class InwxSettings(RegbridgeBaseSettings):
    """
    Settings for the INWX DomRobot JSON-RPC connection.
    Loaded automatically from .env with prefix INWX_*

    INWX_ALLOWED_OPERATIONS accepts a JSON list or a comma-separated string.
    """

    username: str = ""
    password: SecretStr = SecretStr("")
    otp_secret: Optional[SecretStr] = None
    environment: Literal["production", "ote"] = "production"
    read_only: bool = False
    allowed_operations: Annotated[list[str], NoDecode] = Field(default_factory=list)
    api_url: Optional[str] = None
    timeout_seconds: float = Field(30.0, gt=0)
    language: str = "en"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="INWX_",
        env_ignore_empty=True,
        extra="ignore",
    )

    @field_validator("allowed_operations", mode="before")
    @classmethod
    def _split_operations(cls, value: object) -> object:
        if value is None:
            return []
        if isinstance(value, str):
            text = value.strip()
            if text.startswith("["):
                return json.loads(text)
            return [part.strip() for part in text.split(",") if part.strip()]
        return value

    @property
    def endpoint(self) -> str:
        """JSON-RPC endpoint for the configured environment."""
        if self.api_url:
            return self.api_url
        return OTE_URL if self.environment == "ote" else PRODUCTION_URL

    def permission_policy(self) -> PermissionPolicy:
        return PermissionPolicy(
            read_only=self.read_only,
            allowed_operations=frozenset(self.allowed_operations),
        )
