"""
FastAPI Dependencies.

Provides dependency injection for the registrar toolset.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING
from dotenv import load_dotenv

# Load environment variables ONCE before any settings objects are created
_PROJECT_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(dotenv_path=_PROJECT_ROOT / ".env")

from core.settings import get_app_settings

if TYPE_CHECKING:
    from core.application.services.permission_guard import BoundTool

logger = logging.getLogger(__name__)


# =============================================================================
# SINGLETON INSTANCES
# =============================================================================

_toolset = None


# =============================================================================
# DEPENDENCIES
# =============================================================================

def get_toolset() -> list[BoundTool]:
    global _toolset
    if _toolset is None:
        from core.application.services.toolset_service import build_toolset
        _toolset = build_toolset(get_app_settings().inwx)
        logger.info(f"Created INWX toolset with {len(_toolset)} tools")
    return _toolset


# =============================================================================
# RESET (for testing)
# =============================================================================

def reset_dependencies():
    global _toolset

    _toolset = None
    get_app_settings.cache_clear()

    logger.info("Dependencies reset")
