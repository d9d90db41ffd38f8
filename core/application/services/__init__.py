"""Application services."""
from .permission_guard import BoundTool, PermissionGuard, guard_tool
from .toolset_service import build_toolset

__all__ = ["BoundTool", "PermissionGuard", "build_toolset", "guard_tool"]
