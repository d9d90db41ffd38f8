"""Domain value objects."""

from .value_objects import ExecutionID, PermissionPolicy

__all__ = [
    "ExecutionID",
    "PermissionPolicy",
]
