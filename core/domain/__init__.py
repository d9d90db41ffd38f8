"""Domain layer - enums and errors shared by every other layer."""

from .enums.operation_kind import OperationKind
from .enums.step_status import StepStatus
from .errors import (
    InwxApiError,
    OperationNotFoundError,
    PolicyViolationError,
    RegbridgeError,
    ToolInputError,
)
from .value_objects import ExecutionID, PermissionPolicy

__all__ = [
    "ExecutionID",
    "InwxApiError",
    "OperationKind",
    "OperationNotFoundError",
    "PermissionPolicy",
    "PolicyViolationError",
    "RegbridgeError",
    "StepStatus",
    "ToolInputError",
]
