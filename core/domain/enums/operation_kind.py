"""
Operation Kind Enum.

Read/write classification of registrar operations, used by the permission guard.
"""
from enum import Enum


class OperationKind(str, Enum):
    """Whether an operation only reads or also mutates registrar state."""
    
    READ = "read"
    WRITE = "write"
