"""Domain value objects - pure Python immutable types."""

from dataclasses import dataclass, field
from uuid import UUID, uuid4


@dataclass(frozen=True)
class ExecutionID:
    """Unique identifier for workflow execution tracing."""

    value: UUID

    @classmethod
    def generate(cls) -> "ExecutionID":
        """Generate a new ExecutionID."""
        return cls(value=uuid4())

    def __str__(self) -> str:
        """Return string representation."""
        return str(self.value)


@dataclass(frozen=True)
class PermissionPolicy:
    """
    Least-privilege policy applied to every registrar operation.
    
    - read_only: reject every operation classified as a write
    - allowed_operations: when non-empty, only these names may run
    
    A policy is fixed once a toolset is built; the guard re-checks it
    on every call.
    """
    read_only: bool = False
    allowed_operations: frozenset[str] = field(default_factory=frozenset)
    
    def __post_init__(self):
        # Accept any iterable of names from callers
        if not isinstance(self.allowed_operations, frozenset):
            object.__setattr__(
                self, 'allowed_operations', frozenset(self.allowed_operations)
            )
    
    @property
    def unrestricted(self) -> bool:
        """True when no allow-list is configured."""
        return not self.allowed_operations
