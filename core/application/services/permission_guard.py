"""
Permission guard.

Wraps every registrar tool at toolset build time. The check runs before the
tool validates input or opens a registrar session, so a rejected call has no
remote side effect.
"""
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from core.domain.enums.operation_kind import OperationKind
from core.domain.errors import PolicyViolationError
from core.domain.value_objects import PermissionPolicy
from core.infrastructure.adapters.inwx.tools import ToolContext, ToolDefinition
from regbridge_sdk.logging import get_logger

READ_ONLY_RULE = "readOnly"
ALLOW_LIST_RULE = "allowedOperations"


class PermissionGuard:
    """Checks one operation call against a PermissionPolicy."""

    def __init__(self, policy: PermissionPolicy) -> None:
        """Initialize guard.

        Args:
            policy: Policy fixed for the lifetime of the toolset
        """
        self._policy = policy
        self._logger = get_logger("application.permission_guard")

    @property
    def policy(self) -> PermissionPolicy:
        return self._policy

    def check(self, name: str, kind: OperationKind) -> None:
        """Raise PolicyViolationError if the call is not allowed.

        Args:
            name: Operation name
            kind: Read/write classification supplied by the catalog

        Raises:
            PolicyViolationError: On readOnly or allowedOperations violation
        """
        if self._policy.read_only and kind == OperationKind.WRITE:
            self._reject(name, READ_ONLY_RULE)
        if not self._policy.unrestricted and name not in self._policy.allowed_operations:
            self._reject(name, ALLOW_LIST_RULE)

    def _reject(self, name: str, rule: str) -> None:
        self._logger.warning(f"Blocked operation {name} by {rule} policy")
        raise PolicyViolationError(operation=name, rule=rule)


@dataclass(frozen=True)
class BoundTool:
    """A tool bound to its runtime context and guarded by a policy."""

    definition: ToolDefinition
    context: ToolContext
    guard: PermissionGuard

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def description(self) -> str:
        return self.definition.description

    @property
    def kind(self) -> OperationKind:
        return self.definition.kind

    async def run(self, params: Optional[Mapping[str, Any]] = None) -> Any:
        """Check the policy, then forward the call unchanged."""
        self.guard.check(self.definition.name, self.definition.kind)
        return await self.definition.run(params, self.context)


def guard_tool(
    definition: ToolDefinition, context: ToolContext, guard: PermissionGuard
) -> BoundTool:
    """Bind a tool definition to its context behind a permission guard."""
    return BoundTool(definition=definition, context=context, guard=guard)
