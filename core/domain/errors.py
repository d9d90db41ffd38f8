"""
Domain errors.

Every failure raised by regbridge code derives from RegbridgeError so callers
can tell our errors apart from arbitrary exceptions raised by injected
operations.
"""
from typing import Optional


class RegbridgeError(Exception):
    """Base class for all regbridge errors."""


class ToolInputError(RegbridgeError):
    """Tool parameters failed validation before any remote call was made."""


class OperationNotFoundError(RegbridgeError):
    """A required operation is absent from the supplied registry."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'Required tool "{name}" not found in provided toolset')


class PolicyViolationError(RegbridgeError):
    """
    A call was rejected by the permission guard.

    Attributes:
        operation: Name of the rejected operation
        rule: Violated policy rule ("readOnly" or "allowedOperations")
    """

    def __init__(self, operation: str, rule: str) -> None:
        self.operation = operation
        self.rule = rule
        super().__init__(
            f'Operation "{operation}" is blocked by the {rule} policy'
        )


class InwxApiError(RegbridgeError):
    """
    Error reported by the INWX DomRobot API or its transport.

    Attributes:
        code: DomRobot result code, HTTP status for non-200 replies,
            or -1 when the request never got a reply
        message: Human-readable message
        method: RPC method that failed, if known
        reason: Optional extra reason text sent by the API
    """

    def __init__(
        self,
        code: int,
        message: str,
        method: Optional[str] = None,
        reason: Optional[str] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.method = method
        self.reason = reason
        text = f"INWX API error {code}: {message}"
        if reason:
            text += f" ({reason})"
        if method:
            text += f" [{method}]"
        super().__init__(text)
