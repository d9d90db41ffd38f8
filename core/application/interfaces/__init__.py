"""Application layer interfaces."""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class IRegistrarClient(ABC):
    """
    Interface for registrar RPC operations.

    This interface defines the contract for the registrar transport,
    allowing tools to send a method name and parameters without
    depending on the wire protocol or session handling.
    """

    @abstractmethod
    async def call(
        self,
        method: str,
        params: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Invoke a registrar RPC method.

        Args:
            method: RPC method name (e.g. "domain.check")
            params: Flat mapping of JSON-compatible parameters

        Returns:
            Result payload of the call

        Raises:
            InwxApiError: If the registrar rejects the call or the
                transport fails
        """
        pass

    @abstractmethod
    async def logout(self) -> None:
        """
        End the registrar session.

        Must be safe to call more than once.
        """
        pass


__all__ = ["IRegistrarClient"]
