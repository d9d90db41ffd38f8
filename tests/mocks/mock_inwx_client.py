"""
Mock INWX Client Implementation.

Simulates the DomRobot transport for tests: canned replies per method,
recorded calls, and a logout counter.
"""
from typing import Any, Dict, List, Optional, Tuple
import logging

from core.application.interfaces import IRegistrarClient
from core.domain.errors import InwxApiError


logger = logging.getLogger(__name__)


class MockInwxClient(IRegistrarClient):
    """
    Mock implementation of the registrar client.
    
    Replies come from `responses` (method -> resData or exception).
    Unknown methods reply with an empty payload.
    """
    
    def __init__(self, responses: Optional[Dict[str, Any]] = None):
        """Initialize mock client."""
        self.responses = dict(responses or {})
        self.calls: List[Tuple[str, Dict[str, Any]]] = []
        self.logout_count = 0
    
    async def call(
        self,
        method: str,
        params: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Record the call and return the canned reply.
        
        Raises:
            Exception: When the canned reply is an exception instance
        """
        self.calls.append((method, dict(params or {})))
        logger.info(f"Mock INWX: {method} {params}")
        reply = self.responses.get(method, {})
        if isinstance(reply, Exception):
            raise reply
        return reply
    
    async def logout(self) -> None:
        """Count logouts."""
        self.logout_count += 1
    
    @property
    def methods(self) -> List[str]:
        return [method for method, _ in self.calls]


class MockClientFactory:
    """Hands out MockInwxClient instances sharing one reply table."""
    
    def __init__(self, responses: Optional[Dict[str, Any]] = None):
        self.responses = dict(responses or {})
        self.clients: List[MockInwxClient] = []
    
    def __call__(self) -> MockInwxClient:
        client = MockInwxClient(self.responses)
        self.clients.append(client)
        return client
    
    @property
    def calls(self) -> List[Tuple[str, Dict[str, Any]]]:
        return [call for client in self.clients for call in client.calls]


def api_error(code: int = 2303, message: str = "Object does not exist") -> InwxApiError:
    return InwxApiError(code=code, message=message)
