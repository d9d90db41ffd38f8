"""
Toolset service.

Builds the registrar operation registry: every catalog tool bound to the
configured client factory and wrapped by one shared permission guard.
"""
from typing import List, Optional

from core.application.interfaces import IRegistrarClient
from core.application.services.permission_guard import BoundTool, PermissionGuard, guard_tool
from core.infrastructure.adapters.inwx.tools import ClientFactory, ToolContext, create_tools
from core.settings.modules.inwx_settings import InwxSettings
from regbridge_sdk.logging import get_logger

logger = get_logger("application.toolset")


def build_toolset(
    settings: InwxSettings, client_factory: Optional[ClientFactory] = None
) -> List[BoundTool]:
    """
    Build the guarded registrar toolset.

    Args:
        settings: INWX settings (credentials and permission policy)
        client_factory: Creates one registrar client per tool call;
            defaults to a real InwxClient

    Returns:
        Bound tools in catalog order
    """
    if client_factory is None:
        def client_factory() -> IRegistrarClient:
            from core.infrastructure.adapters.inwx.client import InwxClient
            return InwxClient(settings)

    policy = settings.permission_policy()
    guard = PermissionGuard(policy)
    context = ToolContext(settings=settings, client_factory=client_factory)
    tools = [guard_tool(definition, context, guard) for definition in create_tools()]

    logger.info(
        f"Built INWX toolset | tools: {len(tools)} | env: {settings.environment} | "
        f"read_only: {policy.read_only} | allow-list: {len(policy.allowed_operations)}"
    )
    return tools
