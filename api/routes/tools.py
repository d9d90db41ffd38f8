"""
Registrar tool endpoints.

Lists the guarded INWX tools and runs a single tool per request. Policy,
validation and registrar errors are mapped to HTTP codes by the handlers
in api.main.
"""
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends

from api.dependencies import get_toolset
from core.application.services.permission_guard import BoundTool
from orchestration.workflow import find_operation


router = APIRouter()


@router.get("", summary="List registrar tools")
async def list_tools(toolset: List[BoundTool] = Depends(get_toolset)) -> List[Dict[str, str]]:
    """Return name, description and read/write kind of every tool."""
    return [
        {"name": tool.name, "description": tool.description, "kind": tool.kind.value}
        for tool in toolset
    ]


@router.post("/{name}", summary="Run a registrar tool")
async def run_tool(
    name: str,
    params: Optional[Dict[str, Any]] = Body(default=None),
    toolset: List[BoundTool] = Depends(get_toolset),
) -> Dict[str, Any]:
    """
    Run one tool with a JSON object of parameters.
    
    Returns:
        {"tool": name, "result": <tool result>}
    """
    tool = find_operation(toolset, name)
    result = await tool.run(params or {})
    return {"tool": name, "result": result}
