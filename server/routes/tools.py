"""Tool listing and tool call endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from orchestrator.search_orchestrator import SearchOrchestrator
from server.dependencies import get_orchestrator
from server.schemas.requests import ToolCallRequest
from server.schemas.responses import ToolCallResponseDTO, ToolListResponseDTO
from tools.search_tool import SEARCH_TOOL_NAME, handle_search_call, search_tool
from utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/v1/tools", tags=["Tools"])


@router.get("", response_model=ToolListResponseDTO)
async def list_tools():
    """List the tools this server provides."""
    logger.debug("Received tools list request")
    return ToolListResponseDTO(tools=[search_tool])


@router.post("/call", response_model=ToolCallResponseDTO)
async def call_tool(
    request: ToolCallRequest,
    orchestrator: SearchOrchestrator = Depends(get_orchestrator),
):
    """Execute a tool and return its rendered text content."""
    logger.info(
        "Received tool call request",
        extra={"extra_fields": {"tool_name": request.name, "arguments": request.arguments}},
    )

    if request.name != SEARCH_TOOL_NAME:
        logger.error(f"Unknown tool: {request.name}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown tool: {request.name}"
        )

    return await handle_search_call(request.arguments, orchestrator, retry=request.retry)
