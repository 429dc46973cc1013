"""Structured search endpoint."""

from fastapi import APIRouter, Depends, Query

from models.search_params import SearchParams
from orchestrator.search_orchestrator import SearchOrchestrator
from server.dependencies import get_orchestrator
from server.schemas.responses import SearchResponseDTO

router = APIRouter(prefix="/v1", tags=["Search"])


@router.post("/search", response_model=SearchResponseDTO)
async def search(
    params: SearchParams,
    retry: bool = Query(True, description="Retry transient upstream failures"),
    orchestrator: SearchOrchestrator = Depends(get_orchestrator),
):
    """Search and return structured results with the estimated cost.

    Classified failures are rendered by the app's SearchServiceError handler.
    """
    if retry:
        outcome = await orchestrator.search_with_retry(params)
    else:
        outcome = await orchestrator.execute_search(params)
    return SearchResponseDTO.from_outcome(outcome)
