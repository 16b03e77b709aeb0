"""Search history API endpoint."""

from typing import List

from fastapi import APIRouter, Depends

from pricehub.dependencies import get_history_service
from pricehub.services.history_service import HistoryService

router = APIRouter()


@router.get("/history", response_model=List[str])
async def search_history(
    service: HistoryService = Depends(get_history_service),
):
    """Most recently searched distinct queries, newest first."""
    return await service.recent_queries()
