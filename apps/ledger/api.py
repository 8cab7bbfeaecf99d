"""
Ledger API endpoints.
"""
from typing import List
from django.http import HttpRequest
from ninja import Router

from .dtos import PointsTransactionDTO
from .services import get_points_history

router = Router(tags=["Ledger"])


@router.get("/history", response=List[PointsTransactionDTO])
async def get_history(request: HttpRequest, limit: int = 50):
    """
    The authenticated user's points history, newest first.
    """
    limit = max(1, min(limit, 200))
    return await get_points_history(request.auth.user_id, limit=limit)
