"""
Identity API endpoints.

The caller is always implied by the credential; no endpoint takes a user id.
"""
from django.http import HttpRequest
from ninja import Router

from apps.core.exceptions import InvariantViolation
from .dtos import UserDTO
from .services import get_user_dto

router = Router(tags=["Identity"])


@router.get("/me", response=UserDTO)
async def get_me(request: HttpRequest):
    """
    Get the authenticated user's profile and points balance.
    """
    principal = request.auth
    user_dto = await get_user_dto(principal.user_id)
    if user_dto is None:
        raise InvariantViolation(f"Principal {principal.user_id} has no user record")
    return user_dto
