"""
Services for Identity app.

resolve_principal() turns a bearer credential into a Principal, provisioning
the backing User on first sight of an email.
"""
import logging
from typing import Optional, Tuple
from uuid import UUID

from django.conf import settings

from apps.core.decorators import translate_store_errors
from apps.core.exceptions import Unauthenticated
from .models import User
from .dtos import UserDTO, Principal
from .jwt_auth import decode_token, get_email_claim

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


async def get_or_create_user(email: str) -> Tuple[User, bool]:
    """
    Look up a user by email, creating it with a zero balance if missing.

    The unique constraint on email makes this safe under concurrent first
    logins: the losing insert fails and get_or_create re-reads the winner.
    """
    user, created = await User.objects.aget_or_create(email=normalize_email(email))
    if created:
        logger.info(f"Provisioned user {user.id} for {user.email}")
    return user, created


async def get_user_dto(user_id: UUID) -> Optional[UserDTO]:
    user = await User.objects.filter(id=user_id).afirst()
    if user is None:
        return None
    return UserDTO(id=user.id, email=user.email, points=user.points)


@translate_store_errors
async def resolve_principal(credential: Optional[str]) -> Principal:
    """
    Resolve the caller behind a credential.

    Raises:
        Unauthenticated: credential missing, invalid, expired, malformed,
            or without an email claim. All of these look the same to the
            caller.
        TransientStoreFailure: the user lookup could not reach the store.
    """
    if settings.AUTH_BYPASS:
        user, _ = await get_or_create_user(settings.AUTH_BYPASS_OPERATOR_EMAIL)
        return Principal(user_id=user.id, email=user.email, is_bypass=True)

    if not credential:
        raise Unauthenticated("Missing credential")

    payload = decode_token(credential)
    if payload is None:
        raise Unauthenticated("Invalid or expired credential")

    email = get_email_claim(payload)
    if email is None:
        raise Unauthenticated("Credential has no email claim")

    user, _ = await get_or_create_user(email)
    return Principal(user_id=user.id, email=user.email, claims=payload)
