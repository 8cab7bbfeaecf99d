"""
Bearer authentication for the ninja API.

Every route goes through PrincipalAuth. A rejected credential yields no
principal, and ninja answers with its AuthenticationError (401).
"""
import logging
from typing import Optional

from django.http import HttpRequest
from ninja.security import HttpBearer

from apps.core.exceptions import Unauthenticated
from .dtos import Principal
from .jwt_auth import extract_credential
from .services import resolve_principal

logger = logging.getLogger(__name__)


class PrincipalAuth(HttpBearer):
    """
    Resolves request.auth to a Principal.

    Unlike the stock HttpBearer, a bare token without the 'Bearer ' prefix
    is accepted too, and a missing header still reaches the resolver so the
    development bypass can apply.
    """

    async def __call__(self, request: HttpRequest) -> Optional[Principal]:
        credential = extract_credential(request.headers.get(self.header))
        return await self.authenticate(request, credential)

    async def authenticate(self, request: HttpRequest, token: str) -> Optional[Principal]:
        try:
            return await resolve_principal(token)
        except Unauthenticated as e:
            logger.info(f"Rejected credential on {request.method} {request.path}: {e}")
            return None
