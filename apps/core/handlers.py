"""
Exception handlers for the NinjaAPI instance.

Authentication failures become 401 with a stable UNAUTHENTICATED code.
Internal failures are logged and answered with a generic body. Store
errors that escape a service undecorated get the same retryable 503 as
TransientStoreFailure.
"""
import logging

from django.db import InterfaceError, OperationalError
from django.http import HttpRequest
from ninja import NinjaAPI
from ninja.errors import AuthenticationError

from .exceptions import InvariantViolation, TransientStoreFailure, Unauthenticated

logger = logging.getLogger(__name__)


def register_exception_handlers(api: NinjaAPI) -> None:

    def on_unauthenticated(request: HttpRequest, exc: Exception):
        return api.create_response(
            request,
            {"detail": "User is not authenticated", "code": Unauthenticated.code},
            status=Unauthenticated.status,
        )

    def on_invariant_violation(request: HttpRequest, exc: InvariantViolation):
        logger.error(f"Invariant violation on {request.method} {request.path}: {exc}")
        return api.create_response(
            request,
            {"detail": "Internal error", "code": InvariantViolation.code},
            status=InvariantViolation.status,
        )

    def on_transient_store_failure(request: HttpRequest, exc: Exception):
        if not isinstance(exc, TransientStoreFailure):
            logger.warning(f"Store failure on {request.method} {request.path}: {exc}")
        return api.create_response(
            request,
            {"detail": "Service temporarily unavailable, retry the request", "code": TransientStoreFailure.code},
            status=TransientStoreFailure.status,
        )

    api.add_exception_handler(AuthenticationError, on_unauthenticated)
    api.add_exception_handler(Unauthenticated, on_unauthenticated)
    api.add_exception_handler(InvariantViolation, on_invariant_violation)
    api.add_exception_handler(TransientStoreFailure, on_transient_store_failure)
    api.add_exception_handler(OperationalError, on_transient_store_failure)
    api.add_exception_handler(InterfaceError, on_transient_store_failure)
