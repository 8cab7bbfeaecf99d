import logging
from functools import wraps
from typing import Callable

from django.db import InterfaceError, OperationalError

from .exceptions import TransientStoreFailure

logger = logging.getLogger(__name__)


def translate_store_errors(func: Callable):
    """
    Decorator for async service functions that talk to the database.

    Connection loss and timeouts are re-raised as TransientStoreFailure so the
    API layer can answer with a retryable error. Every mutating service keeps
    its writes in a single transaction, so a failure leaves nothing behind.

    Usage:
        @translate_store_errors
        async def buy_reward(reward_id, principal):
            ...
    """
    @wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except (OperationalError, InterfaceError) as e:
            logger.warning(f"Store failure in {func.__qualname__}: {e}")
            raise TransientStoreFailure("Store temporarily unavailable") from e
    return wrapper
