"""
Error taxonomy shared by all apps.

Business-rule outcomes (not found, insufficient balance, already completed)
are returned as ActionResultDTO values by the services. The exceptions below
are reserved for conditions that abort the request.
"""


class ServiceError(Exception):
    """Base class for errors that abort a request."""
    code = "INTERNAL_ERROR"
    status = 500


class Unauthenticated(ServiceError):
    """Missing, invalid or expired credential, or no identity claim."""
    code = "UNAUTHENTICATED"
    status = 401


class InvariantViolation(ServiceError):
    """
    Internal consistency failure, e.g. a resolved principal without a
    backing user record. Never shown to the caller in detail.
    """
    code = "INTERNAL_ERROR"
    status = 500


class TransientStoreFailure(ServiceError):
    """The database was unreachable or an operation timed out. Safe to retry."""
    code = "TRANSIENT_STORE_FAILURE"
    status = 503


class ResultCode:
    """Machine-readable codes carried on negative ActionResultDTO values."""
    NOT_FOUND = "NOT_FOUND"
    INSUFFICIENT_BALANCE = "INSUFFICIENT_BALANCE"
    ALREADY_COMPLETED = "ALREADY_COMPLETED"
