from functools import wraps
from typing import Callable

from aws_lambda_powertools import Logger
from pydantic import ValidationError

from rental.booking.domain.exception import SchedulingConflictException
from rental.shared.domain.exception import (
    BusinessRuleViolationException,
    DomainException,
    DuplicateResourceException,
    InfrastructureException,
    OptimisticLockException,
    ResourceNotFoundException,
    UnauthorizedException,
    ValidationException,
)
from rental.shared.utils import api_response

logger = Logger()


def error_response(error: Exception) -> dict:
    """例外を HTTP レスポンスに変換する"""
    if isinstance(error, ValidationError):
        details = [
            {"field": ".".join(str(loc) for loc in e["loc"]), "message": e["msg"]}
            for e in error.errors()
        ]
        return api_response(400, {"message": "Invalid request", "errors": details})
    if isinstance(error, (ValidationException, ValueError)):
        return api_response(400, {"message": str(error)})
    if isinstance(error, SchedulingConflictException):
        body: dict = {"message": str(error)}
        if error.conflict_ends_at is not None:
            body["conflict_ends_at"] = error.conflict_ends_at.isoformat()
        return api_response(409, body)
    if isinstance(
        error,
        (
            BusinessRuleViolationException,
            DuplicateResourceException,
            OptimisticLockException,
        ),
    ):
        return api_response(409, {"message": str(error)})
    if isinstance(error, UnauthorizedException):
        return api_response(403, {"message": str(error)})
    if isinstance(error, ResourceNotFoundException):
        return api_response(404, {"message": str(error)})
    if isinstance(error, DomainException):
        return api_response(400, {"message": str(error)})
    if isinstance(error, InfrastructureException):
        return api_response(
            503,
            {"message": "Service temporarily unavailable"},
            headers={"Retry-After": "1"},
        )
    return api_response(500, {"message": "Internal server error"})


def api_errors(handler: Callable[..., dict]) -> Callable[..., dict]:
    """ハンドラ内の例外を HTTP レスポンスに変換するデコレータ"""

    @wraps(handler)
    def wrapper(event, context) -> dict:
        try:
            return handler(event, context)
        except (DomainException, ValidationError, ValueError) as e:
            logger.info("Request rejected", extra={"reason": str(e)})
            return error_response(e)
        except InfrastructureException as e:
            logger.warning("Persistence unavailable", extra={"reason": str(e)})
            return error_response(e)
        except Exception as e:
            logger.exception("Unhandled error")
            return error_response(e)

    return wrapper
