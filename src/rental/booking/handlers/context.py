from aws_lambda_powertools.utilities.data_classes import APIGatewayProxyEventV2

from rental.booking.domain.enum import Role
from rental.booking.domain.value_object import Caller
from rental.shared.domain.exception import UnauthorizedException
from rental.shared.domain.value_object import UserId


def caller_from_event(event: APIGatewayProxyEventV2) -> Caller:
    """Lambda オーソライザーが設定した呼び出し元を取り出す

    オーソライザーの結果はそのまま信頼する。
    """
    request_context = event.raw_event.get("requestContext") or {}
    claims = (request_context.get("authorizer") or {}).get("lambda") or {}

    caller_id = claims.get("caller_id")
    if not caller_id:
        raise UnauthorizedException()
    try:
        role = Role(claims.get("role", Role.RENTER.value))
    except ValueError as e:
        raise UnauthorizedException() from e
    return Caller(caller_id=UserId(value=caller_id), role=role)


def path_parameter(event: APIGatewayProxyEventV2, name: str) -> str:
    value = (event.path_parameters or {}).get(name)
    if not value:
        raise ValueError(f"{name} is required")
    return value
