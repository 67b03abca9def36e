import json
import os
from dataclasses import dataclass

import pytest

# ハンドラはインポート時にクライアントを生成するため、先に環境変数を設定する
os.environ.setdefault("AWS_DEFAULT_REGION", "ap-south-1")
os.environ.setdefault("TABLE_NAME", "bookings")
os.environ.setdefault("VEHICLE_TABLE_NAME", "vehicles")


@dataclass
class FakeLambdaContext:
    function_name: str = "booking-handler"
    memory_limit_in_mb: int = 128
    invoked_function_arn: str = (
        "arn:aws:lambda:ap-south-1:123456789012:function:booking-handler"
    )
    aws_request_id: str = "request-1"


@pytest.fixture
def lambda_context():
    return FakeLambdaContext()


@pytest.fixture
def make_api_event():
    """API Gateway HTTP API (v2) のイベントを生成する Factory fixture"""

    def _factory(
        body: dict | None = None,
        caller_id: str | None = "renter-1",
        role: str = "renter",
        path_parameters: dict | None = None,
        query: dict | None = None,
    ) -> dict:
        request_context: dict = {
            "accountId": "123456789012",
            "apiId": "api-id",
            "domainName": "api.example.com",
            "domainPrefix": "api",
            "http": {
                "method": "POST",
                "path": "/bookings",
                "protocol": "HTTP/1.1",
                "sourceIp": "192.0.2.1",
                "userAgent": "pytest",
            },
            "requestId": "request-1",
            "routeKey": "POST /bookings",
            "stage": "$default",
            "time": "01/Nov/2026:09:00:00 +0000",
            "timeEpoch": 1793437200000,
        }
        if caller_id is not None:
            request_context["authorizer"] = {
                "lambda": {"caller_id": caller_id, "role": role}
            }

        event: dict = {
            "version": "2.0",
            "routeKey": "POST /bookings",
            "rawPath": "/bookings",
            "rawQueryString": "",
            "headers": {"content-type": "application/json"},
            "requestContext": request_context,
            "isBase64Encoded": False,
        }
        if body is not None:
            event["body"] = json.dumps(body)
        if path_parameters is not None:
            event["pathParameters"] = path_parameters
        if query is not None:
            event["queryStringParameters"] = query
        return event

    return _factory
