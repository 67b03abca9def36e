import json


def api_response(status_code: int, body: dict, headers: dict | None = None) -> dict:
    """API Gateway HTTP API のレスポンス形式を生成する

    datetime や Decimal は文字列にして返す。
    """
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json", **(headers or {})},
        "body": json.dumps(body, default=str),
    }
