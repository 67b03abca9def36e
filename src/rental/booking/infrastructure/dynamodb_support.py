from contextlib import contextmanager
from typing import Iterator

from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from rental.shared.domain.exception import PersistenceUnavailableException

# 時間をおいて再実行すれば成功しうるエラーコード
RETRYABLE_ERROR_CODES = frozenset(
    {
        "InternalServerError",
        "ProvisionedThroughputExceededException",
        "RequestLimitExceeded",
        "ServiceUnavailable",
        "ThrottlingException",
        "TransactionInProgressException",
    }
)


def client_config(timeout_seconds: float) -> Config:
    """呼び出し元の期限を超えて待たないようにタイムアウトを設定する"""
    return Config(
        connect_timeout=timeout_seconds,
        read_timeout=timeout_seconds,
        retries={"max_attempts": 2, "mode": "standard"},
    )


def error_code(error: ClientError) -> str:
    return error.response.get("Error", {}).get("Code", "")


@contextmanager
def translate_infrastructure_errors(operation: str) -> Iterator[None]:
    """タイムアウト・スロットリングをリトライ可能な基盤エラーに変換する

    条件付き書き込みの失敗など、それ以外の ClientError はそのまま送出する。
    """
    try:
        yield
    except BotoCoreError as e:
        raise PersistenceUnavailableException(
            f"DynamoDB {operation} failed: {e}"
        ) from e
    except ClientError as e:
        if error_code(e) in RETRYABLE_ERROR_CODES:
            raise PersistenceUnavailableException(
                f"DynamoDB {operation} failed: {error_code(e)}"
            ) from e
        raise
