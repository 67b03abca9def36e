class DomainException(Exception):
    """ドメイン層で発生する基底例外"""

    pass


class ValidationException(DomainException):
    """入力値が不正な場合（呼び出し側の誤り。自動リトライしない）"""

    pass


class ResourceNotFoundException(DomainException):
    """リソースが見つからない場合"""

    pass


class UnauthorizedException(DomainException):
    """操作の権限がない場合

    リソースの存在有無を漏らさないよう、メッセージは固定にする。
    """

    def __init__(self, message: str = "Not allowed to perform this operation") -> None:
        super().__init__(message)


class BusinessRuleViolationException(DomainException):
    """ビジネスルールに違反した場合"""

    pass


class DuplicateResourceException(DomainException):
    """リソースの重複エラー（条件付き書き込みの失敗時）"""

    pass


class OptimisticLockException(DomainException):
    """楽観ロックの競合エラー（ステータスやバージョンが期待値と異なる場合）"""

    pass


class InfrastructureException(Exception):
    """永続化層など基盤側で発生する基底例外"""

    retryable: bool = False


class PersistenceUnavailableException(InfrastructureException):
    """永続化層が利用できない、またはタイムアウトした場合（リトライ可能）"""

    retryable = True
