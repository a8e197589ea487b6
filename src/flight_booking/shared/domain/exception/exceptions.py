class DomainException(Exception):
    """ドメイン層で発生する基底例外"""

    pass


class ResourceNotFoundException(DomainException):
    """リソースが見つからない場合"""

    pass


class BusinessRuleViolationException(DomainException):
    """ビジネスルールに違反した場合"""

    pass


class InvalidStateException(BusinessRuleViolationException):
    """ライフサイクル上許可されていない状態で操作された場合"""

    pass


class InvalidTransitionException(InvalidStateException):
    """状態遷移表にない遷移が要求された場合"""

    pass


class InsufficientCapacityException(BusinessRuleViolationException):
    """座席の確保要求を満たせない場合"""

    pass


class ConflictException(DomainException):
    """並行更新・重複などで操作が競合した場合"""

    pass


class DuplicateResourceException(ConflictException):
    """リソースの重複エラー（条件付き書き込みの失敗時）"""

    pass


class OptimisticLockException(ConflictException):
    """楽観ロックの競合エラー（ステータスが期待値と異なる場合）"""

    pass


class ValidationException(DomainException, ValueError):
    """入力値が不正な場合（正でない人数、未知の座席クラスなど）"""

    pass


class CompensationFailedException(DomainException):
    """処理の失敗後、補償処理まで失敗した場合

    元の失敗と補償処理の失敗の両方を保持する。
    """

    def __init__(self, original: Exception, compensation_errors: list[Exception]) -> None:
        self.original = original
        self.compensation_errors = list(compensation_errors)
        details = "; ".join(
            f"{type(error).__name__}: {error}" for error in self.compensation_errors
        )
        super().__init__(
            f"{type(original).__name__}: {original} (compensation failed: {details})"
        )
