from abc import ABC, abstractmethod
from typing import Generic, TypeVar

T = TypeVar("T")
ID = TypeVar("ID")


class Repository(ABC, Generic[T, ID]):
    """集約リポジトリの基底クラス

    find_* が返す集約は読み出し時点のコピーで、変更は条件付きの書き込みで反映する。
    書き込みの条件が崩れていた場合、実装は OptimisticLockException を送出する。
    """

    @abstractmethod
    def save(self, aggregate: T) -> None:
        """新しい集約を登録する（既存なら DuplicateResourceException）"""
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, id: ID) -> T | None:
        raise NotImplementedError
