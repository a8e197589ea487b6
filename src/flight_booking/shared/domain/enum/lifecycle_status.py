from __future__ import annotations

from enum import Enum
from typing import Mapping

from flight_booking.shared.domain.exception import InvalidTransitionException


class LifecycleStatus(str, Enum):
    """遷移表を持つステータス Enum の基底クラス

    サブクラスは transitions() で「現在の状態 -> 遷移可能な状態の集合」を返す。
    遷移先を持たない状態は終端状態とみなす。
    """

    @classmethod
    def transitions(cls) -> Mapping[LifecycleStatus, frozenset]:
        raise NotImplementedError

    @property
    def is_terminal(self) -> bool:
        return not self.transitions().get(self)

    def can_transition_to(self, target: LifecycleStatus) -> bool:
        return target in self.transitions().get(self, frozenset())

    def ensure_can_transition_to(self, target: LifecycleStatus) -> None:
        """遷移表にない遷移なら InvalidTransitionException を送出する"""
        if not self.can_transition_to(target):
            raise InvalidTransitionException(
                f"{type(self).__name__}: {self.value} -> {target.value} is not allowed"
            )
