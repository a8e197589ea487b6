from typing import Callable

from flight_booking.reservation.domain.enum import ReservationState


class ReservationSaga:
    """予約処理のサガ

    各ステップの完了時に状態を進め、そのステップを取り消す補償処理を登録する。
    失敗時は登録の逆順に補償処理を実行する。
    """

    def __init__(self) -> None:
        self._state = ReservationState.REQUESTED
        self._compensations: list[tuple[str, Callable[[], object]]] = []

    @property
    def state(self) -> ReservationState:
        return self._state

    @property
    def has_compensations(self) -> bool:
        return bool(self._compensations)

    def advance(
        self,
        target: ReservationState,
        compensation: Callable[[], object] | None = None,
        name: str = "",
        supersede: bool = False,
    ) -> None:
        """状態を進め、補償処理があれば登録する

        supersede=True の場合は登録済みの補償処理を捨て、新しい補償処理だけを残す。
        新しい補償処理が先行ステップの取り消しを含むときに使う。
        """
        self._state.ensure_can_transition_to(target)
        self._state = target
        if supersede:
            self._compensations.clear()
        if compensation is not None:
            self._compensations.append((name or target.value, compensation))

    def compensate(self) -> list[Exception]:
        """補償処理を逆順にすべて実行し、失敗した補償処理の例外を返す

        1つが失敗しても残りの補償処理は実行する。
        """
        errors: list[Exception] = []
        while self._compensations:
            name, compensation = self._compensations.pop()
            try:
                compensation()
            except Exception as e:
                e.add_note(f"compensation step: {name}")
                errors.append(e)
        if not self._state.is_terminal:
            self._state = ReservationState.RELEASED
        return errors
