from abc import abstractmethod
from typing import Sequence

from flight_booking.inventory.domain.entity import Flight, Seat
from flight_booking.inventory.domain.enum import FlightStatus, SeatClass, SeatStatus
from flight_booking.inventory.domain.value_object import FlightId, HoldId, Route
from flight_booking.shared.domain import IsoDateTime, Repository


class FlightRepository(Repository[Flight, FlightId]):
    """フライト・座席在庫リポジトリ

    空席数と座席ステータスの更新は commit_* メソッドのみで行う。
    commit_* は「空席数の条件付き増減」と「座席ごとの CAS」を1トランザクションで
    コミットし、条件を満たさない場合は OptimisticLockException を送出する。
    """

    @abstractmethod
    def save(self, flight: Flight) -> None:
        """フライトを新規登録する（カタログ側からの投入）"""
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, flight_id: FlightId) -> Flight | None:
        """フライトIDで検索"""
        raise NotImplementedError

    @abstractmethod
    def save_seats(self, seats: Sequence[Seat]) -> None:
        """座席を新規登録する（カタログ側からの投入）"""
        raise NotImplementedError

    @abstractmethod
    def find_seats(
        self, flight_id: FlightId, seat_class: SeatClass | None = None
    ) -> list[Seat]:
        """フライトの座席一覧（座席番号順）"""
        raise NotImplementedError

    @abstractmethod
    def search_by_route(
        self, route: Route, departure_from: IsoDateTime, departure_to: IsoDateTime
    ) -> list[Flight]:
        """路線と出発時刻の範囲で検索（出発時刻順）"""
        raise NotImplementedError

    @abstractmethod
    def find_by_status(self, status: FlightStatus) -> list[Flight]:
        """ステータスで検索"""
        raise NotImplementedError

    @abstractmethod
    def commit_seat_allocation(self, flight: Flight, seats: Sequence[Seat]) -> None:
        """座席確保をコミットする

        条件: フライトが SCHEDULED、空席数 >= len(seats)、各座席が AVAILABLE
        各座席には seat.held_by の確保IDを記録する。
        """
        raise NotImplementedError

    @abstractmethod
    def commit_seat_release(
        self, flight: Flight, seats: Sequence[Seat], hold_id: HoldId
    ) -> None:
        """座席解放をコミットする

        条件: 空席数 + len(seats) <= 総座席数、各座席が hold_id で OCCUPIED
        """
        raise NotImplementedError

    @abstractmethod
    def update_status(self, flight: Flight, expected_status: FlightStatus) -> None:
        """フライトのステータスを更新する"""
        raise NotImplementedError

    @abstractmethod
    def update_seat(self, seat: Seat, expected_status: SeatStatus) -> None:
        """座席のステータスを更新する（整備への切り替え用）"""
        raise NotImplementedError
