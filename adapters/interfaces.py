"""
어댑터 인터페이스 정의

Protocol 기반으로 정의하여 의존성 주입 및 Mock 교체 가능.
금액/수량은 반드시 Decimal 타입 사용.
"""

from typing import Protocol, runtime_checkable

from adapters.bingx.models import (
    HistoryOrder,
    KlineData,
    OrderBook,
    SpotBalance,
    SpotOrder,
    SpotOrderRequest,
    SpotOrderResponse,
    SwapBalance,
    SwapOrder,
    SwapOrderRequest,
    SwapPosition,
    SymbolInfo,
    Tickers,
)


@runtime_checkable
class ISpotClient(Protocol):
    """현물 거래 클라이언트 인터페이스"""

    # -------------------------------------------------------------------------
    # 계좌 / 주문
    # -------------------------------------------------------------------------

    async def get_balance(self) -> list[SpotBalance]:
        """현물 잔고 목록 조회"""
        ...

    async def create_order(self, order: SpotOrderRequest) -> SpotOrderResponse:
        """주문 생성

        Args:
            order: 주문 요청

        Returns:
            주문 생성 결과
        """
        ...

    async def create_batch_orders(
        self,
        orders: list[SpotOrderRequest],
        is_sync: bool,
    ) -> list[SpotOrderResponse]:
        """일괄 주문 생성"""
        ...

    async def cancel_order(self, symbol: str, order_id: int | str) -> None:
        """주문 취소"""
        ...

    async def cancel_order_by_client_order_id(self, symbol: str, client_order_id: str) -> None:
        """클라이언트 주문 ID로 주문 취소"""
        ...

    async def cancel_all_open_orders(self, symbol: str) -> None:
        """심볼의 모든 오픈 주문 취소"""
        ...

    async def get_open_orders(self, symbol: str) -> list[SpotOrder]:
        """오픈 주문 목록 조회"""
        ...

    async def get_order(self, symbol: str, order_id: int) -> SpotOrder:
        """주문 조회"""
        ...

    async def get_order_by_client_order_id(self, symbol: str, client_order_id: str) -> SpotOrder:
        """클라이언트 주문 ID로 주문 조회"""
        ...

    async def get_history_order(self, symbol: str, order_id: int) -> HistoryOrder:
        """주문 내역에서 특정 주문 조회"""
        ...

    async def history_orders(
        self,
        symbol: str,
        from_time: int = 0,
        to_time: int = 0,
        order_id: int = 0,
    ) -> list[HistoryOrder]:
        """주문 내역 조회

        Args:
            symbol: 거래 심볼
            from_time: 시작 시각 (ms, 0이면 미지정)
            to_time: 종료 시각 (ms, 0이면 미지정)
            order_id: 주문 ID (0이면 미지정)
        """
        ...

    # -------------------------------------------------------------------------
    # 시장 데이터
    # -------------------------------------------------------------------------

    async def order_book(self, symbol: str, limit: int = 0) -> OrderBook:
        """호가창 조회"""
        ...

    async def get_symbols(self, symbol: str | None = None) -> list[SymbolInfo]:
        """심볼 거래 규칙 조회"""
        ...

    async def get_historical_candles(
        self,
        symbol: str,
        interval: str,
        limit: int,
    ) -> list[KlineData]:
        """최근 캔들 조회"""
        ...

    async def get_historical_klines(
        self,
        symbol: str,
        interval: str,
        limit: int,
    ) -> list[KlineData]:
        """과거 캔들 조회 (현재 시각까지)"""
        ...

    async def get_tickers(self, symbol: str | None = None) -> Tickers:
        """심볼 -> 현재가 매핑 조회"""
        ...


@runtime_checkable
class ISwapClient(Protocol):
    """무기한 선물 거래 클라이언트 인터페이스"""

    async def create_order(self, order: SwapOrderRequest) -> SwapOrder:
        """주문 생성"""
        ...

    async def cancel_order(self, symbol: str, order_id: int | str) -> None:
        """주문 취소"""
        ...

    async def get_open_orders(self, symbol: str | None = None) -> list[SwapOrder]:
        """오픈 주문 목록 조회"""
        ...

    async def get_positions(self, symbol: str | None = None) -> list[SwapPosition]:
        """포지션 목록 조회"""
        ...

    async def get_balance(self) -> SwapBalance:
        """선물 계정 잔고 조회"""
        ...
