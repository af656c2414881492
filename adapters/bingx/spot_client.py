"""
BingX 현물(Spot) API 클라이언트

잔고, 주문, 주문 내역, 호가, 심볼, 캔들, 시세 조회.
각 메서드: 파라미터 구성 → 전송 → envelope 에러 확인 → payload 추출.
"""

import json
import logging
from typing import Any

from adapters.bingx.envelope import passthrough
from adapters.bingx.errors import ExchangeError, OrderNotFoundError
from adapters.bingx.models import (
    HistoryOrder,
    KlineData,
    OrderBook,
    SpotBalance,
    SpotOrder,
    SpotOrderRequest,
    SpotOrderResponse,
    SymbolInfo,
    TickerData,
    Tickers,
    parse_kline_data,
)
from adapters.bingx.params import Params
from adapters.bingx.rest_client import BingXRestClient
from core.constants import SpotPaths
from core.utils.timezone import now_ms

logger = logging.getLogger(__name__)


# -------------------------------------------------------------------------
# payload 파서
# -------------------------------------------------------------------------


def _parse_balances(data: Any) -> list[SpotBalance]:
    if not data:
        return []
    return [SpotBalance.from_api(item) for item in data.get("balances") or []]


def _parse_order_responses(data: Any) -> list[SpotOrderResponse]:
    return [SpotOrderResponse.from_api(item) for item in (data or {}).get("orders") or []]


def _parse_orders(data: Any) -> list[SpotOrder]:
    return [SpotOrder.from_api(item) for item in (data or {}).get("orders") or []]


def _parse_history_orders(data: Any) -> list[HistoryOrder]:
    return [HistoryOrder.from_api(item) for item in (data or {}).get("orders") or []]


def _parse_symbols(data: Any) -> list[SymbolInfo]:
    return [SymbolInfo.from_api(item) for item in (data or {}).get("symbols") or []]


def _parse_tickers(data: Any) -> Tickers:
    result: Tickers = {}
    for item in data or []:
        ticker = TickerData.from_api(item)
        result[ticker.symbol] = ticker.last_price
    return result


def _kline_parser(interval: str):
    def parse_klines(data: Any) -> list[KlineData]:
        return [parse_kline_data(raw, interval) for raw in data or []]

    return parse_klines


class SpotClient:
    """BingX 현물 API 클라이언트

    Args:
        client: 공유 전송 계층 (BingXRestClient)
    """

    def __init__(self, client: BingXRestClient):
        self.client = client

    # -------------------------------------------------------------------------
    # 계좌 조회
    # -------------------------------------------------------------------------

    async def get_balance(self) -> list[SpotBalance]:
        """현물 잔고 목록 조회

        Returns:
            자산별 잔고 (응답 data가 비어 있으면 빈 목록)
        """
        params: Params = {"timestamp": now_ms()}

        response = await self.client.get(SpotPaths.ACCOUNT_BALANCE, params, _parse_balances)
        response.raise_for_error()
        return response.data or []

    # -------------------------------------------------------------------------
    # 주문 실행
    # -------------------------------------------------------------------------

    async def create_order(self, order: SpotOrderRequest) -> SpotOrderResponse:
        """주문 생성"""
        response = await self.client.post(
            SpotPaths.CREATE_ORDER,
            order.to_params(),
            SpotOrderResponse.from_api,
        )
        response.raise_for_error()

        logger.info(
            "Spot order created",
            extra={
                "symbol": order.symbol,
                "side": order.side,
                "order_id": response.data.order_id,
            },
        )
        return response.data

    async def create_batch_orders(
        self,
        orders: list[SpotOrderRequest],
        is_sync: bool,
    ) -> list[SpotOrderResponse]:
        """일괄 주문 생성

        Args:
            orders: 주문 요청 목록 (JSON 배열로 직렬화되어 data 파라미터로 전송)
            is_sync: 순차 처리 여부
        """
        orders_json = json.dumps(
            [order.to_json_dict() for order in orders],
            separators=(",", ":"),
        )
        params: Params = {
            "data": orders_json,
            "sync": is_sync,
        }

        response = await self.client.post(
            SpotPaths.CREATE_ORDERS_BATCH,
            params,
            _parse_order_responses,
        )
        response.raise_for_error()
        return response.data

    async def cancel_order(self, symbol: str, order_id: int | str) -> None:
        """주문 취소 (거래소 주문 ID)"""
        params: Params = {
            "symbol": symbol,
            "orderId": order_id,
        }

        response = await self.client.post(SpotPaths.CANCEL_ORDER, params, passthrough)
        response.raise_for_error()
        logger.info("Spot order cancelled", extra={"symbol": symbol, "order_id": order_id})

    async def cancel_order_by_client_order_id(
        self,
        symbol: str,
        client_order_id: str,
    ) -> None:
        """주문 취소 (클라이언트 주문 ID)"""
        params: Params = {
            "symbol": symbol,
            "clientOrderID": client_order_id,
        }

        response = await self.client.post(SpotPaths.CANCEL_ORDER, params, passthrough)
        response.raise_for_error()

    async def cancel_all_open_orders(self, symbol: str) -> None:
        """심볼의 모든 오픈 주문 취소"""
        params: Params = {"symbol": symbol}

        response = await self.client.post(SpotPaths.CANCEL_ALL_ORDERS, params, passthrough)
        response.raise_for_error()

    # -------------------------------------------------------------------------
    # 주문 조회
    # -------------------------------------------------------------------------

    async def get_open_orders(self, symbol: str) -> list[SpotOrder]:
        """오픈 주문 목록 조회"""
        params: Params = {"symbol": symbol}

        response = await self.client.get(SpotPaths.GET_OPEN_ORDERS, params, _parse_orders)
        response.raise_for_error()
        return response.data

    async def get_order(self, symbol: str, order_id: int) -> SpotOrder:
        """주문 조회 (거래소 주문 ID)"""
        return await self._get_order_data({
            "symbol": symbol,
            "orderId": order_id,
            "timestamp": now_ms(),
        })

    async def get_order_by_client_order_id(
        self,
        symbol: str,
        client_order_id: str,
    ) -> SpotOrder:
        """주문 조회 (클라이언트 주문 ID)"""
        return await self._get_order_data({
            "symbol": symbol,
            "clientOrderID": client_order_id,
            "timestamp": now_ms(),
        })

    async def _get_order_data(self, params: Params) -> SpotOrder:
        response = await self.client.get(SpotPaths.GET_ORDER_DATA, params, SpotOrder.from_api)
        response.raise_for_error()
        return response.data

    async def get_history_order(self, symbol: str, order_id: int) -> HistoryOrder:
        """주문 내역에서 특정 주문 조회

        Raises:
            OrderNotFoundError: 내역에 해당 주문이 없음
        """
        orders = await self.history_orders(symbol, order_id=order_id)

        for order in orders:
            if order.order_id == order_id:
                return order
        raise OrderNotFoundError(symbol=symbol, order_id=order_id)

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
        params: Params = {
            "symbol": symbol,
            "timestamp": now_ms(),
        }

        if order_id > 0:
            params["orderId"] = order_id
        if from_time > 0:
            params["startTime"] = from_time
        if to_time > 0:
            params["endTime"] = to_time

        response = await self.client.get(
            SpotPaths.GET_ORDERS_HISTORY,
            params,
            _parse_history_orders,
        )
        response.raise_for_error()
        return response.data

    # -------------------------------------------------------------------------
    # 시장 데이터
    # -------------------------------------------------------------------------

    async def order_book(self, symbol: str, limit: int = 0) -> OrderBook:
        """호가창 조회 (limit 0이면 거래소 기본값)"""
        params: Params = {
            "symbol": symbol,
            "timestamp": now_ms(),
        }
        if limit > 0:
            params["limit"] = limit

        response = await self.client.get(SpotPaths.GET_ORDER_BOOK, params, OrderBook.from_api)
        response.raise_for_error()
        return response.data

    async def get_symbols(self, symbol: str | None = None) -> list[SymbolInfo]:
        """심볼 거래 규칙 조회 (symbol 미지정 시 전체)"""
        params: Params = {"timestamp": now_ms()}
        if symbol:
            params["symbol"] = symbol

        response = await self.client.get(SpotPaths.GET_SYMBOLS, params, _parse_symbols)
        response.raise_for_error()
        return response.data

    async def get_historical_candles(
        self,
        symbol: str,
        interval: str,
        limit: int,
    ) -> list[KlineData]:
        """최근 캔들 조회"""
        params: Params = {
            "symbol": symbol,
            "interval": interval,
            "limit": limit,
        }

        response = await self.client.get(
            SpotPaths.GET_CANDLES_HISTORY,
            params,
            _kline_parser(interval),
        )
        response.raise_for_error()
        return response.data

    async def get_historical_klines(
        self,
        symbol: str,
        interval: str,
        limit: int,
    ) -> list[KlineData]:
        """과거 캔들 조회 (현재 시각까지)

        이 엔드포인트는 code 0이어도 msg로 실패를 알리는 경우가 있음.

        Raises:
            ExchangeError: code != 0 또는 msg가 비어 있지 않음
        """
        params: Params = {
            "symbol": symbol,
            "interval": interval,
            "limit": limit,
            "endTime": now_ms(),
        }

        response = await self.client.get(
            SpotPaths.GET_KLINES_HISTORY,
            params,
            _kline_parser(interval),
        )
        response.raise_for_error()
        if response.msg:
            raise ExchangeError(code=response.code, message=response.msg)
        return response.data

    async def get_tickers(self, symbol: str | None = None) -> Tickers:
        """24시간 시세 조회

        Returns:
            심볼 -> 현재가 매핑
        """
        params: Params = {"timestamp": now_ms()}
        if symbol:
            params["symbol"] = symbol

        response = await self.client.get(SpotPaths.GET_TICKERS, params, _parse_tickers)
        response.raise_for_error()
        return response.data
