"""
BingX 무기한 선물(Swap) API 클라이언트

주문 생성/취소, 오픈 주문, 포지션, 잔고 조회.
현물 클라이언트와 동일한 envelope 파이프라인 사용.
"""

import logging
from typing import Any

from adapters.bingx.envelope import passthrough
from adapters.bingx.models import SwapBalance, SwapOrder, SwapOrderRequest, SwapPosition
from adapters.bingx.params import Params
from adapters.bingx.rest_client import BingXRestClient
from core.constants import SwapPaths
from core.utils.timezone import now_ms

logger = logging.getLogger(__name__)


def _parse_order(data: Any) -> SwapOrder:
    return SwapOrder.from_api(data["order"])


def _parse_orders(data: Any) -> list[SwapOrder]:
    return [SwapOrder.from_api(item) for item in (data or {}).get("orders") or []]


def _parse_positions(data: Any) -> list[SwapPosition]:
    return [SwapPosition.from_api(item) for item in data or []]


def _parse_balance(data: Any) -> SwapBalance:
    return SwapBalance.from_api(data["balance"])


class SwapClient:
    """BingX 무기한 선물 API 클라이언트

    Args:
        client: 공유 전송 계층 (BingXRestClient)
    """

    def __init__(self, client: BingXRestClient):
        self.client = client

    async def create_order(self, order: SwapOrderRequest) -> SwapOrder:
        """주문 생성"""
        response = await self.client.post(SwapPaths.ORDER, order.to_params(), _parse_order)
        response.raise_for_error()

        logger.info(
            "Swap order created",
            extra={
                "symbol": order.symbol,
                "side": order.side,
                "position_side": order.position_side,
                "order_id": response.data.order_id,
            },
        )
        return response.data

    async def cancel_order(self, symbol: str, order_id: int | str) -> None:
        """주문 취소"""
        params: Params = {
            "symbol": symbol,
            "orderId": order_id,
            "timestamp": now_ms(),
        }

        response = await self.client.delete(SwapPaths.ORDER, params, passthrough)
        response.raise_for_error()
        logger.info("Swap order cancelled", extra={"symbol": symbol, "order_id": order_id})

    async def get_open_orders(self, symbol: str | None = None) -> list[SwapOrder]:
        """오픈 주문 목록 조회 (symbol 미지정 시 전체)"""
        params: Params = {"timestamp": now_ms()}
        if symbol:
            params["symbol"] = symbol

        response = await self.client.get(SwapPaths.GET_OPEN_ORDERS, params, _parse_orders)
        response.raise_for_error()
        return response.data

    async def get_positions(self, symbol: str | None = None) -> list[SwapPosition]:
        """포지션 목록 조회 (symbol 미지정 시 전체)"""
        params: Params = {"timestamp": now_ms()}
        if symbol:
            params["symbol"] = symbol

        response = await self.client.get(SwapPaths.GET_POSITIONS, params, _parse_positions)
        response.raise_for_error()
        return response.data

    async def get_balance(self) -> SwapBalance:
        """선물 계정 잔고 조회"""
        params: Params = {"timestamp": now_ms()}

        response = await self.client.get(SwapPaths.GET_BALANCE, params, _parse_balance)
        response.raise_for_error()
        return response.data
