"""
BingX 어댑터 테스트 픽스처

HTTP 계층은 _get_client 패치로 AsyncMock 교체,
응답은 실제 httpx.Response 객체 사용.
"""

import json
from typing import Any, Callable
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from adapters.bingx.rest_client import BingXRestClient
from adapters.bingx.spot_client import SpotClient
from adapters.bingx.swap_client import SwapClient


FIXED_TIMESTAMP = 1700000000000


# -------------------------------------------------------------------------
# 클라이언트 픽스처
# -------------------------------------------------------------------------

@pytest.fixture
def rest_client() -> BingXRestClient:
    """테스트용 전송 클라이언트 (타임스탬프 고정)"""
    client = BingXRestClient(
        base_url="https://open-api.bingx.com",
        api_key="test_api_key",
        api_secret="test_secret_key",
    )
    client._get_timestamp = lambda: FIXED_TIMESTAMP  # type: ignore[method-assign]
    return client


@pytest.fixture
def mock_http(rest_client: BingXRestClient):
    """HTTP 클라이언트 모킹

    request.return_value / side_effect로 응답 지정.
    """
    mock_http_client = AsyncMock()
    with patch.object(rest_client, "_get_client", return_value=mock_http_client):
        yield mock_http_client


@pytest.fixture
def spot_client(rest_client: BingXRestClient) -> SpotClient:
    """현물 클라이언트"""
    return SpotClient(rest_client)


@pytest.fixture
def swap_client(rest_client: BingXRestClient) -> SwapClient:
    """선물 클라이언트"""
    return SwapClient(rest_client)


@pytest.fixture
def respond(mock_http: AsyncMock) -> Callable[..., None]:
    """envelope 응답 설정 헬퍼

    사용: respond({"code": 0, "msg": "", "data": {...}})
    """
    def _respond(payload: Any, status_code: int = 200) -> None:
        mock_http.request.return_value = httpx.Response(
            status_code,
            content=json.dumps(payload).encode("utf-8"),
        )

    return _respond


def ok(data: Any) -> dict[str, Any]:
    """성공 envelope"""
    return {"code": 0, "msg": "", "data": data}


@pytest.fixture
def success() -> Callable[[Any], dict[str, Any]]:
    """성공 envelope 생성 함수"""
    return ok


# -------------------------------------------------------------------------
# BingX API 응답 픽스처 (data 필드)
# -------------------------------------------------------------------------

@pytest.fixture
def bingx_spot_order_response() -> dict:
    """POST /openApi/spot/v1/trade/order 응답 data"""
    return {
        "symbol": "BTC-USDT",
        "orderId": 1736012449498123456,
        "transactTime": 1700000000123,
        "price": "35000.5",
        "origQty": "0.002",
        "executedQty": "0",
        "cummulativeQuoteQty": "0",
        "status": "PENDING",
        "type": "LIMIT",
        "side": "BUY",
        "clientOrderID": "bx-test-001",
    }


@pytest.fixture
def bingx_spot_order() -> dict:
    """GET /openApi/spot/v1/trade/query 응답 data"""
    return {
        "symbol": "BTC-USDT",
        "orderId": 1736012449498123456,
        "price": "35000.5",
        "origQty": "0.002",
        "executedQty": "0.001",
        "cummulativeQuoteQty": "35.0005",
        "status": "PARTIALLY_FILLED",
        "type": "LIMIT",
        "side": "BUY",
        "time": 1700000000123,
        "updateTime": 1700000005123,
        "origQuoteOrderQty": "0",
        "clientOrderID": "bx-test-001",
    }


@pytest.fixture
def bingx_history_order(bingx_spot_order: dict) -> dict:
    """GET /openApi/spot/v1/trade/historyOrders 응답 항목"""
    return {
        **bingx_spot_order,
        "status": "FILLED",
        "executedQty": "0.002",
        "cummulativeQuoteQty": "70.001",
        "fee": "-0.07",
        "feeAsset": "USDT",
        "avgPrice": "35000.5",
    }


@pytest.fixture
def bingx_symbol() -> dict:
    """GET /openApi/spot/v1/common/symbols 응답 항목"""
    return {
        "symbol": "BTC-USDT",
        "minQty": "0.0001",
        "maxQty": "100",
        "minNotional": "5",
        "maxNotional": "1000000",
        "status": 1,
        "tickSize": "0.01",
        "stepSize": "0.00001",
    }


@pytest.fixture
def bingx_kline_raw() -> list:
    """캔들 원시 배열"""
    return [1649404800000, 44147.2, 44337.1, 44072.8, 44229.8, 11.24, 1649408399999, 497186.69]


@pytest.fixture
def bingx_swap_order() -> dict:
    """POST /openApi/swap/v2/trade/order 응답 data.order"""
    return {
        "symbol": "BTC-USDT",
        "orderId": 1735950529123455488,
        "side": "BUY",
        "positionSide": "LONG",
        "type": "LIMIT",
        "clientOrderID": "bx-swap-001",
        "price": "35000",
        "quantity": "0.01",
    }


@pytest.fixture
def bingx_swap_position() -> dict:
    """GET /openApi/swap/v2/user/positions 응답 항목"""
    return {
        "symbol": "BTC-USDT",
        "positionId": "1735950529123455489",
        "positionSide": "LONG",
        "isolated": True,
        "positionAmt": "0.01",
        "availableAmt": "0.01",
        "unrealizedProfit": "1.25",
        "avgPrice": "35000",
        "leverage": 10,
    }


@pytest.fixture
def bingx_swap_balance() -> dict:
    """GET /openApi/swap/v2/user/balance 응답 data.balance"""
    return {
        "asset": "USDT",
        "balance": "1000.5",
        "equity": "1001.75",
        "unrealizedProfit": "1.25",
        "availableMargin": "965.5",
        "usedMargin": "35",
    }
