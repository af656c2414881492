"""
BingX 어댑터

BingX 현물/무기한 선물 REST API 연동을 담당.
서명된 요청 전송, envelope 디코딩, 에러 분류.
"""

from adapters.bingx.rest_client import BingXRestClient
from adapters.bingx.spot_client import SpotClient
from adapters.bingx.swap_client import SwapClient
from adapters.bingx.envelope import Envelope, decode_envelope
from adapters.bingx.errors import (
    BingXError,
    TransportError,
    HTTPError,
    DecodeError,
    ExchangeError,
    OrderNotFoundError,
)
from adapters.bingx.models import (
    SpotBalance,
    SpotOrderRequest,
    SpotOrderResponse,
    SpotOrder,
    HistoryOrder,
    OrderBook,
    OrderBookLevel,
    SymbolInfo,
    KlineData,
    TickerData,
    Tickers,
    SwapOrderRequest,
    SwapOrder,
    SwapPosition,
    SwapBalance,
    parse_kline_data,
)

__all__ = [
    # Clients
    "BingXRestClient",
    "SpotClient",
    "SwapClient",
    # Envelope
    "Envelope",
    "decode_envelope",
    # Errors
    "BingXError",
    "TransportError",
    "HTTPError",
    "DecodeError",
    "ExchangeError",
    "OrderNotFoundError",
    # Models
    "SpotBalance",
    "SpotOrderRequest",
    "SpotOrderResponse",
    "SpotOrder",
    "HistoryOrder",
    "OrderBook",
    "OrderBookLevel",
    "SymbolInfo",
    "KlineData",
    "TickerData",
    "Tickers",
    "SwapOrderRequest",
    "SwapOrder",
    "SwapPosition",
    "SwapBalance",
    "parse_kline_data",
]
