"""
타입 정의 모듈

Enum 등 핵심 타입 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from enum import Enum


class TradingMode(str, Enum):
    """거래 모드 (실거래 / 테스트넷)"""

    PRODUCTION = "production"
    TESTNET = "testnet"


class Venue(str, Enum):
    """거래 장소 (현물 / 무기한 선물)"""

    SPOT = "SPOT"
    SWAP = "SWAP"


class OrderSide(str, Enum):
    """주문 방향"""

    BUY = "BUY"
    SELL = "SELL"


class PositionSide(str, Enum):
    """포지션 방향 (Swap Hedge Mode용)"""

    LONG = "LONG"
    SHORT = "SHORT"
    BOTH = "BOTH"


class OrderType(str, Enum):
    """주문 유형"""

    MARKET = "MARKET"
    LIMIT = "LIMIT"
    STOP_MARKET = "STOP_MARKET"
    TAKE_PROFIT_MARKET = "TAKE_PROFIT_MARKET"
    STOP = "STOP"
    TAKE_PROFIT = "TAKE_PROFIT"


class OrderStatus(str, Enum):
    """주문 상태"""

    NEW = "NEW"
    PENDING = "PENDING"
    PARTIALLY_FILLED = "PARTIALLY_FILLED"
    FILLED = "FILLED"
    CANCELED = "CANCELED"  # BingX API 사용 (미국식 철자)
    FAILED = "FAILED"


class TimeInForce(str, Enum):
    """주문 유효 기간"""

    GTC = "GTC"  # Good Till Cancel
    IOC = "IOC"  # Immediate Or Cancel
    FOK = "FOK"  # Fill Or Kill
    POST_ONLY = "PostOnly"
