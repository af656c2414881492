"""
BingX API 응답 모델

BingX REST API 응답(data 필드)을 파싱하여 데이터클래스로 변환.
모든 금액/수량은 Decimal 사용, 시각은 밀리초 int 그대로 보존.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any

from adapters.bingx.params import Params, format_param_value
from core.types import OrderStatus, OrderType
from core.utils.timezone import utc_from_timestamp_ms


def _dec(value: Any, default: str = "0") -> Decimal:
    """숫자/문자열 -> Decimal (float 오차 방지를 위해 str 경유)"""
    if value is None or value == "":
        return Decimal(default)
    return Decimal(str(value))


# =========================================================================
# 현물 (Spot)
# =========================================================================


@dataclass(frozen=True)
class SpotBalance:
    """현물 잔고

    Attributes:
        asset: 자산 코드 (예: BTC, USDT)
        free: 사용 가능 수량
        locked: 주문에 묶인 수량
    """

    asset: str
    free: Decimal
    locked: Decimal

    @property
    def total(self) -> Decimal:
        """총 잔고 (사용 가능 + 잠김)"""
        return self.free + self.locked

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "SpotBalance":
        """API 응답에서 생성"""
        return cls(
            asset=data["asset"],
            free=_dec(data["free"]),
            locked=_dec(data["locked"]),
        )


@dataclass(frozen=True)
class SpotOrderRequest:
    """현물 주문 요청

    Attributes:
        symbol: 거래 심볼 (예: BTC-USDT)
        side: 주문 방향 (BUY/SELL)
        order_type: 주문 유형 (MARKET/LIMIT)
        quantity: 주문 수량
        price: 지정가 (LIMIT 주문 필수)
        quote_order_qty: 주문 금액 (시장가 매수 시 수량 대신 사용)
        time_in_force: 주문 유효 기간
        client_order_id: 클라이언트 주문 ID (선택)
    """

    symbol: str
    side: str
    order_type: str
    quantity: Decimal
    price: Decimal | None = None
    quote_order_qty: Decimal | None = None
    time_in_force: str | None = None
    client_order_id: str | None = None

    def __post_init__(self) -> None:
        """유효성 검증"""
        if self.quantity <= Decimal("0") and self.quote_order_qty is None:
            raise ValueError("quantity must be positive")

        if self.order_type == OrderType.LIMIT.value and self.price is None:
            raise ValueError("price is required for LIMIT orders")

    def to_params(self) -> Params:
        """요청 파라미터로 변환"""
        params: Params = {
            "symbol": self.symbol,
            "side": self.side,
            "type": self.order_type,
        }

        if self.quantity > Decimal("0") or self.quote_order_qty is None:
            params["quantity"] = self.quantity

        if self.price is not None:
            params["price"] = self.price

        if self.quote_order_qty is not None:
            params["quoteOrderQty"] = self.quote_order_qty

        if self.time_in_force is not None:
            params["timeInForce"] = self.time_in_force

        if self.client_order_id:
            params["newClientOrderId"] = self.client_order_id

        return params

    def to_json_dict(self) -> dict[str, str]:
        """배치 주문용 JSON 객체 (값은 모두 문자열)"""
        return {key: format_param_value(value) for key, value in self.to_params().items()}


@dataclass(frozen=True)
class SpotOrderResponse:
    """현물 주문 생성 결과"""

    symbol: str
    order_id: int
    transact_time: int
    price: Decimal
    orig_qty: Decimal
    executed_qty: Decimal
    cummulative_quote_qty: Decimal
    status: str
    order_type: str
    side: str
    client_order_id: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "SpotOrderResponse":
        """API 응답에서 생성"""
        return cls(
            symbol=data["symbol"],
            order_id=int(data["orderId"]),
            transact_time=int(data.get("transactTime", 0)),
            price=_dec(data.get("price")),
            orig_qty=_dec(data.get("origQty")),
            executed_qty=_dec(data.get("executedQty")),
            cummulative_quote_qty=_dec(data.get("cummulativeQuoteQty")),
            status=data["status"],
            order_type=data["type"],
            side=data["side"],
            client_order_id=data.get("clientOrderID", ""),
        )


@dataclass(frozen=True)
class SpotOrder:
    """현물 주문 정보 (조회 / 오픈 주문)

    Attributes:
        symbol: 거래 심볼
        order_id: 거래소 주문 ID
        price: 주문 가격
        orig_qty: 원래 주문 수량
        executed_qty: 체결 수량
        cummulative_quote_qty: 누적 체결 금액
        status: 주문 상태
        order_type: 주문 유형
        side: 주문 방향
        time: 주문 생성 시각 (ms)
        update_time: 주문 갱신 시각 (ms)
        orig_quote_order_qty: 원래 주문 금액
        client_order_id: 클라이언트 주문 ID
    """

    symbol: str
    order_id: int
    price: Decimal
    orig_qty: Decimal
    executed_qty: Decimal
    cummulative_quote_qty: Decimal
    status: str
    order_type: str
    side: str
    time: int = 0
    update_time: int = 0
    orig_quote_order_qty: Decimal = Decimal("0")
    client_order_id: str = ""

    @property
    def is_open(self) -> bool:
        """오픈 주문 여부 (NEW/PENDING/PARTIALLY_FILLED)"""
        return self.status in (
            OrderStatus.NEW.value,
            OrderStatus.PENDING.value,
            OrderStatus.PARTIALLY_FILLED.value,
        )

    @property
    def is_filled(self) -> bool:
        """완전 체결 여부"""
        return self.status == OrderStatus.FILLED.value

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "SpotOrder":
        """API 응답에서 생성"""
        return cls(
            symbol=data["symbol"],
            order_id=int(data["orderId"]),
            price=_dec(data.get("price")),
            orig_qty=_dec(data.get("origQty")),
            executed_qty=_dec(data.get("executedQty")),
            cummulative_quote_qty=_dec(data.get("cummulativeQuoteQty")),
            status=data["status"],
            order_type=data["type"],
            side=data["side"],
            time=int(data.get("time", 0)),
            update_time=int(data.get("updateTime", 0)),
            orig_quote_order_qty=_dec(data.get("origQuoteOrderQty")),
            client_order_id=data.get("clientOrderID", ""),
        )


@dataclass(frozen=True)
class HistoryOrder:
    """현물 주문 내역 항목 (수수료, 평균가 포함)"""

    symbol: str
    order_id: int
    price: Decimal
    orig_qty: Decimal
    executed_qty: Decimal
    cummulative_quote_qty: Decimal
    status: str
    order_type: str
    side: str
    time: int = 0
    update_time: int = 0
    orig_quote_order_qty: Decimal = Decimal("0")
    fee: Decimal = Decimal("0")
    fee_asset: str = ""
    avg_price: Decimal = Decimal("0")
    client_order_id: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "HistoryOrder":
        """API 응답에서 생성"""
        return cls(
            symbol=data["symbol"],
            order_id=int(data["orderId"]),
            price=_dec(data.get("price")),
            orig_qty=_dec(data.get("origQty")),
            executed_qty=_dec(data.get("executedQty")),
            cummulative_quote_qty=_dec(data.get("cummulativeQuoteQty")),
            status=data["status"],
            order_type=data["type"],
            side=data["side"],
            time=int(data.get("time", 0)),
            update_time=int(data.get("updateTime", 0)),
            orig_quote_order_qty=_dec(data.get("origQuoteOrderQty")),
            fee=_dec(data.get("fee")),
            fee_asset=data.get("feeAsset", ""),
            avg_price=_dec(data.get("avgPrice")),
            client_order_id=data.get("clientOrderID", ""),
        )


@dataclass(frozen=True)
class OrderBookLevel:
    """호가 한 단계"""

    price: Decimal
    quantity: Decimal

    @classmethod
    def from_api(cls, data: list[Any]) -> "OrderBookLevel":
        """[price, quantity] 배열에서 생성"""
        return cls(price=_dec(data[0]), quantity=_dec(data[1]))


@dataclass(frozen=True)
class OrderBook:
    """호가창

    Attributes:
        bids: 매수 호가 (가격 내림차순)
        asks: 매도 호가 (가격 오름차순)
        ts: 스냅샷 시각 (ms)
    """

    bids: list[OrderBookLevel] = field(default_factory=list)
    asks: list[OrderBookLevel] = field(default_factory=list)
    ts: int = 0

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "OrderBook":
        """API 응답에서 생성"""
        return cls(
            bids=[OrderBookLevel.from_api(level) for level in data.get("bids") or []],
            asks=[OrderBookLevel.from_api(level) for level in data.get("asks") or []],
            ts=int(data.get("ts", 0)),
        )


@dataclass(frozen=True)
class SymbolInfo:
    """심볼 거래 규칙"""

    symbol: str
    min_qty: Decimal
    max_qty: Decimal
    min_notional: Decimal
    max_notional: Decimal
    status: int
    tick_size: Decimal
    step_size: Decimal

    @property
    def is_trading(self) -> bool:
        """거래 가능 여부 (status == 1)"""
        return self.status == 1

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "SymbolInfo":
        """API 응답에서 생성"""
        return cls(
            symbol=data["symbol"],
            min_qty=_dec(data.get("minQty")),
            max_qty=_dec(data.get("maxQty")),
            min_notional=_dec(data.get("minNotional")),
            max_notional=_dec(data.get("maxNotional")),
            status=int(data.get("status", 0)),
            tick_size=_dec(data.get("tickSize")),
            step_size=_dec(data.get("stepSize")),
        )


@dataclass(frozen=True)
class TickerData:
    """24시간 시세 (현재가만 사용)"""

    symbol: str
    last_price: Decimal

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "TickerData":
        """API 응답에서 생성"""
        return cls(symbol=data["symbol"], last_price=_dec(data["lastPrice"]))


# 심볼 -> 현재가
Tickers = dict[str, Decimal]


# =========================================================================
# 캔들 (Kline)
# =========================================================================

_INTERVAL_PATTERN = re.compile(r"^(\d+)([mhdw])$")
_INTERVAL_UNITS = {
    "m": timedelta(minutes=1),
    "h": timedelta(hours=1),
    "d": timedelta(days=1),
    "w": timedelta(weeks=1),
}


def parse_interval(interval: str) -> timedelta:
    """캔들 주기 문자열 -> timedelta

    Example:
        >>> parse_interval("15m")
        datetime.timedelta(seconds=900)

    Raises:
        ValueError: 지원하지 않는 주기 (예: 1M)
    """
    match = _INTERVAL_PATTERN.match(interval)
    if match is None:
        raise ValueError(f"Unsupported kline interval: {interval!r}")
    count, unit = match.groups()
    return _INTERVAL_UNITS[unit] * int(count)


@dataclass(frozen=True)
class KlineData:
    """정규화된 캔들

    Attributes:
        interval: 캔들 주기 (예: 1m, 1h)
        open_time: 시가 시각 (ms)
        close_time: 종가 시각 (ms)
        open/high/low/close: OHLC 가격
        volume: 거래량
        quote_volume: 거래 금액
    """

    interval: str
    open_time: int
    close_time: int
    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    volume: Decimal
    quote_volume: Decimal = Decimal("0")

    @property
    def opened_at(self) -> datetime:
        """시가 시각 (UTC)"""
        return utc_from_timestamp_ms(self.open_time)

    @property
    def closed_at(self) -> datetime:
        """종가 시각 (UTC)"""
        return utc_from_timestamp_ms(self.close_time)


def parse_kline_data(raw: list[Any], interval: str) -> KlineData:
    """원시 캔들 배열 -> KlineData

    BingX 캔들 응답 예시:
    [1649404800000, 44147.2, 44337.1, 44072.8, 44229.8, 11.24, 1649408399999, 497186.69]
    (openTime, open, high, low, close, volume, closeTime, quoteVolume)

    closeTime이 없으면 주기로부터 계산 (open_time + 주기 - 1ms).

    Raises:
        ValueError: 배열 길이 부족 또는 숫자가 아닌 값
    """
    if not isinstance(raw, (list, tuple)) or len(raw) < 6:
        raise ValueError(f"kline must have at least 6 fields: {raw!r}")

    open_time = int(raw[0])
    if len(raw) > 6 and raw[6] is not None:
        close_time = int(raw[6])
    else:
        duration_ms = int(parse_interval(interval).total_seconds() * 1000)
        close_time = open_time + duration_ms - 1

    quote_volume = _dec(raw[7]) if len(raw) > 7 else Decimal("0")

    return KlineData(
        interval=interval,
        open_time=open_time,
        close_time=close_time,
        open=_dec(raw[1]),
        high=_dec(raw[2]),
        low=_dec(raw[3]),
        close=_dec(raw[4]),
        volume=_dec(raw[5]),
        quote_volume=quote_volume,
    )


# =========================================================================
# 무기한 선물 (Swap)
# =========================================================================


@dataclass(frozen=True)
class SwapOrderRequest:
    """선물 주문 요청

    Attributes:
        symbol: 거래 심볼 (예: BTC-USDT)
        side: 주문 방향 (BUY/SELL)
        position_side: 포지션 방향 (LONG/SHORT/BOTH)
        order_type: 주문 유형
        quantity: 주문 수량
        price: 지정가 (LIMIT 주문 필수)
        stop_price: 트리거 가격 (STOP/TAKE_PROFIT 계열 필수)
        client_order_id: 클라이언트 주문 ID (선택)
    """

    symbol: str
    side: str
    position_side: str
    order_type: str
    quantity: Decimal
    price: Decimal | None = None
    stop_price: Decimal | None = None
    client_order_id: str | None = None

    def __post_init__(self) -> None:
        """유효성 검증"""
        if self.quantity <= Decimal("0"):
            raise ValueError("quantity must be positive")

        if self.order_type == OrderType.LIMIT.value and self.price is None:
            raise ValueError("price is required for LIMIT orders")

        stop_types = (
            OrderType.STOP_MARKET.value,
            OrderType.TAKE_PROFIT_MARKET.value,
            OrderType.STOP.value,
            OrderType.TAKE_PROFIT.value,
        )
        if self.order_type in stop_types and self.stop_price is None:
            raise ValueError("stop_price is required for STOP orders")

    def to_params(self) -> Params:
        """요청 파라미터로 변환"""
        params: Params = {
            "symbol": self.symbol,
            "side": self.side,
            "positionSide": self.position_side,
            "type": self.order_type,
            "quantity": self.quantity,
        }

        if self.price is not None:
            params["price"] = self.price

        if self.stop_price is not None:
            params["stopPrice"] = self.stop_price

        if self.client_order_id:
            params["clientOrderID"] = self.client_order_id

        return params


@dataclass(frozen=True)
class SwapOrder:
    """선물 주문 정보"""

    symbol: str
    order_id: int
    side: str
    position_side: str
    order_type: str
    status: str = ""
    price: Decimal = Decimal("0")
    orig_qty: Decimal = Decimal("0")
    executed_qty: Decimal = Decimal("0")
    avg_price: Decimal = Decimal("0")
    client_order_id: str = ""
    time: int = 0
    update_time: int = 0

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "SwapOrder":
        """API 응답에서 생성

        생성 응답은 quantity, 조회 응답은 origQty 키를 사용.
        """
        return cls(
            symbol=data["symbol"],
            order_id=int(data["orderId"]),
            side=data["side"],
            position_side=data.get("positionSide", "BOTH"),
            order_type=data["type"],
            status=data.get("status", ""),
            price=_dec(data.get("price")),
            orig_qty=_dec(data.get("origQty", data.get("quantity"))),
            executed_qty=_dec(data.get("executedQty")),
            avg_price=_dec(data.get("avgPrice")),
            client_order_id=data.get("clientOrderID", data.get("clientOrderId", "")),
            time=int(data.get("time", 0)),
            update_time=int(data.get("updateTime", 0)),
        )


@dataclass(frozen=True)
class SwapPosition:
    """선물 포지션"""

    symbol: str
    position_id: str
    position_side: str
    isolated: bool
    position_amt: Decimal
    available_amt: Decimal
    avg_price: Decimal
    unrealized_profit: Decimal
    leverage: int

    @property
    def notional(self) -> Decimal:
        """명목 가치 (수량 * 평균가)"""
        return self.position_amt * self.avg_price

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "SwapPosition":
        """API 응답에서 생성"""
        return cls(
            symbol=data["symbol"],
            position_id=str(data.get("positionId", "")),
            position_side=data["positionSide"],
            isolated=bool(data.get("isolated", False)),
            position_amt=_dec(data["positionAmt"]),
            available_amt=_dec(data.get("availableAmt")),
            avg_price=_dec(data.get("avgPrice")),
            unrealized_profit=_dec(data.get("unrealizedProfit")),
            leverage=int(data.get("leverage", 1)),
        )


@dataclass(frozen=True)
class SwapBalance:
    """선물 계정 잔고"""

    asset: str
    balance: Decimal
    equity: Decimal
    unrealized_profit: Decimal
    available_margin: Decimal
    used_margin: Decimal

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "SwapBalance":
        """API 응답에서 생성"""
        return cls(
            asset=data["asset"],
            balance=_dec(data["balance"]),
            equity=_dec(data.get("equity")),
            unrealized_profit=_dec(data.get("unrealizedProfit")),
            available_margin=_dec(data.get("availableMargin")),
            used_margin=_dec(data.get("usedMargin")),
        )
