"""
BingX 클라이언트 에러 정의

호출 실패 원인을 구분할 수 있도록 계층화.
- TransportError: 네트워크 계층 실패 (연결, 타임아웃)
- HTTPError: 2xx 이외의 HTTP 상태
- DecodeError: JSON 파싱 실패 또는 예상과 다른 응답 구조
- ExchangeError: 정상 응답이지만 거래소가 요청을 거부 (code != 0)
"""


class BingXError(Exception):
    """BingX 클라이언트 에러 기본 클래스"""


class TransportError(BingXError):
    """네트워크 계층 실패

    httpx.RequestError를 감싸며 원본 예외는 __cause__로 보존.
    """

    def __init__(
        self,
        message: str,
        method: str | None = None,
        path: str | None = None,
    ):
        self.message = message
        self.method = method
        self.path = path
        super().__init__(f"Transport error on {method} {path}: {message}")


class HTTPError(BingXError):
    """HTTP 상태 코드 에러 (non-2xx)"""

    def __init__(
        self,
        status_code: int,
        body: str,
        method: str | None = None,
        path: str | None = None,
    ):
        self.status_code = status_code
        self.body = body
        self.method = method
        self.path = path
        super().__init__(f"HTTP {status_code} on {method} {path}: {body[:200]}")


class DecodeError(BingXError):
    """응답 디코딩 실패

    거래소 거부(ExchangeError)와 구분하기 위해 별도 타입 사용.
    """

    def __init__(self, message: str, body: bytes | str | None = None):
        self.message = message
        self.body = body
        super().__init__(f"Decode error: {message}")


class ExchangeError(BingXError):
    """BingX API 에러

    응답 envelope의 code가 0이 아닐 때 발생.
    """

    def __init__(self, code: int, message: str):
        self.code = code
        self.message = message
        super().__init__(f"BingX API Error [{code}]: {message}")


class OrderNotFoundError(BingXError):
    """주문 내역에서 주문을 찾지 못함"""

    def __init__(self, symbol: str, order_id: int):
        self.symbol = symbol
        self.order_id = order_id
        super().__init__(f"Order not found: {symbol} #{order_id}")
