"""
하드코딩 상수 - 변경될 일이 거의 없는 고정값

중요: 경로는 반드시 pathlib.Path 사용 (Windows/Linux 크로스 플랫폼)
"""

from pathlib import Path


# 프로젝트 루트 (이 파일 기준 2단계 상위: core/constants.py → 저장소 루트)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent


class BingXEndpoints:
    """BingX API 베이스 URL (고정값)

    공식 문서: https://bingx-api.github.io/docs/
    현물/선물(Swap) 모두 동일 호스트를 사용하지만 설정에서 개별 override 가능.
    """

    # Production
    PROD_SPOT_REST_URL: str = "https://open-api.bingx.com"
    PROD_SWAP_REST_URL: str = "https://open-api.bingx.com"

    # Testnet (VST 모의 거래)
    TEST_SPOT_REST_URL: str = "https://open-api-vst.bingx.com"
    TEST_SWAP_REST_URL: str = "https://open-api-vst.bingx.com"


class SpotPaths:
    """현물 API 경로"""

    ACCOUNT_BALANCE: str = "/openApi/spot/v1/account/balance"
    CREATE_ORDER: str = "/openApi/spot/v1/trade/order"
    CREATE_ORDERS_BATCH: str = "/openApi/spot/v1/trade/batchOrders"
    GET_OPEN_ORDERS: str = "/openApi/spot/v1/trade/openOrders"
    CANCEL_ORDER: str = "/openApi/spot/v1/trade/cancel"
    CANCEL_ALL_ORDERS: str = "/openApi/spot/v1/trade/cancelOpenOrders"
    GET_ORDER_DATA: str = "/openApi/spot/v1/trade/query"
    GET_ORDERS_HISTORY: str = "/openApi/spot/v1/trade/historyOrders"
    GET_ORDER_BOOK: str = "/openApi/spot/v1/market/depth"
    GET_SYMBOLS: str = "/openApi/spot/v1/common/symbols"
    GET_CANDLES_HISTORY: str = "/openApi/spot/v1/market/kline"
    GET_KLINES_HISTORY: str = "/openApi/market/his/v1/kline"
    GET_TICKERS: str = "/openApi/spot/v1/ticker/24hr"


class SwapPaths:
    """선물(Swap) API 경로"""

    ORDER: str = "/openApi/swap/v2/trade/order"
    GET_OPEN_ORDERS: str = "/openApi/swap/v2/trade/openOrders"
    GET_POSITIONS: str = "/openApi/swap/v2/user/positions"
    GET_BALANCE: str = "/openApi/swap/v2/user/balance"


class Defaults:
    """기본값 상수"""

    TIMEOUT_SEC: float = 30.0

    # 성공 응답 코드 (envelope code)
    SUCCESS_CODE: int = 0

    # 인증 헤더
    API_KEY_HEADER: str = "X-BX-APIKEY"


class Paths:
    """프로젝트 경로 상수 (pathlib 사용 - OS 독립적)"""

    # 디렉토리
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"

    # 설정 파일
    SECRETS_FILE: Path = CONFIG_DIR / "secrets.yaml"
