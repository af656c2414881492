"""
BingX REST API 전송 계층

HMAC-SHA256 서명, 요청 전송, 응답 envelope 디코딩.
재시도/Rate Limit 관리 없음: 호출 1회 = 네트워크 요청 1회.
"""

import logging
import time
from typing import Any, Callable, TypeVar

import httpx

from adapters.bingx.envelope import Envelope, decode_envelope
from adapters.bingx.errors import HTTPError, TransportError
from adapters.bingx.params import Params, build_signed_query
from core.config.loader import ExchangeConfig
from core.constants import Defaults
from core.types import Venue

logger = logging.getLogger(__name__)

T = TypeVar("T")

SUPPORTED_METHODS = ("GET", "POST", "DELETE")


class BingXRestClient:
    """BingX REST API 전송 클라이언트

    현물/선물 엔드포인트 클라이언트(SpotClient, SwapClient)가 공유하는 전송 계층.
    설정(키, 시크릿, URL)은 생성 후 읽기 전용이므로 여러 태스크에서 동시 사용 가능.

    Args:
        base_url: REST API 베이스 URL
        api_key: API 키
        api_secret: API 시크릿
        timeout: 요청 타임아웃 (초)
        recv_window: 요청 유효 시간 (밀리초, None이면 미전송)

    사용 예시:
    ```python
    async with BingXRestClient(base_url, api_key, api_secret) as rest:
        balances = await SpotClient(rest).get_balance()
    ```
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        api_secret: str,
        timeout: float = Defaults.TIMEOUT_SEC,
        recv_window: int | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.api_secret = api_secret
        self.timeout = timeout
        self.recv_window = recv_window

        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_config(
        cls,
        config: ExchangeConfig,
        venue: Venue = Venue.SPOT,
    ) -> "BingXRestClient":
        """ExchangeConfig에서 생성

        Args:
            config: 거래소 설정
            venue: 현물(SPOT) 또는 선물(SWAP) 베이스 URL 선택
        """
        return cls(
            base_url=config.rest_url(venue),
            api_key=config.api_key,
            api_secret=config.api_secret,
            timeout=config.timeout,
            recv_window=config.recv_window,
        )

    async def __aenter__(self) -> "BingXRestClient":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    async def _get_client(self) -> httpx.AsyncClient:
        """HTTP 클라이언트 가져오기 (lazy initialization)"""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def close(self) -> None:
        """HTTP 클라이언트 종료"""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    def _get_timestamp(self) -> int:
        """현재 타임스탬프 (밀리초)"""
        return int(time.time() * 1000)

    def _prepare_params(self, params: Params | None) -> Params:
        """timestamp/recvWindow 보강 (호출자가 지정한 값은 유지)"""
        request_params: Params = dict(params) if params else {}
        if "timestamp" not in request_params:
            request_params["timestamp"] = self._get_timestamp()
        if self.recv_window is not None and "recvWindow" not in request_params:
            request_params["recvWindow"] = self.recv_window
        return request_params

    def build_url(self, path: str, params: Params | None = None) -> str:
        """서명된 요청 URL 생성

        Args:
            path: API 경로 (예: /openApi/spot/v1/account/balance)
            params: 요청 파라미터

        Returns:
            base_url + path + 서명 포함 쿼리 문자열
        """
        query = build_signed_query(self._prepare_params(params), self.api_secret)
        return f"{self.base_url}{path}?{query}"

    async def send(
        self,
        method: str,
        path: str,
        params: Params | None = None,
    ) -> bytes:
        """API 요청 실행 후 원시 응답 본문 반환

        Args:
            method: HTTP 메서드 (GET, POST, DELETE)
            path: API 경로
            params: 요청 파라미터 (POST/DELETE도 쿼리 문자열로 전송)

        Returns:
            응답 본문 (bytes)

        Raises:
            ValueError: 지원하지 않는 HTTP 메서드
            TransportError: 연결 실패, 타임아웃 등 네트워크 오류
            HTTPError: 2xx 이외의 응답
        """
        method = method.upper()
        if method not in SUPPORTED_METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")

        url = self.build_url(path, params)
        headers = {Defaults.API_KEY_HEADER: self.api_key}
        client = await self._get_client()

        logger.debug("BingX request", extra={"method": method, "path": path})

        try:
            response = await client.request(method, url, headers=headers)
        except httpx.TimeoutException as e:
            logger.warning(
                "Request timeout",
                extra={"method": method, "path": path},
            )
            raise TransportError(f"timeout: {e}", method=method, path=path) from e
        except httpx.RequestError as e:
            logger.error(
                "Request error",
                extra={"method": method, "path": path, "error": str(e)},
            )
            raise TransportError(str(e), method=method, path=path) from e

        if not 200 <= response.status_code < 300:
            logger.error(
                f"BingX HTTP error: {response.status_code}",
                extra={"method": method, "path": path, "status": response.status_code},
            )
            raise HTTPError(
                status_code=response.status_code,
                body=response.text,
                method=method,
                path=path,
            )

        return response.content

    async def request(
        self,
        method: str,
        path: str,
        params: Params | None,
        parse: Callable[[Any], T],
    ) -> Envelope[T]:
        """요청 전송 후 envelope 디코딩

        거래소 에러(code != 0)는 여기서 발생시키지 않음.
        호출자가 envelope.raise_for_error()로 확인.

        Raises:
            TransportError, HTTPError: send() 참고
            DecodeError: 응답 JSON/구조 오류
        """
        raw = await self.send(method, path, params)
        envelope = decode_envelope(raw, parse)
        if not envelope.ok:
            logger.warning(
                f"BingX API error: {envelope.code} - {envelope.msg}",
                extra={"method": method, "path": path, "code": envelope.code},
            )
        return envelope

    async def get(
        self,
        path: str,
        params: Params | None,
        parse: Callable[[Any], T],
    ) -> Envelope[T]:
        """GET 요청"""
        return await self.request("GET", path, params, parse)

    async def post(
        self,
        path: str,
        params: Params | None,
        parse: Callable[[Any], T],
    ) -> Envelope[T]:
        """POST 요청"""
        return await self.request("POST", path, params, parse)

    async def delete(
        self,
        path: str,
        params: Params | None,
        parse: Callable[[Any], T],
    ) -> Envelope[T]:
        """DELETE 요청"""
        return await self.request("DELETE", path, params, parse)
