"""
BingX 응답 Envelope

모든 응답은 {"code": int, "msg": str, "data": ...} 형태.
payload 타입별 파서를 받아 decode 단계에서 검증까지 수행하므로
성공 envelope의 data는 항상 완전히 파싱된 값.
"""

import json
import logging
from dataclasses import dataclass
from decimal import InvalidOperation
from typing import Any, Callable, Generic, TypeVar

from adapters.bingx.errors import DecodeError, ExchangeError
from core.constants import Defaults

logger = logging.getLogger(__name__)

T = TypeVar("T")

SUCCESS_CODE: int = Defaults.SUCCESS_CODE

# 파서가 잘못된 payload 구조에서 던지는 예외
PAYLOAD_ERRORS = (
    KeyError,
    TypeError,
    ValueError,
    IndexError,
    AttributeError,
    InvalidOperation,
)


@dataclass(frozen=True)
class Envelope(Generic[T]):
    """응답 envelope

    Attributes:
        code: 응답 코드 (0 = 성공)
        msg: 응답 메시지 (실패 사유)
        data: 파싱된 payload (실패 시 None)
    """

    code: int
    msg: str
    data: T | None = None

    @property
    def ok(self) -> bool:
        """성공 여부"""
        return self.code == SUCCESS_CODE

    def error(self) -> ExchangeError | None:
        """실패 envelope이면 ExchangeError, 성공이면 None"""
        if self.ok:
            return None
        return ExchangeError(code=self.code, message=self.msg)

    def raise_for_error(self) -> None:
        """실패 envelope이면 ExchangeError 발생"""
        err = self.error()
        if err is not None:
            raise err


def passthrough(data: Any) -> Any:
    """payload를 그대로 반환하는 파서 (취소 등 결과를 쓰지 않는 호출용)"""
    return data


def decode_envelope(raw: bytes, parse: Callable[[Any], T]) -> Envelope[T]:
    """원시 응답을 Envelope으로 디코딩

    Args:
        raw: HTTP 응답 본문
        parse: data 필드 파서 (code == 0일 때만 호출)

    Returns:
        Envelope 인스턴스

    Raises:
        DecodeError: JSON 형식 오류, envelope 구조 오류, payload 파싱 실패
    """
    try:
        body = json.loads(raw)
    except (ValueError, UnicodeDecodeError, RecursionError) as e:
        raise DecodeError(f"invalid JSON: {e}", body=raw) from e

    if not isinstance(body, dict):
        raise DecodeError(
            f"envelope must be an object, got {type(body).__name__}",
            body=raw,
        )

    code = body.get("code")
    if isinstance(code, bool) or not isinstance(code, int):
        raise DecodeError(f"envelope 'code' must be an integer: {code!r}", body=raw)

    msg = body.get("msg") or ""
    if not isinstance(msg, str):
        msg = str(msg)

    if code != SUCCESS_CODE:
        return Envelope(code=code, msg=msg, data=None)

    try:
        data = parse(body.get("data"))
    except PAYLOAD_ERRORS as e:
        logger.warning(
            "Unexpected payload shape",
            extra={"parser": getattr(parse, "__name__", repr(parse)), "error": str(e)},
        )
        raise DecodeError(f"unexpected payload: {e!r}", body=raw) from e

    return Envelope(code=code, msg=msg, data=data)
