"""
요청 파라미터 직렬화 및 서명

서명 검증을 위해 직렬화는 결정적이어야 함:
동일한 파라미터 집합은 삽입 순서와 무관하게 항상 동일한 문자열을 생성.
"""

import hashlib
import hmac
from decimal import Decimal
from enum import Enum
from typing import Mapping, Union
from urllib.parse import quote

ParamValue = Union[str, int, float, Decimal, bool, Enum]
Params = dict[str, ParamValue]


def format_param_value(value: ParamValue) -> str:
    """파라미터 값을 문자열로 변환

    bool은 int보다 먼저 검사.
    Decimal/float는 지수 표기 없이 고정소수점으로 출력.

    Raises:
        TypeError: 지원하지 않는 타입 (None 포함)
        ValueError: NaN, Infinity
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return format_param_value(value.value)
    if isinstance(value, Decimal):
        return _format_decimal(value)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        # repr은 최단 표현 (0.1 -> "0.1")
        return _format_decimal(Decimal(repr(value)))
    if isinstance(value, str):
        return value
    raise TypeError(
        f"Unsupported parameter type: {type(value).__name__} ({value!r})"
    )


def _format_decimal(value: Decimal) -> str:
    if not value.is_finite():
        raise ValueError(f"Non-finite parameter value: {value}")
    return format(value, "f")


def _sorted_pairs(params: Mapping[str, ParamValue]) -> list[tuple[str, str]]:
    return [(key, format_param_value(params[key])) for key in sorted(params)]


def canonical_query(params: Mapping[str, ParamValue]) -> str:
    """서명 대상 문자열 생성 (키 오름차순, 값 인코딩 없음)

    Example:
        >>> canonical_query({"symbol": "BTC-USDT", "limit": 5})
        'limit=5&symbol=BTC-USDT'
    """
    return "&".join(f"{key}={value}" for key, value in _sorted_pairs(params))


def encode_query(params: Mapping[str, ParamValue]) -> str:
    """전송용 쿼리 문자열 생성 (canonical_query와 동일 순서, 값 URL 인코딩)"""
    return "&".join(
        f"{key}={quote(value, safe='')}" for key, value in _sorted_pairs(params)
    )


def generate_signature(secret: str, payload: str) -> str:
    """HMAC-SHA256 서명 생성

    Args:
        secret: API 시크릿
        payload: canonical_query 결과

    Returns:
        16진수 서명 문자열
    """
    return hmac.new(
        secret.encode("utf-8"),
        payload.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()


def build_signed_query(params: Mapping[str, ParamValue], secret: str) -> str:
    """서명이 붙은 전송용 쿼리 문자열

    서명은 인코딩 전 canonical 문자열 기준, signature는 항상 마지막.
    """
    signature = generate_signature(secret, canonical_query(params))
    encoded = encode_query(params)
    if encoded:
        return f"{encoded}&signature={signature}"
    return f"signature={signature}"
