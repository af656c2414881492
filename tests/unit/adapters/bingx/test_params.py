"""
파라미터 직렬화/서명 테스트

값 변환 규칙, 결정적 정렬, HMAC-SHA256 서명 확인.
"""

import hashlib
import hmac
from decimal import Decimal

import pytest

from adapters.bingx.params import (
    build_signed_query,
    canonical_query,
    encode_query,
    format_param_value,
    generate_signature,
)
from core.types import OrderSide


class TestFormatParamValue:
    """format_param_value 테스트"""

    def test_bool(self) -> None:
        """bool -> true/false (int보다 먼저 처리)"""
        assert format_param_value(True) == "true"
        assert format_param_value(False) == "false"

    def test_int(self) -> None:
        """정수"""
        assert format_param_value(1700000000000) == "1700000000000"

    def test_decimal_no_exponent(self) -> None:
        """Decimal은 지수 표기 없이"""
        assert format_param_value(Decimal("1.50")) == "1.50"
        assert format_param_value(Decimal("1E-7")) == "0.0000001"

    def test_float_shortest_repr(self) -> None:
        """float는 최단 표현"""
        assert format_param_value(0.1) == "0.1"
        assert format_param_value(1e-07) == "0.0000001"
        assert format_param_value(35000.5) == "35000.5"

    def test_enum(self) -> None:
        """str Enum은 value"""
        assert format_param_value(OrderSide.BUY) == "BUY"

    def test_str(self) -> None:
        """문자열 그대로"""
        assert format_param_value("BTC-USDT") == "BTC-USDT"

    def test_none_rejected(self) -> None:
        """None은 허용하지 않음"""
        with pytest.raises(TypeError):
            format_param_value(None)  # type: ignore[arg-type]

    @pytest.mark.parametrize(
        "value",
        [float("nan"), float("inf"), float("-inf"), Decimal("NaN"), Decimal("Infinity")],
    )
    def test_non_finite_rejected(self, value: object) -> None:
        """NaN/Infinity는 전송하지 않음"""
        with pytest.raises(ValueError, match="Non-finite"):
            format_param_value(value)  # type: ignore[arg-type]

    def test_non_finite_not_signed(self) -> None:
        """서명 단계에서도 거부"""
        with pytest.raises(ValueError):
            build_signed_query({"price": float("nan"), "timestamp": 1}, "secret")

    def test_unsupported_type_rejected(self) -> None:
        """리스트 등 스칼라가 아닌 값"""
        with pytest.raises(TypeError, match="Unsupported parameter type"):
            format_param_value(["a"])  # type: ignore[arg-type]


class TestCanonicalQuery:
    """canonical_query 테스트"""

    def test_sorted_keys(self) -> None:
        """키 오름차순 정렬"""
        query = canonical_query({"symbol": "BTC-USDT", "limit": 5, "timestamp": 1})

        assert query == "limit=5&symbol=BTC-USDT&timestamp=1"

    def test_insertion_order_independent(self) -> None:
        """삽입 순서와 무관하게 동일"""
        a = {"symbol": "BTC-USDT", "side": "BUY", "quantity": Decimal("0.5")}
        b = {"quantity": Decimal("0.5"), "side": "BUY", "symbol": "BTC-USDT"}

        assert canonical_query(a) == canonical_query(b)

    def test_empty(self) -> None:
        """빈 파라미터"""
        assert canonical_query({}) == ""

    def test_values_not_encoded(self) -> None:
        """서명 대상 문자열은 인코딩하지 않음"""
        query = canonical_query({"data": '[{"symbol":"BTC-USDT"}]'})

        assert query == 'data=[{"symbol":"BTC-USDT"}]'


class TestEncodeQuery:
    """encode_query 테스트"""

    def test_json_value_encoded(self) -> None:
        """JSON 값은 URL 인코딩"""
        query = encode_query({"data": '[{"a":"b"}]', "sync": False})

        assert query == "data=%5B%7B%22a%22%3A%22b%22%7D%5D&sync=false"

    def test_plain_values_unchanged(self) -> None:
        """일반 값은 canonical과 동일"""
        params = {"symbol": "BTC-USDT", "limit": 5}

        assert encode_query(params) == canonical_query(params)


class TestSignature:
    """서명 생성 테스트"""

    def test_generate_signature(self) -> None:
        """HMAC-SHA256 hex 서명"""
        signature = generate_signature("secret", "symbol=BTC-USDT&timestamp=1")

        expected = hmac.new(
            b"secret",
            b"symbol=BTC-USDT&timestamp=1",
            hashlib.sha256,
        ).hexdigest()
        assert signature == expected
        assert len(signature) == 64

    def test_different_input_different_signature(self) -> None:
        """다른 입력에 대해 다른 서명"""
        assert generate_signature("secret", "a=1") != generate_signature("secret", "a=2")

    def test_different_secret_different_signature(self) -> None:
        """다른 시크릿에 대해 다른 서명"""
        assert generate_signature("s1", "a=1") != generate_signature("s2", "a=1")

    def test_signed_query_appends_signature_last(self) -> None:
        """signature는 마지막, canonical 문자열 기준 서명"""
        params = {"timestamp": 1, "symbol": "BTC-USDT"}

        query = build_signed_query(params, "secret")

        expected_sig = generate_signature("secret", "symbol=BTC-USDT&timestamp=1")
        assert query == f"symbol=BTC-USDT&timestamp=1&signature={expected_sig}"

    def test_signed_query_deterministic(self) -> None:
        """동일 논리 파라미터 -> 동일 서명 요청"""
        a = {"symbol": "BTC-USDT", "quantity": 0.1, "sync": True, "timestamp": 1}
        b = {"timestamp": 1, "sync": True, "quantity": Decimal("0.1"), "symbol": "BTC-USDT"}

        assert build_signed_query(a, "secret") == build_signed_query(b, "secret")

    def test_signed_query_json_signed_unencoded(self) -> None:
        """JSON 값: 서명은 원문, 전송은 인코딩"""
        params = {"data": '[{"a":"b"}]'}

        query = build_signed_query(params, "secret")

        expected_sig = generate_signature("secret", 'data=[{"a":"b"}]')
        assert query.endswith(f"&signature={expected_sig}")
        assert query.startswith("data=%5B")
