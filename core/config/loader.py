"""
설정 로더

secrets.yaml 로드 및 거래소 설정 생성
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from core.constants import BingXEndpoints, Defaults, Paths
from core.types import TradingMode, Venue


@dataclass(frozen=True)
class Secrets:
    """보안 설정 (secrets.yaml에서 로드)

    불변 데이터 구조로 설정 변경 방지.
    client 섹션은 선택이며 없으면 기본값 사용.
    """

    mode: TradingMode
    api_key: str
    api_secret: str
    timeout: float = Defaults.TIMEOUT_SEC
    recv_window: int | None = None
    spot_rest_url: str | None = None
    swap_rest_url: str | None = None


@dataclass(frozen=True)
class ExchangeConfig:
    """거래소 연결 설정

    API 키와 현물/선물 베이스 URL 정보를 포함
    """

    spot_rest_url: str
    swap_rest_url: str
    api_key: str
    api_secret: str
    timeout: float = Defaults.TIMEOUT_SEC
    recv_window: int | None = None

    def rest_url(self, venue: Venue) -> str:
        """거래 장소별 베이스 URL"""
        if venue == Venue.SWAP:
            return self.swap_rest_url
        return self.spot_rest_url


class SecretsLoadError(Exception):
    """Secrets 로드 실패 예외"""

    pass


def _parse_client_section(client_config: Any) -> dict[str, Any]:
    """client 섹션 검증 (timeout, recv_window, URL override)"""
    if client_config is None:
        return {}
    if not isinstance(client_config, dict):
        raise SecretsLoadError("secrets.yaml의 'client' 섹션 형식이 잘못되었습니다")

    options: dict[str, Any] = {}

    timeout = client_config.get("timeout")
    if timeout is not None:
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            raise SecretsLoadError(
                f"client.timeout은 양수여야 합니다: {timeout!r}"
            )
        options["timeout"] = float(timeout)

    recv_window = client_config.get("recv_window")
    if recv_window is not None:
        if isinstance(recv_window, bool) or not isinstance(recv_window, int) or recv_window <= 0:
            raise SecretsLoadError(
                f"client.recv_window는 양의 정수여야 합니다: {recv_window!r}"
            )
        options["recv_window"] = recv_window

    for key in ("spot_rest_url", "swap_rest_url"):
        url = client_config.get(key)
        if url:
            options[key] = str(url)

    return options


def load_secrets(path: Path | None = None) -> Secrets:
    """secrets.yaml 파일 로드

    Args:
        path: secrets.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Secrets 인스턴스

    Raises:
        SecretsLoadError: 파일이 없거나 형식이 잘못된 경우
        ValueError: 유효하지 않은 mode인 경우
    """
    if path is None:
        path = Paths.SECRETS_FILE

    if not path.exists():
        raise SecretsLoadError(f"secrets.yaml 파일을 찾을 수 없습니다: {path}")

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise SecretsLoadError(f"secrets.yaml 파싱 실패: {e}") from e

    if data is None:
        raise SecretsLoadError("secrets.yaml이 비어 있습니다")
    if not isinstance(data, dict):
        raise SecretsLoadError("secrets.yaml 최상위는 매핑이어야 합니다")

    # mode 검증
    mode_str = data.get("mode")
    if mode_str is None:
        raise SecretsLoadError("secrets.yaml에 'mode' 필드가 없습니다")

    try:
        mode = TradingMode(mode_str)
    except ValueError as e:
        valid_modes = [m.value for m in TradingMode]
        raise ValueError(
            f"유효하지 않은 mode입니다: '{mode_str}'. "
            f"유효한 값: {valid_modes}"
        ) from e

    # 해당 모드의 API 키 로드
    mode_config = data.get(mode.value)
    if mode_config is None:
        raise SecretsLoadError(
            f"secrets.yaml에 '{mode.value}' 설정이 없습니다"
        )
    if not isinstance(mode_config, dict):
        raise SecretsLoadError(
            f"secrets.yaml의 '{mode.value}' 섹션 형식이 잘못되었습니다"
        )

    api_key = mode_config.get("api_key")
    api_secret = mode_config.get("api_secret")

    if not api_key:
        raise SecretsLoadError(
            f"secrets.yaml의 {mode.value} 섹션에 'api_key'가 없습니다"
        )
    if not api_secret:
        raise SecretsLoadError(
            f"secrets.yaml의 {mode.value} 섹션에 'api_secret'가 없습니다"
        )

    options = _parse_client_section(data.get("client"))

    return Secrets(
        mode=mode,
        api_key=api_key,
        api_secret=api_secret,
        **options,
    )


def get_exchange_config(secrets: Secrets) -> ExchangeConfig:
    """모드에 따른 거래소 설정 반환

    client 섹션의 URL override가 있으면 모드 기본값보다 우선.

    Args:
        secrets: Secrets 인스턴스

    Returns:
        ExchangeConfig 인스턴스 (Production 또는 Testnet)
    """
    if secrets.mode == TradingMode.PRODUCTION:
        spot_url = BingXEndpoints.PROD_SPOT_REST_URL
        swap_url = BingXEndpoints.PROD_SWAP_REST_URL
    else:
        spot_url = BingXEndpoints.TEST_SPOT_REST_URL
        swap_url = BingXEndpoints.TEST_SWAP_REST_URL

    return ExchangeConfig(
        spot_rest_url=secrets.spot_rest_url or spot_url,
        swap_rest_url=secrets.swap_rest_url or swap_url,
        api_key=secrets.api_key,
        api_secret=secrets.api_secret,
        timeout=secrets.timeout,
        recv_window=secrets.recv_window,
    )


class Settings:
    """애플리케이션 설정 (싱글턴 패턴)

    secrets.yaml을 로드하고 관련 설정을 제공
    """

    _instance: "Settings | None" = None
    _secrets: Secrets | None = None

    def __new__(cls, secrets_path: Path | None = None) -> "Settings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, secrets_path: Path | None = None) -> None:
        if self._secrets is None:
            type(self)._secrets = load_secrets(secrets_path)

    @property
    def mode(self) -> TradingMode:
        """현재 거래 모드"""
        assert self._secrets is not None
        return self._secrets.mode

    @property
    def api_key(self) -> str:
        """API 키"""
        assert self._secrets is not None
        return self._secrets.api_key

    @property
    def api_secret(self) -> str:
        """API Secret"""
        assert self._secrets is not None
        return self._secrets.api_secret

    @property
    def exchange_config(self) -> ExchangeConfig:
        """현재 모드의 거래소 설정"""
        assert self._secrets is not None
        return get_exchange_config(self._secrets)

    @classmethod
    def reset(cls) -> None:
        """싱글턴 인스턴스 초기화 (테스트용)"""
        cls._instance = None
        cls._secrets = None


def get_settings(secrets_path: Path | None = None) -> Settings:
    """Settings 인스턴스 반환

    Args:
        secrets_path: secrets.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Settings 싱글턴 인스턴스
    """
    return Settings(secrets_path)
