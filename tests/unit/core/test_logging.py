"""
core/logging.py 테스트

핸들러 구성, 로그 파일 생성, 노이즈 로거 레벨 조정 확인
"""

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

import pytest

from core.constants import Paths
from core.logging import NOISY_LOGGERS, get_log_file_path, setup_logging


@pytest.fixture
def restore_root_logger():
    """테스트 후 setup_logging이 추가한 핸들러 제거

    pytest 자체 캡처 핸들러는 pytest가 관리하므로 건드리지 않음.
    """
    root = logging.getLogger()
    saved_level = root.level
    yield
    for handler in list(root.handlers):
        if isinstance(handler, TimedRotatingFileHandler) or type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(saved_level)


class TestGetLogFilePath:
    """get_log_file_path 테스트"""

    def test_default_dir(self) -> None:
        """기본 디렉토리"""
        assert get_log_file_path("bingx") == Paths.LOGS_DIR / "bingx.log"

    def test_custom_dir(self, temp_dir: Path) -> None:
        """지정 디렉토리"""
        assert get_log_file_path("bingx", temp_dir) == temp_dir / "bingx.log"


class TestSetupLogging:
    """setup_logging 테스트"""

    def test_handlers_configured(self, temp_dir: Path, restore_root_logger) -> None:
        """콘솔 + 일별 파일 핸들러 구성"""
        root = setup_logging("bingx", log_dir=temp_dir)

        assert root is logging.getLogger()
        assert len(root.handlers) == 2
        assert any(isinstance(h, TimedRotatingFileHandler) for h in root.handlers)

    def test_log_file_created(self, temp_dir: Path, restore_root_logger) -> None:
        """로그 파일 생성 및 기록"""
        log_dir = temp_dir / "nested"
        setup_logging("bingx", log_dir=log_dir)

        logging.getLogger("adapters.bingx.rest_client").warning("hello")
        for handler in logging.getLogger().handlers:
            handler.flush()

        log_file = log_dir / "bingx.log"
        assert log_file.exists()
        assert "hello" in log_file.read_text(encoding="utf-8")

    def test_repeated_setup_no_duplicate_handlers(
        self,
        temp_dir: Path,
        restore_root_logger,
    ) -> None:
        """반복 호출 시 핸들러 중복 없음"""
        setup_logging("bingx", log_dir=temp_dir)
        root = setup_logging("bingx", log_dir=temp_dir)

        assert len(root.handlers) == 2

    def test_noisy_loggers_quieted(self, temp_dir: Path, restore_root_logger) -> None:
        """httpx 등 노이즈 로거는 WARNING"""
        setup_logging("bingx", log_dir=temp_dir)

        for name in NOISY_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING
