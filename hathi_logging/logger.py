"""HathiTrust 클라이언트 전용 로거"""

import logging
import sys
from pathlib import Path
from typing import Any

from .formatters import ConsoleFormatter, JsonFormatter

ROOT_LOGGER_NAME = "hathitrust"


class ClientLogger:
    """
    구조화된 이벤트 로거

    - 콘솔: 사람이 읽기 쉬운 컬러 포맷
    - 파일: JSON Lines 포맷 (기계 분석용)

    configure()를 호출하기 전에는 아무 핸들러도 붙지 않으므로
    라이브러리로 사용할 때는 출력이 없음.

    Usage:
        logger = ClientLogger("bib")
        logger.query_built(url, shape="direct", identifier_count=1)
        logger.http_request("GET", url, 200, 156.3, 2341)
        logger.lookup_complete(url, record_count=1, item_count=3, elapsed_ms=160.2)
    """

    _root_logger: logging.Logger | None = None
    _file_handler: logging.FileHandler | None = None
    _console_handler: logging.StreamHandler | None = None

    def __init__(self, name: str):
        self.name = name
        self.logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
        self._request_id: str | None = None

    def set_request_id(self, request_id: str | None) -> None:
        """현재 조회 요청 ID 설정 (이후 모든 이벤트에 포함)"""
        self._request_id = request_id

    @classmethod
    def configure(
        cls,
        level: str = "INFO",
        log_file: str | Path | None = None,
        console: bool = True,
    ) -> None:
        """
        전역 로깅 설정

        Args:
            level: 로깅 레벨 (DEBUG, INFO, WARNING, ERROR)
            log_file: JSON Lines 로그 파일 경로
            console: 콘솔(stderr) 출력 여부
        """
        root = logging.getLogger(ROOT_LOGGER_NAME)
        log_level = getattr(logging, level.upper())
        root.setLevel(log_level)

        # 기존 핸들러 제거
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
        cls._console_handler = None
        cls._file_handler = None

        if console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(ConsoleFormatter())
            root.addHandler(console_handler)
            cls._console_handler = console_handler

        if log_file:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_path, encoding="utf-8")
            file_handler.setFormatter(JsonFormatter())
            root.addHandler(file_handler)
            cls._file_handler = file_handler

        cls._root_logger = root

    def _log(self, level: int, event: str, **kwargs: Any) -> None:
        """구조화된 로그 출력"""
        extra = {
            "client": self.name,
            "event": event,
            "request_id": self._request_id,
            **kwargs,
        }
        self.logger.log(level, event, extra=extra)

    # === 쿼리 로깅 ===

    def query_built(self, url: str, shape: str, identifier_count: int) -> None:
        """
        요청 URL 구성 완료 로깅

        Args:
            url: 구성된 요청 URL
            shape: URL 형식 (direct, composite)
            identifier_count: 직렬화된 식별자 수
        """
        self._log(
            logging.DEBUG,
            "query_built",
            url=url,
            shape=shape,
            identifier_count=identifier_count,
        )

    # === HTTP 요청 로깅 ===

    def http_request(
        self,
        method: str,
        url: str,
        status: int,
        elapsed_ms: float,
        size: int = 0,
        response_body: str | None = None,
        verbose: bool = False,
    ) -> None:
        """
        HTTP 요청/응답 로깅

        Args:
            method: HTTP 메서드
            url: 요청 URL
            status: 응답 상태 코드
            elapsed_ms: 응답 시간 (밀리초)
            size: 응답 크기 (바이트)
            response_body: 응답 본문 (verbose일 때만 기록)
            verbose: True이면 INFO 레벨로 본문과 함께 기록
        """
        self._log(
            logging.INFO if verbose else logging.DEBUG,
            "http_request",
            method=method,
            url=url,
            status=status,
            elapsed_ms=round(elapsed_ms, 1),
            size=size,
            response_body=response_body if verbose else None,
        )

    def http_error(
        self,
        method: str,
        url: str,
        error: str,
        elapsed_ms: float = 0,
        status: int | None = None,
    ) -> None:
        """HTTP 요청 실패 로깅"""
        self._log(
            logging.ERROR,
            "http_error",
            method=method,
            url=url,
            error=error,
            status=status,
            elapsed_ms=round(elapsed_ms, 1),
        )

    # === 조회 플로우 로깅 ===

    def lookup_complete(
        self,
        url: str,
        record_count: int,
        item_count: int,
        elapsed_ms: float,
    ) -> None:
        """조회 완료 로깅 (레코드가 없으면 WARNING)"""
        level = logging.INFO if record_count else logging.WARNING
        self._log(
            level,
            "lookup_complete",
            url=url,
            record_count=record_count,
            item_count=item_count,
            elapsed_ms=round(elapsed_ms, 1),
        )

    # === 에러 로깅 ===

    def error(self, event: str, error: str, context: dict[str, Any] | None = None) -> None:
        """에러 로깅"""
        self._log(
            logging.ERROR,
            event,
            error=error,
            **(context or {}),
        )
