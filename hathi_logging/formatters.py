"""로그 포매터"""

import json
import logging
from datetime import datetime, timezone
from typing import Any

# LogRecord 기본 속성 (extra 필드 추출 시 제외)
_RECORD_ATTRS = {
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "pathname", "process", "processName", "relativeCreated",
    "stack_info", "exc_info", "exc_text", "thread", "threadName",
    "taskName", "message",
}


class ConsoleFormatter(logging.Formatter):
    """
    콘솔용 사람이 읽기 쉬운 포맷

    출력 예시:
    2024-01-15 10:30:45 [DEBUG] [bib] 쿼리: http://catalog.hathitrust.org/api/volumes/brief/oclc/424023.json (direct)
    2024-01-15 10:30:45 [INFO] [bib] 조회 완료: 레코드 1건, 아이템 3건 (245ms)
    """

    # ANSI 색상 코드
    COLORS = {
        logging.DEBUG: "\033[36m",  # Cyan
        logging.INFO: "\033[32m",   # Green
        logging.WARNING: "\033[33m",  # Yellow
        logging.ERROR: "\033[31m",  # Red
    }
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S")

        level_color = self.COLORS.get(record.levelno, "")
        client = getattr(record, "client", "")
        event = getattr(record, "event", "")

        prefix = f"{self.DIM}{timestamp}{self.RESET} [{level_color}{record.levelname}{self.RESET}]"
        if client:
            prefix += f" [{self.BOLD}{client}{self.RESET}]"

        if event:
            message = self._format_event(record, event)
        else:
            message = record.getMessage()

        return f"{prefix} {message}"

    def _format_event(self, record: logging.LogRecord, event: str) -> str:
        """이벤트 타입별 메시지 포맷팅"""

        if event == "query_built":
            url = getattr(record, "url", "")
            shape = getattr(record, "shape", "")
            return f"쿼리: {url} ({shape})"

        elif event == "http_request":
            method = getattr(record, "method", "GET")
            url = self._shorten(getattr(record, "url", ""))
            status = getattr(record, "status", 0)
            elapsed_ms = getattr(record, "elapsed_ms", 0)
            size = getattr(record, "size", 0)
            line = f"HTTP {method} {url}\n  → {status} ({elapsed_ms:.0f}ms, {self._format_size(size)})"
            body = getattr(record, "response_body", None)
            if body:
                line += f"\n{body}"
            return line

        elif event == "http_error":
            method = getattr(record, "method", "GET")
            url = self._shorten(getattr(record, "url", ""))
            error = getattr(record, "error", "")
            return f"HTTP {method} 실패: {url}\n  → {error}"

        elif event == "lookup_complete":
            records = getattr(record, "record_count", 0)
            items = getattr(record, "item_count", 0)
            elapsed_ms = getattr(record, "elapsed_ms", 0)
            if records:
                return f"조회 완료: 레코드 {records}건, 아이템 {items}건 ({elapsed_ms:.0f}ms)"
            return f"조회 결과 없음 ({elapsed_ms:.0f}ms)"

        else:
            error = getattr(record, "error", "")
            if error:
                return f"{event}: {error}"
            return event

    @staticmethod
    def _shorten(url: str, limit: int = 100) -> str:
        """URL 축약 (너무 길면)"""
        if len(url) > limit:
            return url[: limit - 3] + "..."
        return url

    @staticmethod
    def _format_size(size: int) -> str:
        """바이트 크기를 읽기 쉬운 형식으로"""
        if size < 1024:
            return f"{size}B"
        elif size < 1024 * 1024:
            return f"{size / 1024:.1f}KB"
        else:
            return f"{size / (1024 * 1024):.1f}MB"


class JsonFormatter(logging.Formatter):
    """
    JSON Lines 포맷 (기계 분석용)

    출력 예시:
    {"ts":"2024-01-15T10:30:45.123+00:00","level":"INFO","client":"bib","event":"lookup_complete",...}
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
        }

        for key, value in record.__dict__.items():
            if key in _RECORD_ATTRS or key.startswith("_"):
                continue
            # JSON 직렬화 가능한 값만 그대로, 나머지는 문자열로
            if isinstance(value, (str, int, float, bool, type(None), list, dict)):
                log_entry[key] = value
            else:
                log_entry[key] = str(value)

        return json.dumps(log_entry, ensure_ascii=False)
