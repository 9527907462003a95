"""로깅 모듈 테스트"""

import json
import logging

import pytest

from hathi_logging import ClientLogger, ConsoleFormatter, JsonFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("hathitrust.bib", logging.INFO, __file__, 1, "", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    root = logging.getLogger("hathitrust")
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(logging.NOTSET)


class TestConsoleFormatter:
    """콘솔 포맷"""

    def test_http_request(self):
        text = ConsoleFormatter().format(_record(
            client="bib", event="http_request", method="GET",
            url="http://catalog.hathitrust.org/api/volumes/brief/oclc/1.json",
            status=200, elapsed_ms=245.0, size=2048,
        ))
        assert "HTTP GET http://catalog.hathitrust.org/api/volumes/brief/oclc/1.json" in text
        assert "200 (245ms, 2.0KB)" in text
        assert "bib" in text

    def test_long_url_shortened(self):
        text = ConsoleFormatter().format(_record(
            event="http_error", url="http://x/" + "a" * 200, error="HTTP 500",
        ))
        assert "..." in text
        assert "HTTP 500" in text

    def test_lookup_complete(self):
        text = ConsoleFormatter().format(_record(
            event="lookup_complete", record_count=1, item_count=3, elapsed_ms=120.0,
        ))
        assert "레코드 1건, 아이템 3건" in text

    def test_lookup_without_records(self):
        text = ConsoleFormatter().format(_record(
            event="lookup_complete", record_count=0, item_count=0, elapsed_ms=10.0,
        ))
        assert "조회 결과 없음" in text

    def test_unknown_event_with_error(self):
        text = ConsoleFormatter().format(_record(event="invalid_argument", error="bad"))
        assert "invalid_argument: bad" in text

    def test_format_size(self):
        assert ConsoleFormatter._format_size(512) == "512B"
        assert ConsoleFormatter._format_size(3 * 1024 * 1024) == "3.0MB"


class TestJsonFormatter:
    """JSON Lines 포맷"""

    def test_extra_fields_included(self):
        line = JsonFormatter().format(_record(client="bib", event="query_built", shape="direct"))
        data = json.loads(line)

        assert data["level"] == "INFO"
        assert data["client"] == "bib"
        assert data["event"] == "query_built"
        assert data["shape"] == "direct"
        assert "lineno" not in data

    def test_non_serializable_stringified(self):
        data = json.loads(JsonFormatter().format(_record(event="debug", value=object())))
        assert isinstance(data["value"], str)


class TestClientLogger:
    """ClientLogger"""

    def test_no_output_without_configure(self, capsys):
        """configure 전에는 핸들러가 없음"""
        ClientLogger("bib").lookup_complete("http://x", 1, 1, 1.0)
        assert logging.getLogger("hathitrust").handlers == []

    def test_configure_writes_json_lines(self, tmp_path):
        log_file = tmp_path / "logs" / "hathi.jsonl"
        ClientLogger.configure(level="DEBUG", log_file=log_file, console=False)

        logger = ClientLogger("bib")
        logger.set_request_id("abc123")
        logger.query_built("http://x/oclc/1.json", shape="direct", identifier_count=1)
        logging.getLogger("hathitrust").handlers[0].flush()

        entry = json.loads(log_file.read_text(encoding="utf-8").splitlines()[0])
        assert entry["event"] == "query_built"
        assert entry["request_id"] == "abc123"
        assert entry["identifier_count"] == 1

    def test_configure_replaces_handlers(self):
        ClientLogger.configure(level="INFO", console=True)
        ClientLogger.configure(level="INFO", console=True)
        assert len(logging.getLogger("hathitrust").handlers) == 1

    def test_lookup_without_records_is_warning(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="hathitrust"):
            ClientLogger("bib").lookup_complete("http://x", 0, 0, 1.0)
        assert caplog.records[-1].levelno == logging.WARNING
