"""CLI (main.py) 테스트"""

import argparse
import json
import logging

import httpx
import pytest

import main
from hathitrust.client import HathiBibClient
from hathitrust.exceptions import HttpError


@pytest.fixture(autouse=True)
def reset_logging():
    """configure()가 붙인 핸들러 정리"""
    yield
    root = logging.getLogger("hathitrust")
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(logging.NOTSET)


@pytest.fixture
def fake_lookup(monkeypatch, brief_payload):
    """HathiBibClient.lookup 대체 (호출 인자 기록)"""
    calls = []

    def _lookup(self, ids=None, **kwargs):
        calls.append((ids, kwargs))
        return brief_payload

    monkeypatch.setattr(HathiBibClient, "lookup", _lookup)
    return calls


class TestParseIdSet:
    """--ids 인자 파싱"""

    def test_parse(self):
        assert main.parse_id_set("htid=BJD1;oclc=424023") == {"htid": "BJD1", "oclc": "424023"}

    def test_whitespace_and_trailing_separator(self):
        assert main.parse_id_set(" LCCN = 70628581 ; ") == {"lccn": "70628581"}

    @pytest.mark.parametrize("text", ["oclc", "=1", "oclc=", ";"])
    def test_invalid(self, text):
        with pytest.raises(argparse.ArgumentTypeError):
            main.parse_id_set(text)


class TestUrlOnly:
    """--url-only"""

    def test_identifier_order_preserved(self, capsys):
        """명령줄 순서대로 직렬화"""
        code = main.main(["--htid", "BJD1", "--oclc", "424023", "--url-only", "--log-level", "ERROR"])

        assert code == 0
        out = capsys.readouterr().out.strip()
        assert out == "http://catalog.hathitrust.org/api/volumes/brief/json/id:BJD1;oclc:424023"

    def test_ids_many(self, capsys):
        code = main.main([
            "--ids", "htid=BJD1;oclc=424023",
            "--ids", "lccn=70628581",
            "--searchfor", "many",
            "--url-only",
            "--log-level", "ERROR",
        ])

        assert code == 0
        out = capsys.readouterr().out.strip()
        assert out.endswith("/json/id:BJD1;oclc:424023|lccn:70628581")

    def test_normalize_flag(self, capsys):
        main.main(["--isbn", "0-03-011040-8", "--normalize", "--url-only", "--log-level", "ERROR"])
        assert capsys.readouterr().out.strip().endswith("/isbn/0030110408.json")


class TestLookup:
    """조회 실행"""

    def test_prints_summary(self, fake_lookup, capsys):
        code = main.main(["--oclc", "424023", "--which", "full", "--log-level", "ERROR"])

        assert code == 0
        ids, kwargs = fake_lookup[0]
        assert ids == []
        assert kwargs["variant"] == "full"
        assert kwargs["oclc"] == "424023"
        assert "[001597146] The rites of passage." in capsys.readouterr().out

    def test_raw_output(self, fake_lookup, capsys, brief_payload):
        main.main(["--oclc", "424023", "--raw", "--log-level", "ERROR"])
        assert json.loads(capsys.readouterr().out) == brief_payload

    def test_save_csv(self, fake_lookup, tmp_path):
        """CSV: 아이템별 행"""
        output = tmp_path / "items.csv"
        main.main(["--oclc", "424023", "-o", str(output), "--log-level", "ERROR"])

        text = output.read_text(encoding="utf-8-sig")
        lines = text.strip().splitlines()
        assert lines[0].startswith("record_number,title,htid")
        assert len(lines) == 3

    def test_save_json(self, fake_lookup, tmp_path, brief_payload):
        output = tmp_path / "result.json"
        main.main(["--oclc", "424023", "-o", str(output), "-f", "json", "--log-level", "ERROR"])
        assert json.loads(output.read_text(encoding="utf-8")) == brief_payload

    def test_timeout_option(self, fake_lookup, monkeypatch):
        """--timeout은 클라이언트 옵션으로 전달"""
        created = []
        original_init = HathiBibClient.__init__

        def _init(self, base_url=None, **options):
            created.append(options)
            original_init(self, base_url, **options)

        monkeypatch.setattr(HathiBibClient, "__init__", _init)
        main.main(["--oclc", "1", "--timeout", "3", "--log-level", "ERROR"])
        assert created == [{"timeout": 3.0}]


class TestExitCodes:
    """오류 → 종료 코드"""

    def test_no_identifiers_exit_2(self):
        assert main.main(["--log-level", "ERROR"]) == 2

    def test_unknown_kind_in_ids_exit_2(self):
        assert main.main(["--ids", "doi=10.1/x", "--log-level", "ERROR"]) == 2

    def test_http_error_exit_1(self, monkeypatch):
        def _lookup(self, ids=None, **kwargs):
            raise HttpError(503, "unavailable", "http://x")

        monkeypatch.setattr(HathiBibClient, "lookup", _lookup)
        assert main.main(["--oclc", "1", "--log-level", "ERROR"]) == 1

    def test_transport_error_exit_1(self, monkeypatch):
        def _lookup(self, ids=None, **kwargs):
            raise httpx.ConnectError("refused")

        monkeypatch.setattr(HathiBibClient, "lookup", _lookup)
        assert main.main(["--oclc", "1", "--log-level", "ERROR"]) == 1

    def test_invalid_which_rejected_by_parser(self):
        with pytest.raises(SystemExit):
            main.main(["--oclc", "1", "--which", "medium"])

    def test_invalid_env_timeout_exit_2(self, monkeypatch):
        """HATHITRUST_TIMEOUT이 숫자가 아니면 종료 코드 2"""
        monkeypatch.setenv("HATHITRUST_TIMEOUT", "abc")
        assert main.main(["--oclc", "1", "--url-only", "--log-level", "ERROR"]) == 2

    def test_repeated_kind_is_usage_error(self, capsys):
        """같은 식별자 플래그를 두 번 주면 사용법 오류"""
        with pytest.raises(SystemExit) as exc_info:
            main.main(["--oclc", "1", "--oclc", "2", "--url-only", "--log-level", "ERROR"])

        assert exc_info.value.code == 2
        assert "--oclc" in capsys.readouterr().err
