"""공통 테스트 fixtures"""

import json

import httpx
import pytest


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """HathiTrust 관련 환경변수 제거"""
    monkeypatch.delenv("HATHITRUST_BASE_URL", raising=False)
    monkeypatch.delenv("HATHITRUST_TIMEOUT", raising=False)


@pytest.fixture
def brief_payload():
    """brief 응답 예시 (oclc=424023)"""
    return {
        "records": {
            "001597146": {
                "recordURL": "https://catalog.hathitrust.org/Record/001597146",
                "titles": ["The rites of passage.", "rites of passage."],
                "isbns": [],
                "issns": [],
                "oclcs": ["424023"],
                "lccns": ["60014343"],
            }
        },
        "items": [
            {
                "orig": "University of Michigan",
                "fromRecord": "001597146",
                "htid": "mdp.39015004186527",
                "itemURL": "https://hdl.handle.net/2027/mdp.39015004186527",
                "rightsCode": "ic",
                "lastUpdate": "20210921",
                "enumcron": False,
                "usRightsString": "Limited (search-only)",
            },
            {
                "orig": "University of California",
                "fromRecord": "001597146",
                "htid": "uc1.b4102366",
                "itemURL": "https://hdl.handle.net/2027/uc1.b4102366",
                "rightsCode": "pd",
                "lastUpdate": "20190412",
                "enumcron": "v.1",
                "usRightsString": "Full view",
            },
        ],
    }


@pytest.fixture
def mock_transport():
    """httpx.MockTransport 생성 헬퍼 (요청은 transport.requests에 기록)"""
    def _create(status: int = 200, body: bytes | str | dict | None = None):
        requests: list[httpx.Request] = []

        if isinstance(body, dict):
            content = json.dumps(body).encode("utf-8")
        elif isinstance(body, str):
            content = body.encode("utf-8")
        else:
            content = body or b""

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(status, content=content)

        transport = httpx.MockTransport(handler)
        transport.requests = requests
        return transport
    return _create
