"""Bib API HTTP 요청 - 단일 GET, 상태 확인, JSON 디코딩"""

import json
import time
from typing import Any

import httpx

from hathi_logging import ClientLogger

from .exceptions import HttpError, ParseError

USER_AGENT = "hathi-bib/0.1 (+https://www.hathitrust.org/bib_api)"


def fetch_json(
    url: str,
    *,
    logger: ClientLogger | None = None,
    verbose: bool = False,
    **client_options: Any,
) -> Any:
    """
    URL에서 JSON 가져오기

    매 호출마다 새로운 httpx.Client를 열고 닫음 (연결은 호출 범위 안에서만 사용).
    재시도 없음.

    Args:
        url: 요청 URL
        logger: 이벤트 로거 (없으면 "fetch" 로거 사용)
        verbose: True이면 요청/응답을 INFO 레벨로 본문과 함께 기록
        **client_options: httpx.Client에 그대로 전달 (timeout, proxy, headers, verify, transport 등)

    Returns:
        디코딩된 JSON 값 (가공하지 않음)

    Raises:
        HttpError: 2xx 이외의 응답
        ParseError: 본문이 올바른 JSON이 아닌 경우
        httpx.RequestError: 연결/타임아웃 등 전송 오류
    """
    logger = logger or ClientLogger("fetch")

    headers = httpx.Headers(client_options.pop("headers", None))
    if "user-agent" not in headers:
        headers["User-Agent"] = USER_AGENT
    client_options.setdefault("follow_redirects", True)

    start = time.perf_counter()
    try:
        with httpx.Client(headers=headers, **client_options) as client:
            response = client.get(url)
    except httpx.RequestError as e:
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.http_error("GET", url, str(e), elapsed_ms)
        raise

    elapsed_ms = (time.perf_counter() - start) * 1000
    content = response.content
    body = content.decode("utf-8", errors="replace")

    if not response.is_success:
        logger.http_error(
            "GET", url, f"HTTP {response.status_code}", elapsed_ms,
            status=response.status_code,
        )
        raise HttpError(response.status_code, body, url)

    logger.http_request(
        method="GET",
        url=url,
        status=response.status_code,
        elapsed_ms=elapsed_ms,
        size=len(content),
        response_body=body,
        verbose=verbose,
    )

    try:
        return json.loads(body)
    except json.JSONDecodeError as e:
        logger.error("parse_error", str(e), {"url": url})
        raise ParseError(body, url) from e
