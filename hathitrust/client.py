"""HathiTrust Bib API 클라이언트

사용 예:
    client = HathiBibClient()
    client.lookup(oclc=424023)
    client.lookup(htid="BJD1", oclc=424023, isbn="0030110408", variant="full")
    client.lookup(ids=[{"htid": "BJD1", "oclc": 424023}, {"lccn": "70628581"}])

    hathi_bib(lccn="70628581", isbn="0030110408", searchfor="many")
"""

import inspect
import os
import time
import uuid
from collections.abc import Sequence
from typing import Any

import httpx

from hathi_logging import ClientLogger
from models.volume import VolumeResult

from .exceptions import InvalidArgumentError
from .fetcher import fetch_json
from .query import (
    DEFAULT_BASE_URL,
    ApiVariant,
    IdentifierSet,
    QueryMode,
    build_url,
)
from .utils import IDENTIFIER_KINDS

# httpx.Client가 받는 옵션 이름 (follow_redirects는 fetch_json 기본값을 덮어씀)
CLIENT_OPTION_NAMES = frozenset(inspect.signature(httpx.Client).parameters)

# lookup()의 키워드. hathi_bib()에서는 which/searchfor로 받음
_QUERY_OPTION_NAMES = {"variant": "which", "mode": "searchfor"}


def _check_client_options(options: dict[str, Any]) -> None:
    """httpx.Client가 받지 않는 옵션이면 InvalidArgumentError"""
    for key in options:
        if key in _QUERY_OPTION_NAMES:
            raise InvalidArgumentError(
                f"{key}는 전송 옵션이 아닙니다. {_QUERY_OPTION_NAMES[key]}={options[key]!r}를 사용하세요"
            )
        if key not in CLIENT_OPTION_NAMES:
            raise InvalidArgumentError(
                f"알 수 없는 식별자 종류 또는 전송 옵션: {key!r} "
                f"(식별자: {', '.join(IDENTIFIER_KINDS)})"
            )


class HathiBibClient:
    """
    Bib API 클라이언트

    설정 우선순위: 생성자 인자 → 환경변수 → 기본값
    - HATHITRUST_BASE_URL: API 호스트
    - HATHITRUST_TIMEOUT: 요청 타임아웃 (초)

    client_options는 매 요청마다 httpx.Client에 그대로 전달됨.
    """

    name = "bib"

    def __init__(self, base_url: str | None = None, **client_options: Any):
        self.base_url = (
            base_url or os.environ.get("HATHITRUST_BASE_URL") or DEFAULT_BASE_URL
        )
        timeout = os.environ.get("HATHITRUST_TIMEOUT")
        if timeout and "timeout" not in client_options:
            try:
                client_options["timeout"] = float(timeout)
            except ValueError:
                raise InvalidArgumentError(
                    f"HATHITRUST_TIMEOUT는 숫자여야 합니다: {timeout!r}"
                ) from None
        _check_client_options(client_options)
        self.client_options = client_options
        self.logger = ClientLogger(self.name)

    def url(
        self,
        ids: Sequence[IdentifierSet] | None = None,
        *,
        variant: str | ApiVariant = ApiVariant.BRIEF,
        mode: str | QueryMode = QueryMode.SINGLE,
        normalize: bool = False,
        **identifiers: str | int | None,
    ) -> str:
        """요청 URL만 구성 (네트워크 요청 없음)"""
        url = build_url(
            ids,
            variant=variant,
            mode=mode,
            normalize=normalize,
            base_url=self.base_url,
            **identifiers,
        )
        if ids:
            count = sum(len(s) for s in ids)
        else:
            count = sum(v is not None for v in identifiers.values())
        shape = "composite" if ids or count > 1 else "direct"
        self.logger.query_built(url, shape=shape, identifier_count=count)
        return url

    def lookup(
        self,
        ids: Sequence[IdentifierSet] | None = None,
        *,
        variant: str | ApiVariant = ApiVariant.BRIEF,
        mode: str | QueryMode = QueryMode.SINGLE,
        normalize: bool = False,
        verbose: bool = False,
        **identifiers: str | int | None,
    ) -> Any:
        """
        식별자로 조회 후 파싱된 JSON 반환

        Args:
            ids: 식별자 집합 목록 (주어지면 개별 식별자는 무시)
            variant: brief 또는 full (full은 marc-xml 포함)
            mode: single 또는 many
            normalize: 식별자 정규화 여부
            verbose: 요청/응답 본문 로깅
            **identifiers: oclc, lccn, issn, isbn, htid, recordnumber

        Returns:
            {"records": {...}, "items": [...]} (가공하지 않음)

        Raises:
            InvalidArgumentError: 식별자 없음/잘못된 옵션 (요청 전)
            HttpError: 2xx 이외의 응답
            ParseError: JSON 파싱 실패
        """
        self.logger.set_request_id(uuid.uuid4().hex[:8])
        start = time.perf_counter()
        try:
            url = self.url(
                ids, variant=variant, mode=mode, normalize=normalize, **identifiers
            )
            payload = fetch_json(
                url, logger=self.logger, verbose=verbose, **self.client_options
            )

            if isinstance(payload, dict):
                elapsed_ms = (time.perf_counter() - start) * 1000
                self.logger.lookup_complete(
                    url,
                    record_count=len(payload.get("records") or {}),
                    item_count=len(payload.get("items") or []),
                    elapsed_ms=elapsed_ms,
                )
            return payload
        finally:
            self.logger.set_request_id(None)

    def lookup_result(
        self,
        ids: Sequence[IdentifierSet] | None = None,
        **kwargs: Any,
    ) -> VolumeResult:
        """lookup() 결과를 VolumeResult로 변환"""
        return VolumeResult.from_json(self.lookup(ids, **kwargs))


# 싱글톤 인스턴스 (편의용)
_default_client: HathiBibClient | None = None


def hathi_bib(
    ids: Sequence[IdentifierSet] | None = None,
    *,
    which: str = "brief",
    searchfor: str = "single",
    normalize: bool = False,
    verbose: bool = False,
    **kwargs: Any,
) -> Any:
    """
    Bib API 조회 헬퍼 함수

    식별자 종류 이름(oclc, lccn, issn, isbn, htid, recordnumber)의 키워드는
    식별자로, 나머지 키워드는 httpx.Client 옵션으로 전달됨.

    Args:
        ids: 식별자 집합 목록
        which: brief 또는 full
        searchfor: single 또는 many
        normalize: 식별자 정규화 여부
        verbose: 요청/응답 본문 로깅
        **kwargs: 식별자 + 전송 옵션 (timeout, proxy 등)

    Returns:
        파싱된 JSON 응답
    """
    global _default_client
    identifiers = {k: v for k, v in kwargs.items() if k in IDENTIFIER_KINDS}
    options = {k: v for k, v in kwargs.items() if k not in IDENTIFIER_KINDS}

    if options:
        client = HathiBibClient(**options)
    else:
        if _default_client is None:
            _default_client = HathiBibClient()
        client = _default_client

    return client.lookup(
        ids,
        variant=which,
        mode=searchfor,
        normalize=normalize,
        verbose=verbose,
        **identifiers,
    )
