"""HathiTrust Bib API 쿼리 URL 빌더

URL 형식:
- 단일 식별자: {base}/api/volumes/{brief|full}/{kind}/{value}.json
- 복합 식별자: {base}/api/volumes/{brief|full}/json/{kind}:{value};{kind}:{value}|...

복합 형식에서는 htid 키를 id로 바꿔서 전송함 (값은 건드리지 않음).
"""

import urllib.parse
from collections.abc import Iterable, Mapping, Sequence
from enum import Enum

from .exceptions import InvalidArgumentError
from .utils import IDENTIFIER_KINDS, normalize_identifier

DEFAULT_BASE_URL = "http://catalog.hathitrust.org"

# 복합 인자 안에서만 적용되는 키 이름 변경
_COMPOSITE_KEYS = {"htid": "id"}

IdentifierSet = Mapping[str, str | int]


class ApiVariant(str, Enum):
    """응답 종류 (full은 marc-xml 포함)"""

    BRIEF = "brief"
    FULL = "full"


class QueryMode(str, Enum):
    """여러 식별자를 하나의 항목(single)으로 볼지 여러 항목(many)으로 볼지"""

    SINGLE = "single"
    MANY = "many"


def _coerce_enum(enum_cls: type[Enum], value: str | Enum, label: str):
    try:
        return enum_cls(value)
    except ValueError:
        choices = ", ".join(m.value for m in enum_cls)
        raise InvalidArgumentError(
            f"{label}는 다음 중 하나여야 합니다: {choices} (입력: {value!r})"
        ) from None


def _encode_value(value: str) -> str:
    """문법 구분자(;, |)와 URL 예약 문자만 이스케이프 (':', '/'는 유지)"""
    return urllib.parse.quote(value, safe=":/")


def _pairs(
    identifiers: Mapping[str, str | int | None], normalize: bool
) -> list[tuple[str, str]]:
    """None이 아닌 식별자를 (kind, value) 목록으로 변환 (입력 순서 유지)"""
    pairs = []
    for kind, value in identifiers.items():
        if kind not in IDENTIFIER_KINDS:
            raise InvalidArgumentError(
                f"알 수 없는 식별자 종류: {kind!r} (사용 가능: {', '.join(IDENTIFIER_KINDS)})"
            )
        if value is None:
            continue
        text = str(value)
        if normalize:
            text = normalize_identifier(kind, text)
            if not text:
                raise InvalidArgumentError(
                    f"정규화 후 빈 값이 된 식별자: {kind}={value!r}"
                )
        pairs.append((kind, text))
    return pairs


def make_args(pairs: Iterable[tuple[str, str]], sep: str = ";") -> str:
    """
    (kind, value) 쌍을 복합 인자 문자열로 직렬화

    Args:
        pairs: 식별자 쌍 목록
        sep: 쌍 사이 구분자 (항목 내부 ';', 항목 사이 '|')

    Returns:
        "id:BJD1;oclc:424023" 형태의 문자열
    """
    return sep.join(
        f"{_COMPOSITE_KEYS.get(kind, kind)}:{_encode_value(value)}"
        for kind, value in pairs
    )


def make_args_from_ids(ids: Sequence[IdentifierSet], normalize: bool = False) -> str:
    """식별자 집합 목록 → 집합별 ';' 결합 후 '|'로 연결"""
    if isinstance(ids, (Mapping, str)):
        raise InvalidArgumentError("ids는 식별자 집합(dict)의 목록이어야 합니다")
    args = []
    for position, id_set in enumerate(ids):
        if not isinstance(id_set, Mapping):
            raise InvalidArgumentError(
                f"ids[{position}]는 dict여야 합니다 (입력: {type(id_set).__name__})"
            )
        pairs = _pairs(id_set, normalize)
        if not pairs:
            raise InvalidArgumentError(f"ids[{position}]에 식별자가 없습니다")
        args.append(make_args(pairs))
    return "|".join(args)


def build_url(
    ids: Sequence[IdentifierSet] | None = None,
    *,
    variant: str | ApiVariant = ApiVariant.BRIEF,
    mode: str | QueryMode = QueryMode.SINGLE,
    normalize: bool = False,
    base_url: str = DEFAULT_BASE_URL,
    **identifiers: str | int | None,
) -> str:
    """
    식별자로 Bib API 요청 URL 구성

    ids가 주어지면 개별 식별자 인자는 무시함.
    개별 식별자는 호출 시 넘긴 키워드 순서대로 직렬화됨.

    Args:
        ids: 식별자 집합 목록 (각 집합은 하나의 항목)
        variant: brief 또는 full
        mode: single (';' 결합) 또는 many ('|' 결합)
        normalize: True이면 식별자를 정규형으로 변환
        base_url: API 호스트
        **identifiers: oclc, lccn, issn, isbn, htid, recordnumber

    Returns:
        요청 URL

    Raises:
        InvalidArgumentError: 식별자가 없거나 옵션이 잘못된 경우
    """
    variant = _coerce_enum(ApiVariant, variant, "variant")
    mode = _coerce_enum(QueryMode, mode, "mode")
    root = f"{base_url.rstrip('/')}/api/volumes/{variant.value}"

    pairs = _pairs(identifiers, normalize)
    if ids:
        return f"{root}/json/{make_args_from_ids(ids, normalize)}"

    if not pairs:
        raise InvalidArgumentError("at least one identifier required")

    if len(pairs) == 1:
        kind, value = pairs[0]
        return f"{root}/{kind}/{_encode_value(value)}.json"

    sep = ";" if mode is QueryMode.SINGLE else "|"
    return f"{root}/json/{make_args(pairs, sep=sep)}"
