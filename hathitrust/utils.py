"""식별자 정규화 유틸리티

HathiTrust 문서에 기술된 정규형으로 식별자 값을 정리.
클라이언트는 기본적으로 값을 그대로 전송하며, normalize=True일 때만 사용됨.
"""

import re

IDENTIFIER_KINDS = ("oclc", "lccn", "issn", "isbn", "htid", "recordnumber")


def is_isbn(query: str) -> bool:
    """ISBN-10 또는 ISBN-13 형식인지 확인

    Args:
        query: 검색어

    Returns:
        True if ISBN 형식 (10/13자리, ISBN-10은 끝자리 X 허용)
    """
    clean = clean_isbn(query).upper()
    if len(clean) == 13:
        return clean.isdigit()
    if len(clean) == 10:
        return clean[:9].isdigit() and (clean[9].isdigit() or clean[9] == "X")
    return False


def clean_isbn(isbn: str) -> str:
    """ISBN에서 하이픈/공백 제거"""
    return isbn.replace("-", "").replace(" ", "")


def _digits_with_check(value: str) -> str:
    """숫자와 끝자리 X만 남김 (ISSN, ISBN 공통)"""
    value = value.strip().upper()
    digits = re.sub(r"[^0-9]", "", value)
    if value.endswith("X"):
        digits += "X"
    return digits


def normalize_oclc(value: str) -> str:
    """OCLC 번호: 숫자만 남김 ("(OCoLC)ocm00424023" → "00424023")"""
    return re.sub(r"[^0-9]", "", value)


def normalize_issn(value: str) -> str:
    """ISSN: 숫자와 끝자리 X만 남김"""
    return _digits_with_check(value)


def normalize_isbn(value: str) -> str:
    """ISBN: 숫자와 끝자리 X만 남김 (ISBN-10은 ISBN-10으로 유지)"""
    return _digits_with_check(value)


def normalize_lccn(value: str) -> str:
    """
    LCCN 정규화 (Library of Congress 권장 방식)

    1. 모든 공백 제거
    2. '/'가 있으면 그 이후 전부 제거
    3. 하이픈이 있으면 제거하고, 하이픈 뒤 부분을 6자리가 되도록 앞을 0으로 채움

    예: "n78-890351" → "n78890351", "85-2 " → "85000002"
    """
    lccn = re.sub(r"\s", "", value)
    lccn = lccn.split("/", 1)[0]
    if "-" in lccn:
        prefix, suffix = lccn.split("-", 1)
        lccn = prefix + suffix.replace("-", "").zfill(6)
    return lccn


def isbn10_to_isbn13(isbn: str) -> str | None:
    """
    ISBN-10 → ISBN-13 변환 (978 접두어)

    Returns:
        ISBN-13 문자열 또는 None (ISBN-10이 아닌 경우)
    """
    clean = clean_isbn(isbn).upper()
    if len(clean) != 10 or not is_isbn(clean):
        return None
    body = "978" + clean[:9]
    total = sum(int(d) * (1 if i % 2 == 0 else 3) for i, d in enumerate(body))
    return body + str((10 - total % 10) % 10)


_NORMALIZERS = {
    "oclc": normalize_oclc,
    "lccn": normalize_lccn,
    "issn": normalize_issn,
    "isbn": normalize_isbn,
}


def normalize_identifier(kind: str, value: str) -> str:
    """
    식별자 종류에 맞는 정규화 적용

    htid, recordnumber는 앞뒤 공백만 제거.
    """
    normalizer = _NORMALIZERS.get(kind)
    if normalizer is None:
        return value.strip()
    return normalizer(value)
