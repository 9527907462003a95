"""HathiTrust Bib API 클라이언트"""

from .client import HathiBibClient, hathi_bib
from .exceptions import HathiTrustError, HttpError, InvalidArgumentError, ParseError
from .fetcher import fetch_json
from .query import ApiVariant, QueryMode, build_url, make_args, make_args_from_ids
from .utils import IDENTIFIER_KINDS, isbn10_to_isbn13, normalize_identifier

__all__ = [
    "HathiBibClient",
    "hathi_bib",
    "HathiTrustError",
    "HttpError",
    "InvalidArgumentError",
    "ParseError",
    "fetch_json",
    "ApiVariant",
    "QueryMode",
    "build_url",
    "make_args",
    "make_args_from_ids",
    "IDENTIFIER_KINDS",
    "isbn10_to_isbn13",
    "normalize_identifier",
]
