"""HathiTrust 클라이언트 로깅 모듈"""

from .logger import ClientLogger
from .formatters import ConsoleFormatter, JsonFormatter

__all__ = [
    "ClientLogger",
    "ConsoleFormatter",
    "JsonFormatter",
]
