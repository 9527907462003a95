"""HathiTrust 클라이언트 예외 타입"""


class HathiTrustError(Exception):
    """모든 클라이언트 예외의 베이스 클래스"""


class InvalidArgumentError(HathiTrustError, ValueError):
    """식별자/옵션이 잘못된 경우 (네트워크 요청 전에 발생)"""


class HttpError(HathiTrustError):
    """2xx 이외의 HTTP 응답"""

    def __init__(self, status_code: int, body: str, url: str = ""):
        self.status_code = status_code
        self.body = body
        self.url = url
        super().__init__(f"HTTP {status_code}: {url}")


class ParseError(HathiTrustError):
    """응답 본문이 올바른 JSON이 아닌 경우"""

    def __init__(self, body: str, url: str = ""):
        self.body = body
        self.url = url
        super().__init__(f"JSON 파싱 실패: {url}")
