"""
HTTP Transport for Naming Requests

Performs single GET/PUT/POST/DELETE calls against one server and reports
the raw status code and body. Retrying and failover live in the dispatcher;
this layer never retries.
"""

import httpx
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple
from urllib.parse import urlencode

from naming.exceptions import NetworkError
from naming.logging.config import get_logger

logger = get_logger("http-transport")

Pairs = Sequence[Tuple[str, str]]

GET = "GET"
PUT = "PUT"
POST = "POST"
DELETE = "DELETE"

# Connection limits
DEFAULT_LIMITS = httpx.Limits(
    max_keepalive_connections=20,
    max_connections=100,
    keepalive_expiry=30.0
)


@dataclass(frozen=True)
class HttpResult:
    """Status code and body of one HTTP exchange"""
    code: int
    content: str


class HttpTransport:
    """
    Synchronous HTTP transport backed by httpx.

    GET and DELETE carry parameters in the query string; PUT and POST send
    them as a form-encoded body.

    Usage:
        with HttpTransport() as transport:
            result = transport.http_get(url, headers, params, "UTF-8", 3000)
    """

    def __init__(
        self,
        limits: Optional[httpx.Limits] = None,
        transport: Optional[httpx.BaseTransport] = None
    ):
        self.client = httpx.Client(
            limits=limits or DEFAULT_LIMITS,
            transport=transport,
            follow_redirects=True
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        self.client.close()

    def http_get(self, url: str, headers: Pairs, params: Pairs, encoding: str, timeout_ms: int) -> HttpResult:
        return self._request(GET, url, headers, params, encoding, timeout_ms)

    def http_put(self, url: str, headers: Pairs, params: Pairs, encoding: str, timeout_ms: int) -> HttpResult:
        return self._request(PUT, url, headers, params, encoding, timeout_ms)

    def http_post(self, url: str, headers: Pairs, params: Pairs, encoding: str, timeout_ms: int) -> HttpResult:
        return self._request(POST, url, headers, params, encoding, timeout_ms)

    def http_delete(self, url: str, headers: Pairs, params: Pairs, encoding: str, timeout_ms: int) -> HttpResult:
        return self._request(DELETE, url, headers, params, encoding, timeout_ms)

    def _request(
        self,
        method: str,
        url: str,
        headers: Pairs,
        params: Pairs,
        encoding: str,
        timeout_ms: int
    ) -> HttpResult:
        request_headers: List[Tuple[str, str]] = list(headers)
        query = None
        body = None

        try:
            if method in (PUT, POST):
                body = urlencode(list(params), encoding=encoding).encode(encoding)
                request_headers.append(
                    ("Content-Type", f"application/x-www-form-urlencoded;charset={encoding}")
                )
            else:
                query = list(params)

            response = self.client.request(
                method,
                url,
                params=query,
                content=body,
                headers=request_headers,
                timeout=timeout_ms / 1000.0
            )
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeError, LookupError) as e:
            logger.debug("HTTP request failed", method=method, url=url, error=str(e))
            raise NetworkError(f"{type(e).__name__}: {e}", url=url) from e

        return HttpResult(code=response.status_code, content=response.text)
