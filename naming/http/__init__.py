from naming.http.client import DELETE, GET, POST, PUT, HttpResult, HttpTransport
from naming.http.headers import build_headers

__all__ = ["DELETE", "GET", "POST", "PUT", "HttpResult", "HttpTransport", "build_headers"]
