from dataclasses import dataclass
from typing import List, Tuple
from urllib.parse import urlsplit

import pytest

from naming.config.settings import NamingSettings
from naming.http.client import HttpResult


@dataclass
class RecordedCall:
    method: str
    url: str
    headers: List[Tuple[str, str]]
    params: List[Tuple[str, str]]
    encoding: str
    timeout_ms: int

    @property
    def host(self) -> str:
        return urlsplit(self.url).netloc

    def param(self, key):
        return [v for k, v in self.params if k == key]


class FakeTransport:
    """Transport double answering per host:port; an Exception value is raised"""

    def __init__(self, responses=None, default=None):
        self.responses = responses or {}
        self.default = default or HttpResult(200, "ok")
        self.calls: List[RecordedCall] = []
        self.closed = False
        self.on_call = None

    def _handle(self, method, url, headers, params, encoding, timeout_ms):
        call = RecordedCall(method, url, list(headers), list(params), encoding, timeout_ms)
        self.calls.append(call)
        if self.on_call:
            self.on_call(call)
        outcome = self.responses.get(call.host, self.default)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def http_get(self, *args):
        return self._handle("GET", *args)

    def http_put(self, *args):
        return self._handle("PUT", *args)

    def http_post(self, *args):
        return self._handle("POST", *args)

    def http_delete(self, *args):
        return self._handle("DELETE", *args)

    def close(self):
        self.closed = True


class FixedStart:
    """Random source whose randrange always returns the same index"""

    def __init__(self, start: int):
        self.start = start

    def randrange(self, *args, **kwargs):
        return self.start


@pytest.fixture
def settings():
    return NamingSettings(
        NAMESPACE="test-ns",
        SERVER_ADDR="",
        NAMING_DOMAIN=None,
        HTTP_REQ_TIMEOUT=1500,
        HB_FAIL_WAIT_TIME=7000,
        REQUEST_DOMAIN_RETRY_COUNT=3,
        CLIENT_IP="10.9.9.9",
        UDP_PORT=0,
    )


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def fixed_start():
    return FixedStart
