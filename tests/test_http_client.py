import uuid
from urllib.parse import parse_qsl

import httpx
import pytest

from naming.exceptions import NetworkError
from naming.http.client import HttpResult, HttpTransport
from naming.http.headers import build_headers

URL = "http://10.0.0.1:8848/nacos/v1/ns/instance"
PARAMS = [("serviceName", "orders"), ("ip", "1.1.1.1"), ("tag", "a"), ("tag", "b")]


def mock_transport(captured, status=200, text="ok"):
    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(status, text=text)
    return HttpTransport(transport=httpx.MockTransport(handler))


def test_get_sends_query_params_in_order():
    captured = []
    with mock_transport(captured) as transport:
        result = transport.http_get(URL, [("Client-Version", "v1")], PARAMS, "UTF-8", 3000)

    assert result == HttpResult(200, "ok")
    request = captured[0]
    assert request.method == "GET"
    assert request.url.params.multi_items() == PARAMS
    assert request.headers["Client-Version"] == "v1"


def test_delete_sends_query_params():
    captured = []
    with mock_transport(captured) as transport:
        transport.http_delete(URL, [], PARAMS, "UTF-8", 3000)

    assert captured[0].method == "DELETE"
    assert captured[0].url.params.multi_items() == PARAMS
    assert captured[0].content == b""


@pytest.mark.parametrize("method", ["http_post", "http_put"])
def test_post_and_put_send_form_body(method):
    captured = []
    with mock_transport(captured) as transport:
        getattr(transport, method)(URL, [], PARAMS, "UTF-8", 3000)

    request = captured[0]
    assert request.method == method[len("http_"):].upper()
    assert request.headers["Content-Type"] == "application/x-www-form-urlencoded;charset=UTF-8"
    assert parse_qsl(request.content.decode()) == PARAMS
    assert not request.url.params


def test_error_status_is_returned_not_raised():
    with mock_transport([], status=503, text="busy") as transport:
        result = transport.http_get(URL, [], [], "UTF-8", 3000)

    assert result.code == 503
    assert result.content == "busy"


@pytest.mark.parametrize("error", [httpx.ConnectError("refused"), httpx.ReadTimeout("slow")])
def test_network_failure_raises_network_error(error):
    def handler(request):
        raise error

    with HttpTransport(transport=httpx.MockTransport(handler)) as transport:
        with pytest.raises(NetworkError) as exc_info:
            transport.http_get(URL, [], [], "UTF-8", 3000)

    assert exc_info.value.url == URL
    assert isinstance(exc_info.value.__cause__, httpx.HTTPError)


@pytest.mark.parametrize("method", ["http_post", "http_put"])
@pytest.mark.parametrize("encoding, cause", [("ISO-8859-1", UnicodeEncodeError), ("no-such-charset", LookupError)])
def test_unencodable_params_raise_network_error(method, encoding, cause):
    captured = []
    with mock_transport(captured) as transport:
        with pytest.raises(NetworkError) as exc_info:
            getattr(transport, method)(URL, [], [("metadata", "\u6f22")], encoding, 3000)

    assert captured == []
    assert exc_info.value.url == URL
    assert isinstance(exc_info.value.__cause__, cause)


def test_build_headers():
    headers = build_headers("Naming-Python-Client:v1.0.0")

    assert [name for name, _ in headers] == [
        "Client-Version",
        "User-Agent",
        "Accept-Encoding",
        "Connection",
        "RequestId",
        "Request-Module",
    ]
    values = dict(headers)
    assert values["Client-Version"] == values["User-Agent"] == "Naming-Python-Client:v1.0.0"
    assert values["Accept-Encoding"] == "gzip,deflate,sdch"
    assert values["Connection"] == "Keep-Alive"
    assert values["Request-Module"] == "Naming"
    uuid.UUID(values["RequestId"])


def test_request_id_is_fresh():
    first = dict(build_headers("v"))["RequestId"]
    second = dict(build_headers("v"))["RequestId"]
    assert first != second
