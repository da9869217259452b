"""
Request Dispatcher with Server Failover

Sends one logical request to the naming cluster. A snapshot of the server
list is taken per call, a starting server is picked at random, and the
snapshot is walked round-robin until one server answers or every server has
been tried exactly once.

Attempt outcomes are values (CallResult / DispatchResult) rather than
exceptions, so the failover loop is a plain fold over attempts. dispatch()
raises the final DispatchError for callers that want exceptions;
try_dispatch() hands back the result.

Usage:
    dispatcher = Dispatcher(ServerListManager(["a:8848", "b:8848"]), HttpTransport())
    body = dispatcher.dispatch("/instance/list", ParameterSet([("serviceName", "svc")]), GET)
"""

import random
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Union

from naming.config.settings import NamingSettings, get_settings
from naming.logging.config import get_logger
from naming.discovery.server_list import ADDR_SEPARATOR, ServerListManager
from naming.exceptions import (
    AllServersExhausted,
    DispatchError,
    InvalidParameter,
    NetworkError,
    NoServerAvailable,
    ServerError,
    TransportError,
)
from naming.http.client import DELETE, GET, POST, PUT, HttpResult, HttpTransport
from naming.http.headers import build_headers
from naming.proxy.params import NAMESPACE_ID, ParameterSet

logger = get_logger("naming-dispatcher")

HTTP_OK = 200
HTTP_NOT_MODIFIED = 304


class _NotModified:
    """Body of a 304 answer: a success that carries no content"""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return "NOT_MODIFIED"


NOT_MODIFIED = _NotModified()

Body = Union[str, _NotModified]


@dataclass
class CallResult:
    """Outcome of one attempt against one server"""
    body: Optional[Body] = None
    error: Optional[ServerError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class DispatchResult:
    """Outcome of a whole dispatch"""
    body: Optional[Body] = None
    error: Optional[DispatchError] = None
    servers_tried: List[str] = field(default_factory=list)
    errors: List[ServerError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Body:
        """Return the body or raise the dispatch error"""
        if self.error is not None:
            raise self.error
        return self.body


class Dispatcher:
    """
    Failover dispatcher over a naming server catalog.

    The dispatcher owns the catalog (close() releases it); the transport and
    settings are borrowed.
    """

    def __init__(
        self,
        server_list_manager: ServerListManager,
        transport: HttpTransport,
        settings: Optional[NamingSettings] = None,
        rng: Optional[random.Random] = None,
        domain: Optional[str] = None
    ):
        self.server_list_manager = server_list_manager
        self.transport = transport
        self.settings = settings or get_settings()
        self._rng = rng or random.Random()

        self.server_port = str(self.settings.DEFAULT_SERVER_PORT)
        self.timeout_ms = self.settings.HTTP_REQ_TIMEOUT
        self.retry_count = self.settings.REQUEST_DOMAIN_RETRY_COUNT

        self.domain = domain or self.settings.NAMING_DOMAIN

        self._methods: Dict[str, Callable[..., HttpResult]] = {
            GET: transport.http_get,
            PUT: transport.http_put,
            POST: transport.http_post,
            DELETE: transport.http_delete,
        }

        logger.debug(
            "Dispatcher created",
            namespace=self.namespace,
            endpoint=server_list_manager.get_endpoint(),
            servers=str(server_list_manager),
            domain=self.domain
        )

    @property
    def namespace(self) -> str:
        return self.server_list_manager.get_namespace()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        self.server_list_manager.close()

    def dispatch(self, api: str, params: Optional[ParameterSet] = None, method: str = GET) -> Body:
        """
        Send a request, failing over across servers.

        Returns:
            The response body, or NOT_MODIFIED for a 304 answer

        Raises:
            NoServerAvailable: No servers and no fixed domain configured
            AllServersExhausted: Every attempt failed
        """
        return self.try_dispatch(api, params, method).unwrap()

    def try_dispatch(self, api: str, params: Optional[ParameterSet] = None, method: str = GET) -> DispatchResult:
        """Same as dispatch() but returns the failure instead of raising it"""
        if params is None:
            params = ParameterSet()
        params.put(NAMESPACE_ID, self.namespace)

        servers = self.server_list_manager.get_server_list()
        if servers:
            return self._dispatch_round_robin(api, params, method, [s.complete_address for s in servers])

        if self.domain:
            return self._dispatch_domain(api, params, method)

        logger.error("No server available", api=api, namespace=self.namespace)
        return DispatchResult(error=NoServerAvailable())

    def _dispatch_round_robin(self, api: str, params: ParameterSet, method: str, servers: List[str]) -> DispatchResult:
        result = DispatchResult()
        n = len(servers)
        selected = self._rng.randrange(n)
        logger.debug("Selected starting server", nr_servers=n, selected=selected)

        for i in range(n):
            server = servers[(selected + i) % n]
            logger.debug("Trying to access server", server=server)
            result.servers_tried.append(server)

            attempt = self.call_server(api, params, server, method)
            if attempt.ok:
                result.body = attempt.body
                return result

            result.errors.append(attempt.error)
            logger.error("Request failed", server=server, api=api, error=attempt.error.message)

        result.error = AllServersExhausted(api, result.errors[-1].message, result.servers_tried)
        return result

    def _dispatch_domain(self, api: str, params: ParameterSet, method: str) -> DispatchResult:
        result = DispatchResult()

        for _ in range(self.retry_count):
            result.servers_tried.append(self.domain)
            attempt = self.call_server(api, params, self.domain, method)
            if attempt.ok:
                result.body = attempt.body
                return result

            result.errors.append(attempt.error)
            logger.error("Request to domain failed", server=self.domain, api=api, error=attempt.error.message)

        result.error = AllServersExhausted(api, result.errors[-1].message, [self.domain])
        return result

    def build_url(self, server: str, api: str) -> str:
        if ADDR_SEPARATOR not in server:
            server = f"{server}{ADDR_SEPARATOR}{self.server_port}"
        return f"http://{server}{self.settings.CONTEXT_PATH}{api}"

    def call_server(self, api: str, params: ParameterSet, server: str, method: str) -> CallResult:
        """
        Make one attempt against one server.

        Network and other adapter failures become TransportError; statuses other than 200/304
        become ServerError.
        """
        send = self._methods.get(method)
        if send is None:
            raise InvalidParameter(f"Unsupported HTTP method: {method}", "method")

        url = self.build_url(server, api)
        headers = build_headers(self.settings.CLIENT_VERSION)

        try:
            response = send(url, headers, params.items(), self.settings.ENCODING, self.timeout_ms)
        except NetworkError as e:
            return CallResult(error=TransportError(e.message))
        except Exception as e:
            logger.exception("Transport failed unexpectedly", server=server, api=api)
            return CallResult(error=TransportError(f"{type(e).__name__}: {e}"))

        if response.code == HTTP_OK:
            return CallResult(body=response.content)

        if response.code == HTTP_NOT_MODIFIED:
            return CallResult(body=NOT_MODIFIED)

        return CallResult(error=ServerError(
            response.code,
            response.content,
            f"failed to req API:{url} code:{response.code} errormsg:{response.content}"
        ))
