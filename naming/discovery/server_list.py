"""
Naming Server Catalog

Holds the ordered list of naming server replicas and the namespace they
serve. Readers get a copy of the list, so a refresh that replaces it never
disturbs a dispatch already walking its own snapshot.
"""

import threading
from dataclasses import dataclass
from typing import Iterable, List, Optional

from naming.config.settings import NamingSettings
from naming.logging.config import get_logger
from naming.exceptions import InvalidParameter

logger = get_logger("server-list")

ADDR_SEPARATOR = ":"


@dataclass(frozen=True)
class ServerEndpoint:
    """One naming server replica"""
    host: str
    port: Optional[int] = None

    @property
    def complete_address(self) -> str:
        """host:port, or the bare host when no port is known"""
        if self.port is None:
            return self.host
        return f"{self.host}{ADDR_SEPARATOR}{self.port}"

    @classmethod
    def parse(cls, address: str) -> "ServerEndpoint":
        """Parse 'host', 'host:port' or 'http://host:port'"""
        addr = address.strip()
        if "://" in addr:
            addr = addr.split("://", 1)[1]
        addr = addr.rstrip("/")
        if not addr:
            raise InvalidParameter(f"Invalid server address: '{address}'", "server_addr")

        if ADDR_SEPARATOR not in addr:
            return cls(host=addr)

        host, _, port = addr.rpartition(ADDR_SEPARATOR)
        if not host or not port.isdigit():
            raise InvalidParameter(f"Invalid server address: '{address}'", "server_addr")
        return cls(host=host, port=int(port))

    def __str__(self) -> str:
        return self.complete_address


class ServerListManager:
    """
    Thread-safe server catalog.

    Usage:
        catalog = ServerListManager(["10.0.0.1:8848", "10.0.0.2:8848"], namespace="public")
        snapshot = catalog.get_server_list()
    """

    def __init__(
        self,
        servers: Iterable = (),
        namespace: str = "public",
        endpoint: Optional[str] = None
    ):
        self._lock = threading.Lock()
        self._servers: List[ServerEndpoint] = self._normalize(servers)
        self._namespace = namespace
        self._endpoint = endpoint

    @classmethod
    def from_settings(cls, settings: NamingSettings) -> "ServerListManager":
        return cls(
            servers=settings.server_list,
            namespace=settings.NAMESPACE,
            endpoint=settings.ENDPOINT
        )

    @staticmethod
    def _normalize(servers: Iterable) -> List[ServerEndpoint]:
        return [
            s if isinstance(s, ServerEndpoint) else ServerEndpoint.parse(s)
            for s in servers
        ]

    def get_server_list(self) -> List[ServerEndpoint]:
        """Snapshot of the current servers"""
        with self._lock:
            return list(self._servers)

    def get_server_count(self) -> int:
        with self._lock:
            return len(self._servers)

    def get_namespace(self) -> str:
        return self._namespace

    def get_endpoint(self) -> Optional[str]:
        return self._endpoint

    def set_servers(self, servers: Iterable) -> None:
        """Replace the server list atomically"""
        new_servers = self._normalize(servers)
        with self._lock:
            self._servers = new_servers
        logger.info("Server list updated", servers=str(self))

    def close(self) -> None:
        with self._lock:
            self._servers = []

    def __str__(self) -> str:
        with self._lock:
            return ",".join(s.complete_address for s in self._servers)
