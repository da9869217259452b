import socket
from functools import lru_cache

from naming.logging.config import get_logger

logger = get_logger("net-utils")

LOOPBACK = "127.0.0.1"


@lru_cache()
def local_ip() -> str:
    """Best-effort IPv4 address of this host, loopback when unresolvable"""
    try:
        return socket.gethostbyname(socket.gethostname())
    except OSError as e:
        logger.warning("Could not resolve local IP, using loopback", error=str(e))
        return LOOPBACK
