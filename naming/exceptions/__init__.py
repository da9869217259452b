"""
Exception Classes for the Naming Client

Provides a hierarchy of exceptions for dispatch and transport failures.
Higher level operations only ever see these types, never raw httpx errors.

Usage:
    from naming.exceptions import (
        NamingException,
        DispatchError,
        NoServerAvailable,
        AllServersExhausted,
        ServerError,
    )
"""
from typing import Optional, Dict, Any, List


# Error code used when a network failure is reported as a server error
SERVER_ERROR = 500


class NamingException(Exception):
    """Base exception for all naming client errors"""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code or "NAMING_ERROR"
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details
        }


class InvalidParameter(NamingException):
    """Caller supplied an unusable argument"""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, "INVALID_PARAM", {"field": field})
        self.field = field


# ============================================================================
# Transport Exceptions
# ============================================================================

class NetworkError(NamingException):
    """Network-level failure raised by the transport adapter"""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message, "NETWORK_ERROR", {"url": url})
        self.url = url


# ============================================================================
# Per-attempt Exceptions
# ============================================================================

class ServerError(NamingException):
    """A single server attempt failed with a non-200/304 status"""

    def __init__(self, code: int, body: str = "", message: Optional[str] = None):
        super().__init__(
            message or f"server returned code:{code} errormsg:{body}",
            "SERVER_ERROR",
            {"code": code, "body": body}
        )
        self.code = code
        self.body = body


class TransportError(ServerError):
    """Network failure translated at the request execution boundary"""

    def __init__(self, message: str):
        super().__init__(SERVER_ERROR, "", f"Failed to request server, {message}")
        self.error_code = "TRANSPORT_ERROR"


# ============================================================================
# Dispatch Exceptions
# ============================================================================

class DispatchError(NamingException):
    """No attempt of a dispatch succeeded"""

    def __init__(self, message: str, error_code: str = "DISPATCH_ERROR", details: Optional[Dict] = None):
        super().__init__(message, error_code, details)


class NoServerAvailable(DispatchError):
    """Server catalog holds no servers and no fixed domain is configured"""

    def __init__(self, message: str = "no server available"):
        super().__init__(message, "NO_SERVER_AVAILABLE")


class AllServersExhausted(DispatchError):
    """Every candidate server (or every fixed-domain retry) failed"""

    def __init__(self, api: str, last_error: str, servers_tried: List[str]):
        super().__init__(
            f"failed to req API:{api} after all servers({','.join(servers_tried)}) tried: {last_error}",
            "ALL_SERVERS_TRIED_AND_FAILED",
            {"api": api, "last_error": last_error, "servers_tried": list(servers_tried)}
        )
        self.api = api
        self.last_error = last_error
        self.servers_tried = list(servers_tried)
