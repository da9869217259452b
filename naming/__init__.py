"""
Naming Client

Resilient request dispatch to a cluster of naming/service-discovery servers.
"""

from naming.discovery import ServerEndpoint, ServerListManager
from naming.exceptions import (
    AllServersExhausted,
    DispatchError,
    NamingException,
    NoServerAvailable,
    ServerError,
    TransportError,
)
from naming.http import HttpResult, HttpTransport
from naming.models import BeatInfo, Instance, ServiceListView
from naming.proxy import NOT_MODIFIED, Dispatcher, NamingProxy, ParameterSet

__all__ = [
    "AllServersExhausted",
    "BeatInfo",
    "Dispatcher",
    "DispatchError",
    "HttpResult",
    "HttpTransport",
    "Instance",
    "NamingException",
    "NamingProxy",
    "NoServerAvailable",
    "NOT_MODIFIED",
    "ParameterSet",
    "ServerEndpoint",
    "ServerError",
    "ServerListManager",
    "ServiceListView",
    "TransportError",
]
