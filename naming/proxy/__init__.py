"""
Naming Proxy

Failover dispatch and the naming operations built on it.
"""

from naming.proxy.dispatcher import (
    NOT_MODIFIED,
    CallResult,
    Dispatcher,
    DispatchResult,
)
from naming.proxy.naming_proxy import NamingProxy
from naming.proxy.params import ParameterSet

__all__ = [
    "NOT_MODIFIED",
    "CallResult",
    "Dispatcher",
    "DispatchResult",
    "NamingProxy",
    "ParameterSet",
]
