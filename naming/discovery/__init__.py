"""
Server Discovery

Read access to the naming server replicas a client may talk to.
"""

from naming.discovery.server_list import ServerEndpoint, ServerListManager

__all__ = ["ServerEndpoint", "ServerListManager"]
