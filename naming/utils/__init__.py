# Utils module
from .net import local_ip

__all__ = ["local_ip"]
