"""
Ordered request parameters.

Wire order matters and duplicate keys are allowed, so parameters are kept
as a list of pairs rather than a dict.
"""

from typing import Any, Iterator, List, Optional, Tuple

# Wire parameter names
NAMESPACE_ID = "namespaceId"
SERVICE_NAME = "serviceName"
GROUP_NAME = "groupName"
CLUSTER_NAME = "clusterName"
CLUSTERS = "clusters"
BEAT = "beat"
PAGE_NO = "pageNo"
PAGE_SIZE = "pageSize"
UDP_PORT = "udpPort"
CLIENT_IP = "clientIP"
HEALTHY_ONLY = "healthyOnly"


def _to_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class ParameterSet:
    """Ordered key/value string pairs"""

    def __init__(self, items: Optional[List[Tuple[str, Any]]] = None):
        self._items: List[Tuple[str, str]] = []
        for key, value in items or []:
            self.add(key, value)

    def add(self, key: str, value: Any) -> "ParameterSet":
        self._items.append((key, _to_str(value)))
        return self

    def put(self, key: str, value: Any) -> "ParameterSet":
        """Leave exactly one entry for key, at its first position"""
        value = _to_str(value)
        result = []
        placed = False
        for k, v in self._items:
            if k != key:
                result.append((k, v))
            elif not placed:
                result.append((k, value))
                placed = True
        if not placed:
            result.append((key, value))
        self._items = result
        return self

    def get(self, key: str) -> Optional[str]:
        for k, v in self._items:
            if k == key:
                return v
        return None

    def items(self) -> List[Tuple[str, str]]:
        return list(self._items)

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ParameterSet):
            return NotImplemented
        return self._items == other._items

    def __repr__(self) -> str:
        return f"ParameterSet({self._items!r})"
