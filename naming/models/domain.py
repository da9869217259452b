"""
Naming Domain Models

Instances, heartbeat payloads and the paged service list view.
JSON is produced in the server's camelCase field names.
"""

import json
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


DEFAULT_CLUSTER_NAME = "DEFAULT"
DEFAULT_GROUP_NAME = "DEFAULT_GROUP"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


class Instance(_CamelModel):
    """One network-reachable endpoint of a service"""
    instance_id: Optional[str] = None
    ip: str
    port: int = Field(..., ge=0, le=65535)
    weight: float = 1.0
    healthy: bool = True
    enabled: bool = True
    ephemeral: bool = True
    cluster_name: str = DEFAULT_CLUSTER_NAME
    service_name: Optional[str] = None
    metadata: Dict[str, str] = Field(default_factory=dict)

    def metadata_json(self) -> str:
        """Metadata as transmitted in the 'metadata' request parameter"""
        return json.dumps(self.metadata, separators=(",", ":"))

    def __str__(self) -> str:
        return (
            f"Instance(ip={self.ip}, port={self.port}, cluster={self.cluster_name}, "
            f"weight={self.weight}, healthy={self.healthy}, enabled={self.enabled}, "
            f"ephemeral={self.ephemeral})"
        )


class BeatInfo(_CamelModel):
    """Heartbeat payload for a registered ephemeral instance"""
    service_name: str
    cluster: str = DEFAULT_CLUSTER_NAME
    ip: str
    port: int = Field(..., ge=0, le=65535)
    weight: float = 1.0
    metadata: Dict[str, str] = Field(default_factory=dict)
    scheduled: bool = False
    period: int = 5000  # milliseconds


class ServiceListView(BaseModel):
    """One page of service names plus the server-side total"""
    count: int = 0
    data: List[str] = Field(default_factory=list)

    @classmethod
    def from_json(cls, body: str) -> "ServiceListView":
        """
        Parse a service list response body.

        The server answers {"count": N, "doms": ["svc-a", ...]}.
        """
        payload = json.loads(body)
        if not isinstance(payload, dict):
            return cls()
        return cls(count=payload.get("count") or 0, data=payload.get("doms") or [])
