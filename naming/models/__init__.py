from naming.models.domain import (
    DEFAULT_CLUSTER_NAME,
    DEFAULT_GROUP_NAME,
    BeatInfo,
    Instance,
    ServiceListView,
)

__all__ = [
    "DEFAULT_CLUSTER_NAME",
    "DEFAULT_GROUP_NAME",
    "BeatInfo",
    "Instance",
    "ServiceListView",
]
