"""
Naming Proxy - Naming Operations over the Failover Dispatcher

Turns register/deregister/heartbeat/lookup calls into parameter sets and
HTTP methods, hands them to the Dispatcher and interprets the bodies.

Error policy:
- register, deregister, query_list and get_service_list propagate
  DispatchError unchanged
- send_beat never raises; failures yield HB_FAIL_WAIT_TIME
- server_healthy never raises; failures yield False
"""

import json
import math
import random
from typing import Optional

from naming.config.settings import NamingSettings, get_settings
from naming.logging.config import get_logger
from naming.discovery.server_list import ServerListManager
from naming.exceptions import InvalidParameter
from naming.http.client import DELETE, GET, POST, PUT, HttpTransport
from naming.models.domain import DEFAULT_GROUP_NAME, BeatInfo, Instance, ServiceListView
from naming.proxy import params as p
from naming.proxy.dispatcher import Body, Dispatcher, DispatchResult
from naming.proxy.params import ParameterSet
from naming.utils.net import local_ip

logger = get_logger("naming-proxy")

# API paths, relative to CONTEXT_PATH
API_INSTANCE = "/instance"
API_INSTANCE_LIST = "/instance/list"
API_INSTANCE_BEAT = "/instance/beat"
API_SERVICE_LIST = "/service/list"
API_METRICS = "/operator/metrics"

BEAT_INTERVAL_FIELD = "clientBeatInterval"
HEALTHY_TAG = 'status":"'
HEALTHY_STATUS = "UP"


class NamingProxy:
    """
    Client-side proxy for one naming cluster.

    Usage:
        transport = HttpTransport()
        with NamingProxy(transport, ServerListManager(["10.0.0.1:8848"])) as proxy:
            proxy.register_service("orders", DEFAULT_GROUP_NAME, Instance(ip="10.1.1.1", port=8080))
    """

    def __init__(
        self,
        transport: HttpTransport,
        server_list_manager: Optional[ServerListManager] = None,
        settings: Optional[NamingSettings] = None,
        rng: Optional[random.Random] = None
    ):
        self.settings = settings or get_settings()
        server_list_manager = server_list_manager or ServerListManager.from_settings(self.settings)
        self.dispatcher = Dispatcher(server_list_manager, transport, self.settings, rng=rng)
        self.hb_fail_wait = self.settings.HB_FAIL_WAIT_TIME

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        self.dispatcher.close()

    def get_namespace_id(self) -> str:
        return self.dispatcher.namespace

    # ========================================================================
    # Instance Operations
    # ========================================================================

    def register_service(self, service_name: str, group_name: str, instance: Instance) -> None:
        """Register an instance (POST /instance)"""
        _check_service_name(service_name)
        logger.info(
            "[REGISTER-SERVICE] registering service",
            namespace=self.get_namespace_id(),
            service=service_name,
            instance=str(instance)
        )

        params = ParameterSet([
            (p.SERVICE_NAME, service_name),
            (p.GROUP_NAME, group_name),
            (p.CLUSTER_NAME, instance.cluster_name),
            ("ip", instance.ip),
            ("port", instance.port),
            ("weight", instance.weight),
            ("enable", instance.enabled),
            ("healthy", instance.healthy),
            ("ephemeral", instance.ephemeral),
            ("metadata", instance.metadata_json()),
        ])
        self.dispatcher.dispatch(API_INSTANCE, params, POST)

    def deregister_service(self, service_name: str, instance: Instance) -> None:
        """Deregister an instance (DELETE /instance)"""
        _check_service_name(service_name)
        logger.info(
            "[DEREGISTER-SERVICE] deregistering service",
            namespace=self.get_namespace_id(),
            service=service_name,
            instance=str(instance)
        )

        params = ParameterSet([
            (p.SERVICE_NAME, service_name),
            (p.CLUSTER_NAME, instance.cluster_name),
            ("ip", instance.ip),
            ("port", instance.port),
            ("ephemeral", instance.ephemeral),
        ])
        self.dispatcher.dispatch(API_INSTANCE, params, DELETE)

    def query_list(
        self,
        service_name: str,
        clusters: str = "",
        udp_port: Optional[int] = None,
        healthy_only: bool = False
    ) -> Body:
        """
        Fetch the instance list of a service (GET /instance/list).

        Returns the raw JSON body for the caller to decode, or NOT_MODIFIED.
        """
        _check_service_name(service_name)
        params = ParameterSet([
            (p.SERVICE_NAME, service_name),
            (p.CLUSTERS, clusters),
            (p.UDP_PORT, self.settings.UDP_PORT if udp_port is None else udp_port),
            (p.CLIENT_IP, self.settings.CLIENT_IP or local_ip()),
            (p.HEALTHY_ONLY, healthy_only),
        ])
        return self.dispatcher.dispatch(API_INSTANCE_LIST, params, GET)

    # ========================================================================
    # Heartbeat
    # ========================================================================

    def send_beat(self, beat_info: BeatInfo) -> int:
        """
        Send one heartbeat (PUT /instance/beat).

        Returns:
            The server's suggested next interval in ms, 0 to keep the current
            interval, or HB_FAIL_WAIT_TIME when the beat could not be delivered.
            Never raises.
        """
        beat_json = beat_info.to_json()
        logger.info("[BEAT] sending beat to server", namespace=self.get_namespace_id(), beat=beat_json)

        params = ParameterSet([
            (p.BEAT, beat_json),
            (p.SERVICE_NAME, beat_info.service_name),
        ])
        result = self.dispatcher.try_dispatch(API_INSTANCE_BEAT, params, PUT)
        return self._beat_interval(result, beat_json)

    def _beat_interval(self, result: DispatchResult, beat_json: str) -> int:
        if not result.ok:
            logger.error("[CLIENT-BEAT] failed to send beat", beat=beat_json, error=result.error.message)
            return self.hb_fail_wait

        if not result.body:
            return 0

        try:
            payload = json.loads(result.body)
        except ValueError:
            logger.error("[CLIENT-BEAT] unreadable beat response", beat=beat_json, body=result.body)
            return self.hb_fail_wait

        if not isinstance(payload, dict):
            logger.error("[CLIENT-BEAT] unexpected beat response", beat=beat_json, body=result.body)
            return self.hb_fail_wait

        interval = payload.get(BEAT_INTERVAL_FIELD)
        if interval is None:
            return 0
        if isinstance(interval, bool) or not isinstance(interval, (int, float)):
            logger.error("[CLIENT-BEAT] non-numeric beat interval", beat=beat_json, interval=interval)
            return self.hb_fail_wait
        if isinstance(interval, float) and not math.isfinite(interval):
            logger.error("[CLIENT-BEAT] non-finite beat interval", beat=beat_json, interval=interval)
            return self.hb_fail_wait
        return int(interval)

    # ========================================================================
    # Service / Server Queries
    # ========================================================================

    def get_service_list(self, page: int, page_size: int, group_name: str = DEFAULT_GROUP_NAME) -> ServiceListView:
        """One page of service names (GET /service/list)"""
        logger.debug("Requesting service list", group=group_name, page=page, page_size=page_size)
        params = ParameterSet([
            (p.PAGE_NO, page),
            (p.PAGE_SIZE, page_size),
            (p.GROUP_NAME, group_name),
        ])
        body = self.dispatcher.dispatch(API_SERVICE_LIST, params, GET)

        if not body:
            return ServiceListView(count=0, data=[])
        return ServiceListView.from_json(body)

    def server_healthy(self) -> bool:
        """Check GET /operator/metrics for "status":"UP". Never raises."""
        result = self.dispatcher.try_dispatch(API_METRICS, ParameterSet(), GET)
        if not result.ok:
            logger.warning("Health check failed", error=result.error.message)
            return False
        if not result.body:
            return False

        pos = result.body.find(HEALTHY_TAG)
        if pos < 0:
            return False

        start = pos + len(HEALTHY_TAG)
        return result.body[start:start + len(HEALTHY_STATUS)] == HEALTHY_STATUS


def _check_service_name(service_name: str) -> None:
    if not service_name or not service_name.strip():
        raise InvalidParameter("service name must not be empty", "serviceName")
