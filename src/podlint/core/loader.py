"""Data loader contract consumed by the linters, and its cluster adapter."""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from kubernetes.client import ApiException
from kubernetes.config import ConfigException
from urllib3.exceptions import HTTPError

from podlint.config.settings import Settings, settings as default_settings
from podlint.core.errors import LoadError
from podlint.core.k8s_client import METRICS_GROUP, K8sClient
from podlint.models.metrics import PodMetrics
from podlint.models.pod import Pod

logger = logging.getLogger(__name__)

# Failures of the cluster round-trip that abort a lint run.
_CLUSTER_ERRORS = (ApiException, ConfigException, HTTPError, OSError)


@runtime_checkable
class Loader(Protocol):
    """What a linter needs from the outside world.

    List/fetch calls raise LoadError; threshold accessors never fail and fall
    back to defaults.
    """

    def list_pods(self) -> dict[str, Pod]: ...

    def cluster_has_metrics(self) -> bool: ...

    def fetch_pods_metrics(self, namespace: str = "") -> list[PodMetrics]: ...

    def restarts_limit(self) -> int: ...

    def pod_cpu_limit(self) -> float: ...

    def pod_mem_limit(self) -> float: ...

    def excluded_namespace(self, namespace: str) -> bool: ...


class ClusterLoader:
    """Loader backed by a live cluster and the active settings."""

    def __init__(
        self,
        k8s: K8sClient,
        namespace: str | None = None,
        config: Settings | None = None,
    ):
        self.k8s = k8s
        self.namespace = namespace
        self.config = config or default_settings

    def list_pods(self) -> dict[str, Pod]:
        try:
            raw = self.k8s.list_pods(namespace=self.namespace)
        except _CLUSTER_ERRORS as e:
            raise LoadError("pods", str(e)) from e
        pods = (Pod.from_dict(d) for d in raw)
        return {p.fqn: p for p in sorted(pods, key=lambda p: (p.namespace, p.name))}

    def cluster_has_metrics(self) -> bool:
        try:
            available = self.k8s.has_api_group(METRICS_GROUP)
        except _CLUSTER_ERRORS as e:
            raise LoadError("API groups", str(e)) from e
        if not available:
            logger.debug("Cluster does not serve %s", METRICS_GROUP)
        return available

    def fetch_pods_metrics(self, namespace: str = "") -> list[PodMetrics]:
        try:
            raw = self.k8s.list_pod_metrics(namespace=namespace or self.namespace)
        except _CLUSTER_ERRORS as e:
            raise LoadError("pod metrics", str(e)) from e
        return [PodMetrics.from_dict(d) for d in raw]

    def restarts_limit(self) -> int:
        return self.config.restarts_limit

    def pod_cpu_limit(self) -> float:
        return self.config.cpu_limit_percent

    def pod_mem_limit(self) -> float:
        return self.config.mem_limit_percent

    def excluded_namespace(self, namespace: str) -> bool:
        return namespace in self.config.excluded_namespaces
