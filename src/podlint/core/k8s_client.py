"""Kubernetes API wrapper."""

from __future__ import annotations

from typing import Any

from kubernetes import client, config

METRICS_GROUP = "metrics.k8s.io"
METRICS_VERSION = "v1beta1"

_REQUEST_TIMEOUT = 30


class K8sClient:
    """Thin wrapper around the Kubernetes Python client."""

    def __init__(self, context: str | None = None):
        self.context = context
        self._core_v1: client.CoreV1Api | None = None
        self._custom: client.CustomObjectsApi | None = None
        self._apis: client.ApisApi | None = None
        self._api_client: client.ApiClient | None = None

    def _load_config(self) -> client.ApiClient:
        if self._api_client is not None:
            return self._api_client
        try:
            cfg = client.Configuration()
            config.load_kube_config(
                context=self.context,
                client_configuration=cfg,
            )
            # Prevent indefinite hangs on unreachable clusters
            cfg.retries = 1
            if not cfg.connection_pool_maxsize:
                cfg.connection_pool_maxsize = 4
            self._api_client = client.ApiClient(configuration=cfg)
        except config.ConfigException:
            config.load_incluster_config()
            self._api_client = client.ApiClient()
        return self._api_client

    @property
    def core_v1(self) -> client.CoreV1Api:
        if self._core_v1 is None:
            self._core_v1 = client.CoreV1Api(api_client=self._load_config())
        return self._core_v1

    @property
    def custom(self) -> client.CustomObjectsApi:
        if self._custom is None:
            self._custom = client.CustomObjectsApi(api_client=self._load_config())
        return self._custom

    @property
    def apis(self) -> client.ApisApi:
        if self._apis is None:
            self._apis = client.ApisApi(api_client=self._load_config())
        return self._apis

    def list_pods(self, namespace: str | None = None) -> list[dict[str, Any]]:
        """List pods as plain API dicts (camelCase keys)."""
        if namespace:
            result = self.core_v1.list_namespaced_pod(
                namespace=namespace,
                _request_timeout=_REQUEST_TIMEOUT,
            )
        else:
            result = self.core_v1.list_pod_for_all_namespaces(
                _request_timeout=_REQUEST_TIMEOUT,
            )
        return [self._load_config().sanitize_for_serialization(p) for p in result.items]

    def has_api_group(self, group: str) -> bool:
        groups = self.apis.get_api_versions(_request_timeout=_REQUEST_TIMEOUT)
        return any(g.name == group for g in groups.groups or [])

    def list_pod_metrics(self, namespace: str | None = None) -> list[dict[str, Any]]:
        if namespace:
            result = self.custom.list_namespaced_custom_object(
                group=METRICS_GROUP,
                version=METRICS_VERSION,
                namespace=namespace,
                plural="pods",
                _request_timeout=_REQUEST_TIMEOUT,
            )
        else:
            result = self.custom.list_cluster_custom_object(
                group=METRICS_GROUP,
                version=METRICS_VERSION,
                plural="pods",
                _request_timeout=_REQUEST_TIMEOUT,
            )
        return result.get("items", [])
