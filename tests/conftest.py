"""Shared fixtures and pod builders."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from podlint.core.loader import Loader
from podlint.models.metrics import ContainerMetrics, PodMetrics
from podlint.models.pod import Pod
from podlint.utils.quantity import to_quantity


def make_pod(name: str = "p1", namespace: str = "default", **kwargs) -> Pod:
    return Pod(name=name, namespace=namespace, **kwargs)


def make_metrics(cpu: str, mem: str) -> ContainerMetrics:
    return ContainerMetrics(cpu=to_quantity(cpu), memory=to_quantity(mem))


def make_pod_metrics(name: str, cpu: str, mem: str, namespace: str = "default") -> PodMetrics:
    return PodMetrics(
        name=name,
        namespace=namespace,
        containers={c: make_metrics(cpu, mem) for c in ("c1", "c2", "c3")},
    )


def pod_dict(
    name: str,
    namespace: str = "default",
    containers: list[dict] | None = None,
    statuses: list[dict] | None = None,
    phase: str = "Running",
    service_account: str = "fred",
) -> dict:
    return {
        "metadata": {"name": name, "namespace": namespace},
        "spec": {
            "serviceAccountName": service_account,
            "containers": containers or [],
        },
        "status": {"phase": phase, "containerStatuses": statuses or []},
    }


@pytest.fixture
def loader() -> MagicMock:
    """Loader test double with in-range thresholds and no pods."""
    mock = MagicMock(spec=Loader)
    mock.list_pods.return_value = {}
    mock.cluster_has_metrics.return_value = False
    mock.fetch_pods_metrics.return_value = []
    mock.restarts_limit.return_value = 1
    mock.pod_cpu_limit.return_value = 80.0
    mock.pod_mem_limit.return_value = 80.0
    mock.excluded_namespace.return_value = False
    return mock
