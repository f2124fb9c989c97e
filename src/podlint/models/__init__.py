"""Data models for podlint."""

from __future__ import annotations

from podlint.models.issue import Issue, Severity
from podlint.models.metrics import ContainerMetrics, PodMetrics
from podlint.models.pod import (
    Container,
    ContainerState,
    ContainerStatus,
    Pod,
    PodPhase,
    QoS,
    ResourceList,
    ResourceRequirements,
    make_fqn,
)

__all__ = [
    "Container",
    "ContainerMetrics",
    "ContainerState",
    "ContainerStatus",
    "Issue",
    "Pod",
    "PodMetrics",
    "PodPhase",
    "QoS",
    "ResourceList",
    "ResourceRequirements",
    "Severity",
    "make_fqn",
]
