"""Measured pod usage from the metrics.k8s.io API."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from podlint.models.pod import make_fqn
from podlint.utils.quantity import to_quantity


@dataclass(frozen=True)
class ContainerMetrics:
    cpu: Decimal = Decimal(0)
    memory: Decimal = Decimal(0)

    @classmethod
    def from_usage(cls, usage: dict | None) -> ContainerMetrics:
        usage = usage or {}
        return cls(
            cpu=to_quantity(usage.get("cpu")) or Decimal(0),
            memory=to_quantity(usage.get("memory")) or Decimal(0),
        )


@dataclass(frozen=True)
class PodMetrics:
    name: str = ""
    namespace: str = ""
    containers: dict[str, ContainerMetrics] = field(default_factory=dict)

    @property
    def fqn(self) -> str:
        return make_fqn(self.namespace, self.name)

    @classmethod
    def from_dict(cls, d: dict) -> PodMetrics:
        meta = d.get("metadata") or {}
        return cls(
            name=meta.get("name", ""),
            namespace=meta.get("namespace", ""),
            containers={
                c.get("name", ""): ContainerMetrics.from_usage(c.get("usage"))
                for c in d.get("containers") or []
            },
        )
