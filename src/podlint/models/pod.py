"""Pod snapshot models built from Kubernetes API payloads."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from decimal import Decimal

from podlint.utils.quantity import to_quantity


class PodPhase(enum.Enum):
    PENDING = "Pending"
    RUNNING = "Running"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"
    UNKNOWN = "Unknown"

    @classmethod
    def from_str(cls, s: str | None) -> PodPhase:
        for member in cls:
            if member.value == s:
                return member
        return cls.UNKNOWN


class ContainerState(enum.Enum):
    RUNNING = "running"
    WAITING = "waiting"
    TERMINATED = "terminated"
    UNKNOWN = "unknown"


class QoS(enum.Enum):
    GUARANTEED = "Guaranteed"
    BURSTABLE = "Burstable"
    BEST_EFFORT = "BestEffort"


@dataclass(frozen=True)
class ResourceList:
    cpu: Decimal | None = None
    memory: Decimal | None = None

    @property
    def declared(self) -> bool:
        return self.cpu is not None or self.memory is not None

    @classmethod
    def from_dict(cls, d: dict | None) -> ResourceList:
        if not d:
            return cls()
        return cls(cpu=to_quantity(d.get("cpu")), memory=to_quantity(d.get("memory")))


@dataclass(frozen=True)
class ResourceRequirements:
    requests: ResourceList = field(default_factory=ResourceList)
    limits: ResourceList = field(default_factory=ResourceList)

    @property
    def qos(self) -> QoS:
        """Quality-of-service tier implied by the declared requests and limits.

        Simplified from the kubelet's rules: any declared limit whose requests
        are absent or equal counts as Guaranteed, even when only CPU or only
        memory is limited. The real Guaranteed class needs both limits set.
        """
        if not self.requests.declared and not self.limits.declared:
            return QoS.BEST_EFFORT
        if self.limits.declared and (
            not self.requests.declared or self.requests == self.limits
        ):
            return QoS.GUARANTEED
        return QoS.BURSTABLE

    @classmethod
    def from_dict(cls, d: dict | None) -> ResourceRequirements:
        if not d:
            return cls()
        return cls(
            requests=ResourceList.from_dict(d.get("requests")),
            limits=ResourceList.from_dict(d.get("limits")),
        )


@dataclass(frozen=True)
class Container:
    name: str = ""
    image: str = ""
    resources: ResourceRequirements = field(default_factory=ResourceRequirements)
    liveness_probe: bool = False
    readiness_probe: bool = False

    @classmethod
    def from_dict(cls, d: dict) -> Container:
        return cls(
            name=d.get("name", ""),
            image=d.get("image", ""),
            resources=ResourceRequirements.from_dict(d.get("resources")),
            liveness_probe=d.get("livenessProbe") is not None,
            readiness_probe=d.get("readinessProbe") is not None,
        )


@dataclass(frozen=True)
class ContainerStatus:
    name: str = ""
    ready: bool = False
    restart_count: int = 0
    state: ContainerState = ContainerState.UNKNOWN
    reason: str = ""

    @classmethod
    def from_dict(cls, d: dict) -> ContainerStatus:
        state, reason = ContainerState.UNKNOWN, ""
        raw_state = d.get("state") or {}
        for candidate in (ContainerState.RUNNING, ContainerState.WAITING, ContainerState.TERMINATED):
            if raw_state.get(candidate.value) is not None:
                state = candidate
                reason = raw_state[candidate.value].get("reason") or ""
                break
        return cls(
            name=d.get("name", ""),
            ready=bool(d.get("ready", False)),
            restart_count=d.get("restartCount") or 0,
            state=state,
            reason=reason,
        )


@dataclass(frozen=True)
class Pod:
    name: str = ""
    namespace: str = ""
    service_account: str = ""
    phase: PodPhase = PodPhase.UNKNOWN
    containers: tuple[Container, ...] = ()
    init_containers: tuple[Container, ...] = ()
    container_statuses: tuple[ContainerStatus, ...] = ()
    init_container_statuses: tuple[ContainerStatus, ...] = ()

    @property
    def fqn(self) -> str:
        return make_fqn(self.namespace, self.name)

    @property
    def qos(self) -> QoS:
        """Pod tier: the weakest tier across its containers."""
        tiers = {c.resources.qos for c in self.containers}
        if not tiers or tiers == {QoS.BEST_EFFORT}:
            return QoS.BEST_EFFORT
        if tiers == {QoS.GUARANTEED}:
            return QoS.GUARANTEED
        return QoS.BURSTABLE

    @classmethod
    def from_dict(cls, d: dict) -> Pod:
        meta = d.get("metadata") or {}
        spec = d.get("spec") or {}
        status = d.get("status") or {}
        return cls(
            name=meta.get("name", ""),
            namespace=meta.get("namespace", ""),
            service_account=spec.get("serviceAccountName") or spec.get("serviceAccount") or "",
            phase=PodPhase.from_str(status.get("phase")),
            containers=tuple(Container.from_dict(c) for c in spec.get("containers") or []),
            init_containers=tuple(Container.from_dict(c) for c in spec.get("initContainers") or []),
            container_statuses=tuple(
                ContainerStatus.from_dict(s) for s in status.get("containerStatuses") or []
            ),
            init_container_statuses=tuple(
                ContainerStatus.from_dict(s) for s in status.get("initContainerStatuses") or []
            ),
        )


def make_fqn(namespace: str, name: str) -> str:
    """Return the ``namespace/name`` key used throughout a report."""
    return f"{namespace}/{name}"
