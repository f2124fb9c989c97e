"""Lint checks for pods: status, container best practices and utilization."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal
from typing import Mapping

from podlint.core.errors import LoadError
from podlint.core.issues import IssueCollector
from podlint.core.loader import Loader
from podlint.models.issue import Issue, Severity
from podlint.models.metrics import ContainerMetrics
from podlint.models.pod import Container, ContainerState, ContainerStatus, Pod, PodPhase, QoS
from podlint.utils.quantity import to_mebibytes, to_millicores, to_percentage

logger = logging.getLogger(__name__)

BEST_PRACTICES = "Container best practices"
UTILIZATION = "Resource utilization"

_PHASE_MESSAGES = {
    PodPhase.PENDING: "Pod is pending and has not been scheduled or started",
    PodPhase.FAILED: "Pod has failed: all containers terminated and at least one in failure",
    PodPhase.UNKNOWN: "Pod is in an unknown phase, its node may be unreachable",
}

# Termination reasons that mean the container simply ran to completion.
_BENIGN_TERMINATIONS = frozenset({"", "Completed"})


class PodLinter:
    """Runs every pod check and collects the findings per ``namespace/name``."""

    def __init__(self, loader: Loader, utilization_severity: Severity = Severity.WARNING):
        self.loader = loader
        self.utilization_severity = utilization_severity
        self.report = IssueCollector()

    def issues(self) -> Mapping[str, list[Issue]]:
        return self.report.issues()

    def max_severity(self, fqn: str) -> Severity | None:
        return self.report.max_severity(fqn)

    def has_no_issues(self, fqn: str) -> bool:
        return self.report.has_no_issues(fqn)

    def lint(self, workers: int = 1) -> IssueCollector:
        """Lint every pod the loader returns into a fresh report.

        A LoadError from listing pods propagates with an empty report. A
        LoadError while checking for or fetching metrics still lets every pod go
        through the other checks before it is re-raised, so ``self.report``
        holds the partial result.
        """
        self.report = IssueCollector()
        pods = self.loader.list_pods()
        metrics: dict[str, dict[str, ContainerMetrics]] | None = None
        metrics_error: LoadError | None = None
        try:
            if self.loader.cluster_has_metrics():
                metrics = {m.fqn: m.containers for m in self.loader.fetch_pods_metrics("")}
            else:
                logger.info("Metrics server not available, skipping utilization checks")
        except LoadError as e:
            logger.warning("Skipping utilization checks: %s", e)
            metrics_error = e

        targets = [p for p in pods.values() if not self.loader.excluded_namespace(p.namespace)]
        logger.debug("Linting %d of %d pods", len(targets), len(pods))

        def pod_metrics(pod: Pod) -> dict[str, ContainerMetrics] | None:
            if metrics is None:
                return None
            return metrics.get(pod.fqn, {})

        if workers > 1:
            def shard(pod: Pod) -> IssueCollector:
                report = IssueCollector()
                self.lint_pod(pod, pod_metrics(pod), report)
                return report

            with ThreadPoolExecutor(max_workers=workers) as pool:
                for report in pool.map(shard, targets):
                    self.report.merge(report)
        else:
            for pod in targets:
                self.lint_pod(pod, pod_metrics(pod))
        if metrics_error is not None:
            raise metrics_error
        return self.report

    def lint_pod(
        self,
        pod: Pod,
        metrics: dict[str, ContainerMetrics] | None = None,
        report: IssueCollector | None = None,
    ) -> None:
        """Run the check pipeline for one pod, in order."""
        report = self.report if report is None else report
        report.register(pod.fqn)
        logger.debug("Linting pod %s (%s)", pod.fqn, pod.qos.value)
        for check in self.CHECKS:
            check(self, pod, report)
        if metrics is not None:
            self.check_utilization(pod, metrics, report)

    def check_status(self, pod: Pod, report: IssueCollector | None = None) -> None:
        report = self.report if report is None else report
        message = _PHASE_MESSAGES.get(pod.phase)
        if message:
            report.record(pod.fqn, Issue(message, Severity.ERROR))

    def check_container_status(self, pod: Pod, report: IssueCollector | None = None) -> None:
        report = self.report if report is None else report
        limit = self.loader.restarts_limit()
        for status in pod.init_container_statuses:
            for issue in _container_status_issues(status, limit, "Init container"):
                report.record(pod.fqn, issue)
        for status in pod.container_statuses:
            for issue in _container_status_issues(status, limit, "Container"):
                report.record(pod.fqn, issue)

    def check_containers(self, pod: Pod, report: IssueCollector | None = None) -> None:
        report = self.report if report is None else report
        parent = Issue(BEST_PRACTICES, Severity.WARNING)
        for co in pod.init_containers:
            for issue in _container_issues(co, init=True):
                parent.add_sub_issue(co.name, issue)
        for co in pod.containers:
            for issue in _container_issues(co, init=False):
                parent.add_sub_issue(co.name, issue)
        if parent.sub_issues:
            report.record(pod.fqn, parent)

    def check_service_account(self, pod: Pod, report: IssueCollector | None = None) -> None:
        report = self.report if report is None else report
        if not pod.service_account:
            report.record(
                pod.fqn,
                Issue("No service account specified, using the namespace default", Severity.INFO),
            )

    def check_utilization(
        self,
        pod: Pod,
        metrics: Mapping[str, ContainerMetrics],
        report: IssueCollector | None = None,
    ) -> None:
        """Compare measured usage against each container's requests and limits."""
        report = self.report if report is None else report
        cpu_ceiling = self.loader.pod_cpu_limit()
        mem_ceiling = self.loader.pod_mem_limit()
        parent = Issue(UTILIZATION, self.utilization_severity)
        for co in pod.containers:
            mx = metrics.get(co.name)
            if mx is None:
                continue
            res = co.resources
            cpu = _usage_finding(
                "CPU", mx.cpu, res.requests.cpu, res.limits.cpu, cpu_ceiling, _fmt_cpu,
            )
            mem = _usage_finding(
                "Memory", mx.memory, res.requests.memory, res.limits.memory, mem_ceiling, _fmt_mem,
            )
            for message in filter(None, (cpu, mem)):
                parent.add_sub_issue(co.name, Issue(message, self.utilization_severity))
        if parent.sub_issues:
            report.record(pod.fqn, parent)

    CHECKS = (check_status, check_container_status, check_containers, check_service_account)


def _container_status_issues(status: ContainerStatus, restarts_limit: int, label: str) -> list[Issue]:
    issues: list[Issue] = []
    name = status.name
    if not status.ready:
        if status.state in (ContainerState.RUNNING, ContainerState.WAITING):
            detail = f": {status.reason}" if status.reason else ""
            issues.append(Issue(
                f"{label} '{name}' is not ready ({status.state.value}{detail})",
                Severity.ERROR,
            ))
        elif status.state == ContainerState.TERMINATED:
            if status.reason not in _BENIGN_TERMINATIONS:
                issues.append(Issue(
                    f"{label} '{name}' terminated abnormally ({status.reason})",
                    Severity.WARNING,
                ))
        else:
            logger.debug("No runtime state reported for %s '%s'", label.lower(), name)
    if status.restart_count > restarts_limit:
        issues.append(Issue(
            f"{label} '{name}' has restarted {status.restart_count} times (limit {restarts_limit})",
            Severity.ERROR,
        ))
    return issues


def _container_issues(co: Container, init: bool) -> list[Issue]:
    issues: list[Issue] = []
    # Init containers cannot declare probes.
    if not init:
        if not co.liveness_probe and not co.readiness_probe:
            issues.append(Issue("No probes defined", Severity.WARNING))
        elif not co.liveness_probe:
            issues.append(Issue("No liveness probe", Severity.WARNING))
        elif not co.readiness_probe:
            issues.append(Issue("No readiness probe", Severity.WARNING))

    res = co.resources
    if res.qos == QoS.BEST_EFFORT:
        issues.append(Issue("No resources defined", Severity.WARNING))
    elif not res.limits.declared:
        issues.append(Issue(f"No resource limits defined ({res.qos.value})", Severity.WARNING))

    tag_problem = _image_tag_problem(co.image)
    if tag_problem:
        issues.append(Issue(tag_problem, Severity.WARNING))
    return issues


def _image_tag_problem(image: str) -> str | None:
    if not image or "@" in image:
        return None
    last = image.rsplit("/", 1)[-1]
    if ":" not in last:
        return "Untagged docker image in use"
    if last.rsplit(":", 1)[1] == "latest":
        return "Image tagged 'latest' in use"
    return None


def _usage_finding(
    dimension: str,
    usage: Decimal,
    request: Decimal | None,
    limit: Decimal | None,
    ceiling: float,
    fmt,
) -> str | None:
    """Return a finding message when usage is over its baseline.

    A declared limit is judged against the ceiling percentage; otherwise a
    declared request is judged against the raw usage. Zero baselines count
    as undeclared.
    """
    if limit:
        percent = to_percentage(usage, limit)
        if percent > ceiling:
            return (
                f"{dimension} at {percent:.0f}% of limit {fmt(limit)} "
                f"(threshold {ceiling:.0f}%)"
            )
        return None
    if request and usage > request:
        return f"{dimension} usage {fmt(usage)} exceeds request {fmt(request)} with no limit set"
    return None


def _fmt_cpu(q: Decimal) -> str:
    return f"{to_millicores(q)}m"


def _fmt_mem(q: Decimal) -> str:
    return f"{to_mebibytes(q)}Mi"
