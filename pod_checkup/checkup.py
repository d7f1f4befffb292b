# SPDX-License-Identifier: MIT

"""End-to-end checkup run: fetch pods, scan, aggregate, render."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from pod_checkup import collector, render
from pod_checkup.catalog import DEFAULT_CHECKS, ProblemCatalog, default_catalog
from pod_checkup.models import ScanContext
from pod_checkup.report import DEFAULT_HELP_BASE_URL, Report
from pod_checkup.scanner import DEFAULT_OWNER_LABEL, scan

logger = logging.getLogger(__name__)


@dataclass
class CheckupOptions:
    kubeconfig: str | None = collector.DEFAULT_KUBECONFIG
    context: str | None = None
    namespace: str | None = None
    checks: list[str] = field(default_factory=lambda: list(DEFAULT_CHECKS))
    owner_label: str = DEFAULT_OWNER_LABEL
    help_base_url: str = DEFAULT_HELP_BASE_URL
    workers: int = 1
    timeout: float | None = None


@dataclass
class CheckupResult:
    report: Report
    pod_count: int
    help_base_url: str = DEFAULT_HELP_BASE_URL

    @property
    def has_problems(self) -> bool:
        return not self.report.is_empty

    def to_dict(self) -> dict[str, Any]:
        summary = self.report.summary()
        summary["pod_count"] = self.pod_count
        summary["overall_health"] = "ok"
        if summary["critical_count"]:
            summary["overall_health"] = "critical"
        elif summary["warning_count"]:
            summary["overall_health"] = "warning"
        return {
            "summary": summary,
            "findings": [f.to_dict() for f in self.report.findings],
            "report_text": render.report_text(self.report, self.help_base_url),
        }


def run_checkup(
    options: CheckupOptions,
    api_client: Any = None,
    catalog: ProblemCatalog | None = None,
    ctx: ScanContext | None = None,
) -> CheckupResult:
    """Run one point-in-time checkup.

    Raises FetchError when pods cannot be listed, ScanCancelled when ``ctx``
    is cancelled or the timeout expires, and UnknownProblemError for a check
    name missing from the catalog.
    """
    enabled = (catalog or default_catalog()).select(options.checks)
    if ctx is None:
        ctx = ScanContext.with_timeout(options.timeout)
    if api_client is None:
        api_client = collector.connect(options.kubeconfig, options.context)

    pods = collector.list_pods(api_client, namespace=options.namespace)
    findings = scan(ctx, pods, enabled, owner_label=options.owner_label, workers=options.workers)
    report = Report.from_findings(findings, enabled)
    logger.info("checkup complete: %d pod(s), %d finding(s)", len(pods), len(report))
    return CheckupResult(report=report, pod_count=len(pods), help_base_url=options.help_base_url)
