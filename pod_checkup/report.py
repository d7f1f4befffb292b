# SPDX-License-Identifier: MIT

"""Groups a scan's findings by problem and by effective severity."""

from __future__ import annotations

import logging
from typing import Any, Iterable

from pod_checkup.catalog import ProblemCatalog
from pod_checkup.models import ProblemSignature, ResourceFinding, Severity

logger = logging.getLogger(__name__)

DEFAULT_HELP_BASE_URL = "https://github.com/getoutreach/devenv/wiki/"


def effective_severity(problem: ProblemSignature, finding: ResourceFinding) -> Severity:
    """Severity a finding is grouped under.

    WARNING if either the problem is a warning by nature or this occurrence
    was downgraded by its detector, CRITICAL otherwise.
    """
    if finding.warning or problem.severity == Severity.WARNING:
        return Severity.WARNING
    return Severity.CRITICAL


class Report:
    """Immutable, queryable view over the findings of one scan.

    A report is either empty (nothing to fix) or populated; it is always
    built from a complete finding list.
    """

    def __init__(self, findings: Iterable[ResourceFinding], catalog: ProblemCatalog) -> None:
        self._findings: tuple[ResourceFinding, ...] = tuple(findings)
        self._catalog = catalog
        self._by_problem: dict[str, list[ResourceFinding]] = {}
        self._by_severity: dict[Severity, dict[str, list[ResourceFinding]]] = {}

        for f in self._findings:
            self._by_problem.setdefault(f.problem_id, []).append(f)
            problem = catalog.lookup(f.problem_id)
            if problem is None:
                logger.debug("finding for %s references unknown problem %s", f.resource_name, f.problem_id)
                continue
            severity = effective_severity(problem, f)
            self._by_severity.setdefault(severity, {}).setdefault(f.problem_id, []).append(f)

    @classmethod
    def from_findings(cls, findings: Iterable[ResourceFinding], catalog: ProblemCatalog) -> Report:
        return cls(findings, catalog)

    @property
    def findings(self) -> tuple[ResourceFinding, ...]:
        return self._findings

    @property
    def is_empty(self) -> bool:
        return not self._findings

    def __len__(self) -> int:
        return len(self._findings)

    def get_problem_by_id(self, problem_id: str) -> ProblemSignature | None:
        return self._catalog.lookup(problem_id)

    def by_problem(self) -> dict[str, list[ResourceFinding]]:
        """Findings keyed by problem ID, in the order problems were first seen."""
        return {pid: list(group) for pid, group in self._by_problem.items()}

    def by_severity(self) -> dict[Severity, dict[str, list[ResourceFinding]]]:
        """Findings keyed by effective severity (critical first), then problem ID.

        Findings whose problem is not in the catalog are left out.
        """
        return {
            severity: {pid: list(group) for pid, group in self._by_severity[severity].items()}
            for severity in sorted(self._by_severity, key=lambda s: s.sort_order)
        }

    def help_url(self, problem_id: str, base_url: str = DEFAULT_HELP_BASE_URL) -> str | None:
        problem = self.get_problem_by_id(problem_id)
        if problem is None:
            return None
        return problem.help_url or base_url + problem_id

    def summary(self) -> dict[str, Any]:
        by_severity = self.by_severity()
        crits = sum(len(g) for g in by_severity.get(Severity.CRITICAL, {}).values())
        warns = sum(len(g) for g in by_severity.get(Severity.WARNING, {}).values())
        return {
            "total_findings": len(self._findings),
            "critical_count": crits,
            "warning_count": warns,
            "affected_resources": len({f.resource_name for f in self._findings}),
            "problems": {pid: len(group) for pid, group in self._by_problem.items()},
        }
