# SPDX-License-Identifier: MIT

"""Plain-text rendering of a finished report."""

from __future__ import annotations

from pod_checkup.report import DEFAULT_HELP_BASE_URL, Report

SUCCESS_MESSAGE = "Everything looks good"


def _resource_line(finding) -> str:
    line = f"    - {finding.resource_name}"
    if finding.problem_details:
        line += f": {finding.problem_details}"
    if finding.resource_owner:
        line += f" (owned by {finding.resource_owner})"
    return line


def report_text(report: Report, help_base_url: str = DEFAULT_HELP_BASE_URL) -> str:
    if report.is_empty:
        return SUCCESS_MESSAGE

    lines = ["Problems found (format: namespace/name <problem>):"]

    for severity, problems in report.by_severity().items():
        for pid, findings in problems.items():
            problem = report.get_problem_by_id(pid)
            if problem is None:
                continue
            plural = "s" if len(findings) > 1 else ""
            lines.append("")
            lines.append(
                f"  [{severity.value.upper()}] {pid}: {problem.short_description} "
                f"[{len(findings)} occurrence{plural}]"
            )
            lines.extend(_resource_line(f) for f in findings)

    lines.append("")
    lines.append("More information/help:")
    for pid in report.by_problem():
        url = report.help_url(pid, help_base_url)
        if url is None:
            continue
        lines.append(f"    - {pid}: {url}")

    return "\n".join(lines)
