# SPDX-License-Identifier: MIT

"""Runs every enabled detector against every pod snapshot."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Iterable

from pod_checkup.catalog import ProblemCatalog
from pod_checkup.models import NOT_OCCURRING, Detection, ProblemSignature, ResourceFinding, ScanContext

logger = logging.getLogger(__name__)

DEFAULT_OWNER_LABEL = "reporting_team"
POD_RESOURCE_TYPE = "pod"

# Raised by detectors reading a malformed snapshot.
DETECTOR_ANOMALIES = (AttributeError, TypeError, KeyError, ValueError)


def _run_detector(ctx: ScanContext, problem: ProblemSignature, pod: Any, name: str) -> Detection:
    try:
        return problem.detector(ctx, pod)
    except DETECTOR_ANOMALIES as exc:
        logger.debug("detector %s could not evaluate %s: %s", problem.id, name, exc)
        return NOT_OCCURRING


def _pod_name(pod: Any) -> str:
    meta = getattr(pod, "metadata", None)
    namespace = getattr(meta, "namespace", None) or "default"
    name = getattr(meta, "name", None) or "unknown"
    return f"{namespace}/{name}"


def _pod_owner(pod: Any, owner_label: str) -> str:
    labels = getattr(getattr(pod, "metadata", None), "labels", None)
    if not isinstance(labels, dict):
        return ""
    return str(labels.get(owner_label) or "")


def scan_pod(
    ctx: ScanContext,
    pod: Any,
    catalog: ProblemCatalog,
    owner_label: str = DEFAULT_OWNER_LABEL,
) -> list[ResourceFinding]:
    """Return one finding per enabled problem that fires on ``pod``."""
    name = _pod_name(pod)
    owner = _pod_owner(pod, owner_label)

    findings = []
    for problem in catalog:
        ctx.raise_if_cancelled()
        detection = _run_detector(ctx, problem, pod, name)
        if not detection.occurring:
            continue
        findings.append(ResourceFinding(
            resource_owner=owner,
            resource_name=name,
            resource_type=POD_RESOURCE_TYPE,
            problem_id=problem.id,
            problem_details=detection.details,
            warning=detection.warning,
        ))
    return findings


def scan(
    ctx: ScanContext,
    pods: Iterable[Any],
    catalog: ProblemCatalog,
    owner_label: str = DEFAULT_OWNER_LABEL,
    workers: int = 1,
) -> list[ResourceFinding]:
    """Scan ``pods`` and return findings ordered by pod, then by catalog order.

    With ``workers`` above one, pods are evaluated concurrently and the
    per-pod results are reassembled in input order. Raises
    :class:`~pod_checkup.errors.ScanCancelled` if ``ctx`` is cancelled.
    """
    pods = list(pods)
    logger.info("scanning %d pod(s) for %d problem(s)", len(pods), len(catalog))

    if workers > 1 and len(pods) > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [executor.submit(scan_pod, ctx, pod, catalog, owner_label) for pod in pods]
            try:
                per_pod = [f.result() for f in futures]
            except Exception:
                for f in futures:
                    f.cancel()
                raise
    else:
        per_pod = [scan_pod(ctx, pod, catalog, owner_label) for pod in pods]

    findings = [f for pod_findings in per_pod for f in pod_findings]
    logger.info("scan found %d problem occurrence(s)", len(findings))
    return findings
