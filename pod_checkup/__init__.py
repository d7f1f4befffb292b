# SPDX-License-Identifier: MIT

"""Point-in-time detection of known pod problems in a Kubernetes cluster."""

from pod_checkup.catalog import DEFAULT_CHECKS, ENABLED_PROBLEMS, ProblemCatalog, default_catalog
from pod_checkup.errors import (
    CheckupError,
    DuplicateProblemError,
    FetchError,
    ScanCancelled,
    UnknownProblemError,
)
from pod_checkup.models import Detection, ProblemSignature, ResourceFinding, ScanContext, Severity
from pod_checkup.report import Report, effective_severity
from pod_checkup.scanner import scan

__all__ = [
    "CheckupError",
    "DEFAULT_CHECKS",
    "Detection",
    "DuplicateProblemError",
    "ENABLED_PROBLEMS",
    "FetchError",
    "ProblemCatalog",
    "ProblemSignature",
    "Report",
    "ResourceFinding",
    "ScanCancelled",
    "ScanContext",
    "Severity",
    "UnknownProblemError",
    "default_catalog",
    "effective_severity",
    "scan",
]
