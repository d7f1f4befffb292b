# SPDX-License-Identifier: MIT

"""Core data model shared by the catalog, detectors, scanner and report."""

from __future__ import annotations

import threading
import time
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Callable

from pod_checkup.errors import ScanCancelled


class Severity(str, Enum):
    CRITICAL = "critical"
    WARNING = "warning"

    @property
    def sort_order(self) -> int:
        return {Severity.CRITICAL: 0, Severity.WARNING: 1}[self]


@dataclass(frozen=True)
class Detection:
    """Outcome of running one detector against one resource."""

    details: str = ""
    warning: bool = False
    occurring: bool = False


NOT_OCCURRING = Detection()


@dataclass
class ScanContext:
    """Cancellation token threaded through every detector call.

    A scan is abandoned once :meth:`cancel` has been called or the optional
    monotonic deadline has passed.
    """

    deadline: float | None = None
    _cancel_event: threading.Event = field(default_factory=threading.Event, repr=False)

    @classmethod
    def with_timeout(cls, seconds: float | None) -> ScanContext:
        if seconds is None:
            return cls()
        return cls(deadline=time.monotonic() + seconds)

    def cancel(self) -> None:
        self._cancel_event.set()

    def raise_if_cancelled(self) -> None:
        if self._cancel_event.is_set():
            raise ScanCancelled("scan cancelled")
        if self.deadline is not None and time.monotonic() >= self.deadline:
            raise ScanCancelled("scan deadline exceeded")


Detector = Callable[[ScanContext, Any], Detection]


@dataclass(frozen=True)
class ProblemSignature:
    id: str
    short_description: str
    severity: Severity
    detector: Detector = field(compare=False, repr=False)
    help_url: str = ""


@dataclass(frozen=True)
class ResourceFinding:
    # Owner is the team owning the resource, empty when the label is absent.
    resource_owner: str
    # Display identity, "<namespace>/<name>" for pods.
    resource_name: str
    resource_type: str
    problem_id: str
    problem_details: str = ""
    # Set when this occurrence is not causing a problem right now, e.g. a
    # past OOM kill on a container that has since restarted.
    warning: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
