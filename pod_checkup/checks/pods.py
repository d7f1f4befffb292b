# SPDX-License-Identifier: MIT

"""Pod problem detectors.

Every detector looks at a single pod snapshot (a ``kubernetes.client.V1Pod``
or anything with the same attribute layout) and never mutates it. Missing
status fields mean "not occurring": absence of status information is not a
problem by itself.
"""

from __future__ import annotations

from typing import Any, Iterator

from pod_checkup.models import (
    NOT_OCCURRING,
    Detection,
    ProblemSignature,
    ScanContext,
    Severity,
)

IMAGE_PULL_REASONS = ("ImagePullBackOff", "ErrImagePull", "InvalidImageName")
TERMINAL_PHASES = ("Succeeded", "Failed")


# =====================================================================
# Helpers
# =====================================================================

def _container_statuses(pod: Any) -> Iterator[tuple[str, Any]]:
    status = pod.status
    if status is None:
        return
    for cs in status.init_container_statuses or []:
        yield "init-container", cs
    for cs in status.container_statuses or []:
        yield "container", cs


def _waiting(cs: Any) -> Any:
    if cs.state and cs.state.waiting:
        return cs.state.waiting
    return None


def _last_terminated(cs: Any) -> Any:
    if cs.last_state and cs.last_state.terminated:
        return cs.last_state.terminated
    return None


def _describe_exit(term: Any) -> str:
    reason = term.reason or "Unknown"
    if term.exit_code is None:
        return reason
    return f"{reason} (exit code {term.exit_code})"


def _join(parts: list[str]) -> Detection:
    if not parts:
        return NOT_OCCURRING
    return Detection(details="; ".join(parts), occurring=True)


# =====================================================================
# Detectors
# =====================================================================

def detect_crash_loop_back_off(ctx: ScanContext, pod: Any) -> Detection:
    parts = []
    for container_kind, cs in _container_statuses(pod):
        waiting = _waiting(cs)
        if waiting is None or waiting.reason != "CrashLoopBackOff":
            continue
        msg = f"{container_kind} {cs.name}"
        term = _last_terminated(cs)
        if term is not None:
            msg += f": last exit {_describe_exit(term)}"
        if cs.restart_count:
            msg += f", {cs.restart_count} restarts"
        parts.append(msg)
    return _join(parts)


def detect_image_pull_back_off(ctx: ScanContext, pod: Any) -> Detection:
    parts = []
    for container_kind, cs in _container_statuses(pod):
        waiting = _waiting(cs)
        if waiting is None or waiting.reason not in IMAGE_PULL_REASONS:
            continue
        msg = f"{container_kind} {cs.name}: {waiting.reason} pulling {cs.image or 'unknown image'}"
        if waiting.message:
            msg += f" ({waiting.message})"
        parts.append(msg)
    return _join(parts)


def detect_oom_killed(ctx: ScanContext, pod: Any) -> Detection:
    parts = []
    for container_kind, cs in _container_statuses(pod):
        # A container can be caught in its terminated state before restart.
        terms = [_last_terminated(cs)]
        if cs.state and cs.state.terminated:
            terms.append(cs.state.terminated)
        term = next((t for t in terms if t is not None and t.reason == "OOMKilled"), None)
        if term is None:
            continue
        msg = f"{container_kind} {cs.name} was OOMKilled"
        if term.exit_code is not None:
            msg += f" (exit code {term.exit_code})"
        parts.append(msg)
    detection = _join(parts)
    if not detection.occurring:
        return detection
    # The container has already been killed and restarted, so this is history.
    return Detection(details=detection.details, warning=True, occurring=True)


def _has_run_before(pod: Any) -> bool:
    for _, cs in _container_statuses(pod):
        if cs.restart_count or _last_terminated(cs) is not None:
            return True
    return False


def detect_not_ready(ctx: ScanContext, pod: Any) -> Detection:
    status = pod.status
    if status is None or status.phase in TERMINAL_PHASES:
        return NOT_OCCURRING

    ready = next((c for c in status.conditions or [] if c.type == "Ready"), None)
    if ready is None or ready.status != "False" or ready.reason == "PodCompleted":
        return NOT_OCCURRING

    flapped = _has_run_before(pod)
    details = "not ready since " + (
        ready.last_transition_time.isoformat() if ready.last_transition_time else "unknown time"
    )
    if ready.reason:
        details += f" ({ready.reason})"
    if not flapped:
        details = "never became ready, " + details
    return Detection(details=details, warning=flapped, occurring=True)


# =====================================================================
# Signatures
# =====================================================================

POD_CRASH_LOOP_BACK_OFF = ProblemSignature(
    id="PodCrashLoopBackOff",
    short_description="Pod is crashing repeatedly",
    severity=Severity.CRITICAL,
    detector=detect_crash_loop_back_off,
)

POD_NOT_READY = ProblemSignature(
    id="PodNotReady",
    short_description="Pod is not ready",
    severity=Severity.CRITICAL,
    detector=detect_not_ready,
)

POD_IMAGE_PULL_BACK_OFF = ProblemSignature(
    id="PodImagePullBackOff",
    short_description="Pod is unable to pull its image",
    severity=Severity.CRITICAL,
    detector=detect_image_pull_back_off,
)

POD_OOM_KILLED = ProblemSignature(
    id="PodOOMKilled",
    short_description="Pod was killed for using too much memory",
    severity=Severity.CRITICAL,
    detector=detect_oom_killed,
)
