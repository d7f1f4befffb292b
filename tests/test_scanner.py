"""
Tests for the scanner.
"""

from types import SimpleNamespace

import pytest

from pod_checkup.catalog import ProblemCatalog, default_catalog
from pod_checkup.errors import ScanCancelled
from pod_checkup.models import Detection, ProblemSignature, ScanContext, Severity
from pod_checkup.report import Report
from pod_checkup.scanner import scan


def test_healthy_pods_produce_no_findings(make_pod):
    pods = [make_pod(name=f"web-{i}", ready=True) for i in range(3)]
    assert scan(ScanContext(), pods, default_catalog()) == []


def test_crash_loop_pod_yields_single_finding(make_pod, container_status):
    pod = make_pod(
        name="api-0", namespace="payments", labels={"reporting_team": "payments-team"},
        containers=[container_status(waiting="CrashLoopBackOff", last_terminated="Error", restart_count=3)],
    )

    findings = scan(ScanContext(), [pod], default_catalog())

    assert len(findings) == 1
    finding = findings[0]
    assert finding.problem_id == "PodCrashLoopBackOff"
    assert finding.warning is False
    assert finding.resource_name == "payments/api-0"
    assert finding.resource_type == "pod"
    assert finding.resource_owner == "payments-team"

    report = Report.from_findings(findings, default_catalog())
    by_severity = report.by_severity()
    assert list(by_severity) == [Severity.CRITICAL]
    assert list(by_severity[Severity.CRITICAL]) == ["PodCrashLoopBackOff"]
    assert by_severity[Severity.CRITICAL]["PodCrashLoopBackOff"] == [finding]


def test_custom_owner_label(make_pod, container_status):
    pod = make_pod(labels={"team": "infra"}, containers=[container_status(waiting="CrashLoopBackOff")])

    assert scan(ScanContext(), [pod], default_catalog())[0].resource_owner == ""
    assert scan(ScanContext(), [pod], default_catalog(), owner_label="team")[0].resource_owner == "infra"


def test_pod_tripping_several_detectors_gets_one_finding_each(make_pod, container_status):
    pod = make_pod(ready=False, containers=[
        container_status(name="app", ready=False, waiting="CrashLoopBackOff", last_terminated="OOMKilled", restart_count=4),
    ])

    findings = scan(ScanContext(), [pod], default_catalog())

    assert [f.problem_id for f in findings] == ["PodCrashLoopBackOff", "PodNotReady", "PodOOMKilled"]
    assert [f.warning for f in findings] == [False, True, True]


def test_order_is_pods_then_catalog(make_pod, container_status):
    first = make_pod(name="a", containers=[container_status(last_terminated="OOMKilled")])
    second = make_pod(name="b", containers=[container_status(waiting="ImagePullBackOff")])
    third = make_pod(name="c", containers=[container_status(waiting="CrashLoopBackOff", last_terminated="OOMKilled")])

    findings = scan(ScanContext(), [first, second, third], default_catalog())

    assert [(f.resource_name, f.problem_id) for f in findings] == [
        ("default/a", "PodOOMKilled"),
        ("default/b", "PodImagePullBackOff"),
        ("default/c", "PodCrashLoopBackOff"),
        ("default/c", "PodOOMKilled"),
    ]


def test_parallel_scan_keeps_input_order(make_pod, container_status):
    pods = [
        make_pod(name=f"pod-{i}", containers=[container_status(waiting="CrashLoopBackOff" if i % 2 else "ErrImagePull")])
        for i in range(20)
    ]

    serial = scan(ScanContext(), pods, default_catalog())
    parallel = scan(ScanContext(), pods, default_catalog(), workers=4)

    assert parallel == serial


def test_malformed_snapshot_is_not_fatal(make_pod, container_status):
    def broken(ctx, pod):
        return Detection(details=pod.status.missing_field.reason, occurring=True)

    catalog = ProblemCatalog(
        ProblemSignature(id="Broken", short_description="broken", severity=Severity.CRITICAL, detector=broken),
        *default_catalog(),
    )
    pod = make_pod(containers=[container_status(waiting="CrashLoopBackOff")])

    findings = scan(ScanContext(), [pod], catalog)

    assert [f.problem_id for f in findings] == ["PodCrashLoopBackOff"]


def test_snapshot_without_metadata_is_not_fatal():
    pod = SimpleNamespace(status=None)

    assert scan(ScanContext(), [pod], default_catalog()) == []


def test_non_dict_labels_leave_owner_empty(make_pod, container_status):
    pod = make_pod(containers=[container_status(waiting="CrashLoopBackOff")])
    pod.metadata = SimpleNamespace(name="web-0", namespace="default", labels=["reporting_team"])

    findings = scan(ScanContext(), [pod], default_catalog())

    assert [(f.resource_name, f.resource_owner) for f in findings] == [("default/web-0", "")]


def test_cancelled_context_aborts_scan(make_pod):
    ctx = ScanContext()
    ctx.cancel()

    with pytest.raises(ScanCancelled):
        scan(ctx, [make_pod()], default_catalog())


def test_cancel_mid_scan(make_pod):
    ctx = ScanContext()
    seen = []

    def cancelling(c, pod):
        seen.append(pod.metadata.name)
        c.cancel()
        return Detection()

    catalog = ProblemCatalog(
        ProblemSignature(id="Cancel", short_description="cancel", severity=Severity.WARNING, detector=cancelling),
    )

    with pytest.raises(ScanCancelled):
        scan(ctx, [make_pod(name="a"), make_pod(name="b")], catalog)
    assert seen == ["a"]


def test_expired_deadline_aborts_parallel_scan(make_pod):
    ctx = ScanContext(deadline=0.0)

    with pytest.raises(ScanCancelled):
        scan(ctx, [make_pod(name="a"), make_pod(name="b")], default_catalog(), workers=2)
