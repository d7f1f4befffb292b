#!/usr/bin/python
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MIT

"""Pod checkup module for Ansible.

Lists every pod in the cluster (or one namespace) from the Ansible control
node, runs the enabled problem detectors against each pod and returns a
report grouped by severity and problem. Nothing is installed on the cluster.

All API calls are read-only (list). Zero writes to the cluster.
"""

from __future__ import annotations

DOCUMENTATION = r"""
---
module: pod_checkup
short_description: Detect known pod problems in a Kubernetes cluster
version_added: "1.0.0"
description:
  - Lists pods via kubeconfig and checks each one against a catalog of known
    problems such as CrashLoopBackOff, image pull failures, OOM kills and pods
    that are not ready.
  - Findings are grouped by problem and by severity. Past occurrences, like a
    container that was OOMKilled and restarted, are reported as warnings.
  - Completely read-only.
options:
  kubeconfig:
    description: Path to the kubeconfig file. Falls back to in-cluster config.
    type: path
    default: ~/.kube/config
  context:
    description: Kubeconfig context to use. Defaults to current context.
    type: str
  namespace:
    description: Limit the checkup to a single namespace. Omit for all namespaces.
    type: str
  checks:
    description: Ordered list of problem IDs to check for.
    type: list
    elements: str
    default: [PodCrashLoopBackOff, PodNotReady, PodImagePullBackOff, PodOOMKilled]
  owner_label:
    description: Pod label naming the team that owns the pod.
    type: str
    default: reporting_team
  help_base_url:
    description: Prefix used to build help links for problems without their own link.
    type: str
    default: https://github.com/getoutreach/devenv/wiki/
  workers:
    description: Number of pods evaluated concurrently.
    type: int
    default: 1
  timeout:
    description: Seconds after which the scan is abandoned.
    type: float
  fail_on_problems:
    description: Fail the task when any problem is found.
    type: bool
    default: true
requirements:
  - kubernetes
  - pod-checkup
author:
  - pod-checkup contributors
"""

EXAMPLES = r"""
- name: Check all pods in the current context
  pod_checkup:
  register: checkup

- name: Check a single namespace without failing the play
  pod_checkup:
    namespace: my-app
    fail_on_problems: false
  register: checkup

- name: Only look for crash loops and OOM kills
  pod_checkup:
    checks:
      - PodCrashLoopBackOff
      - PodOOMKilled
"""

RETURN = r"""
findings:
  description: Every problem occurrence, in scan order.
  type: list
  returned: always
  elements: dict
  sample:
    - resource_owner: "payments"
      resource_name: "default/api-6d4cf56db6-abcde"
      resource_type: "pod"
      problem_id: "PodCrashLoopBackOff"
      problem_details: "container api: last exit Error (exit code 1), 7 restarts"
      warning: false
summary:
  description: Counts per severity and per problem.
  type: dict
  returned: always
  sample:
    overall_health: "critical"
    total_findings: 3
    critical_count: 2
    warning_count: 1
    affected_resources: 2
    pod_count: 42
    problems:
      PodCrashLoopBackOff: 2
      PodOOMKilled: 1
report_text:
  description: Human-readable text report.
  type: str
  returned: always
"""


def run_module():
    from ansible.module_utils.basic import AnsibleModule

    module = AnsibleModule(
        argument_spec=dict(
            kubeconfig=dict(type="path", default="~/.kube/config"),
            context=dict(type="str", default=None),
            namespace=dict(type="str", default=None),
            checks=dict(
                type="list", elements="str",
                default=["PodCrashLoopBackOff", "PodNotReady", "PodImagePullBackOff", "PodOOMKilled"],
            ),
            owner_label=dict(type="str", default="reporting_team"),
            help_base_url=dict(type="str", default="https://github.com/getoutreach/devenv/wiki/"),
            workers=dict(type="int", default=1),
            timeout=dict(type="float", default=None),
            fail_on_problems=dict(type="bool", default=True),
        ),
        supports_check_mode=True,
    )

    # Verify the checkup package (and with it kubernetes) is available
    try:
        from pod_checkup.checkup import CheckupOptions, run_checkup
        from pod_checkup.errors import CheckupError, FetchError, ScanCancelled, UnknownProblemError
    except ImportError:
        module.fail_json(msg="The 'pod-checkup' Python package is required. Install with: pip install pod-checkup")
        return

    params = module.params
    options = CheckupOptions(
        kubeconfig=params["kubeconfig"],
        context=params["context"],
        namespace=params["namespace"],
        checks=params["checks"],
        owner_label=params["owner_label"],
        help_base_url=params["help_base_url"],
        workers=max(1, params["workers"]),
        timeout=params["timeout"],
    )

    try:
        result = run_checkup(options)
    except UnknownProblemError as e:
        module.fail_json(msg=f"Invalid checks option: {e}")
        return
    except ScanCancelled as e:
        module.fail_json(msg=f"Checkup aborted: {e}")
        return
    except FetchError as e:
        module.fail_json(msg=f"Failed to list pods: {e}")
        return
    except CheckupError as e:
        module.fail_json(msg=f"Checkup failed: {e}")
        return

    output = result.to_dict()
    if result.has_problems and params["fail_on_problems"]:
        module.fail_json(msg="Problems found in cluster pods", changed=False, **output)
        return
    module.exit_json(changed=False, **output)


def main():
    run_module()


if __name__ == "__main__":
    main()
