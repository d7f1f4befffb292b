# SPDX-License-Identifier: MIT

from pod_checkup.checks.pods import (
    POD_CRASH_LOOP_BACK_OFF,
    POD_IMAGE_PULL_BACK_OFF,
    POD_NOT_READY,
    POD_OOM_KILLED,
)

__all__ = [
    "POD_CRASH_LOOP_BACK_OFF",
    "POD_IMAGE_PULL_BACK_OFF",
    "POD_NOT_READY",
    "POD_OOM_KILLED",
]
