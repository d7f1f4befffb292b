# SPDX-License-Identifier: MIT

"""Exceptions raised by pod-checkup."""

from __future__ import annotations


class CheckupError(Exception):
    """Base class for every error the checkup raises."""


class FetchError(CheckupError):
    """The resource list could not be obtained from the cluster."""


class ScanCancelled(CheckupError):
    """The scan was cancelled or ran past its deadline."""


class UnknownProblemError(CheckupError):
    def __init__(self, problem_id: str) -> None:
        super().__init__(f"unknown problem id: {problem_id}")
        self.problem_id = problem_id


class DuplicateProblemError(CheckupError):
    def __init__(self, problem_id: str) -> None:
        super().__init__(f"problem id registered twice: {problem_id}")
        self.problem_id = problem_id
