# SPDX-License-Identifier: MIT

"""Ordered registry of problem signatures."""

from __future__ import annotations

from typing import Iterable, Iterator

from pod_checkup.checks import (
    POD_CRASH_LOOP_BACK_OFF,
    POD_IMAGE_PULL_BACK_OFF,
    POD_NOT_READY,
    POD_OOM_KILLED,
)
from pod_checkup.errors import DuplicateProblemError, UnknownProblemError
from pod_checkup.models import ProblemSignature

# Problems checked when the caller does not choose, in evaluation order.
ENABLED_PROBLEMS: tuple[ProblemSignature, ...] = (
    POD_CRASH_LOOP_BACK_OFF,
    POD_NOT_READY,
    POD_IMAGE_PULL_BACK_OFF,
    POD_OOM_KILLED,
)

DEFAULT_CHECKS: list[str] = [p.id for p in ENABLED_PROBLEMS]


class ProblemCatalog:
    """Append-only, ordered collection of problem signatures keyed by ID.

    Iteration follows registration order, which is also the order detectors
    run in for each resource.
    """

    def __init__(self, *signatures: ProblemSignature) -> None:
        self._signatures: dict[str, ProblemSignature] = {}
        self.register(*signatures)

    def register(self, *signatures: ProblemSignature) -> None:
        for sig in signatures:
            if sig.id in self._signatures:
                raise DuplicateProblemError(sig.id)
            self._signatures[sig.id] = sig

    def lookup(self, problem_id: str) -> ProblemSignature | None:
        return self._signatures.get(problem_id)

    def select(self, problem_ids: Iterable[str]) -> ProblemCatalog:
        """Build a new catalog holding only ``problem_ids``, in that order.

        An ID listed more than once keeps its first position.
        """
        selected: dict[str, ProblemSignature] = {}
        for pid in problem_ids:
            sig = self.lookup(pid)
            if sig is None:
                raise UnknownProblemError(pid)
            selected.setdefault(pid, sig)
        return ProblemCatalog(*selected.values())

    @property
    def ids(self) -> list[str]:
        return list(self._signatures)

    def __iter__(self) -> Iterator[ProblemSignature]:
        return iter(list(self._signatures.values()))

    def __len__(self) -> int:
        return len(self._signatures)

    def __contains__(self, problem_id: object) -> bool:
        return problem_id in self._signatures

    def __repr__(self) -> str:
        return f"ProblemCatalog({', '.join(self._signatures)})"


def default_catalog() -> ProblemCatalog:
    return ProblemCatalog(*ENABLED_PROBLEMS)
