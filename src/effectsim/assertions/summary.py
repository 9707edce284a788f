from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Tuple

from effectsim.effects.computation import effectful

from .assertion import Assertion, is_success, show_assertion

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssertionSummary:
    """Counts of passed and failed assertions plus the failures themselves.

    Summaries form a monoid under ``+`` with ``AssertionSummary()`` as the
    identity, so summaries of nested groups can be combined in any grouping.
    """

    num_successes: int = 0
    num_failures: int = 0
    failures: Tuple[Assertion, ...] = ()

    def __post_init__(self) -> None:
        if self.num_successes < 0 or self.num_failures < 0:
            raise ValueError("counts must be >= 0")

    def __add__(self, other: "AssertionSummary") -> "AssertionSummary":
        if not isinstance(other, AssertionSummary):
            return NotImplemented
        return AssertionSummary(
            num_successes=self.num_successes + other.num_successes,
            num_failures=self.num_failures + other.num_failures,
            failures=self.failures + other.failures,
        )

    @property
    def num_assertions(self) -> int:
        return self.num_successes + self.num_failures


EMPTY_SUMMARY = AssertionSummary()


def combine(x: AssertionSummary, y: AssertionSummary) -> AssertionSummary:
    return x + y


def summary(assertion: Assertion) -> AssertionSummary:
    if is_success(assertion):
        return AssertionSummary(1, 0, ())
    return AssertionSummary(0, 1, (assertion,))


def summarize_all(summaries: Iterable[AssertionSummary]) -> AssertionSummary:
    total = EMPTY_SUMMARY
    for item in summaries:
        total = total + item
    return total


def summarize(assertions: Iterable[Assertion]) -> AssertionSummary:
    return summarize_all(summary(a) for a in assertions)


def render_summary(result: AssertionSummary, *, color: bool = True) -> List[str]:
    lines = [show_assertion(a, color=color) for a in result.failures]
    lines.append(f"Assertions: {result.num_assertions}")
    lines.append(f"Failures: {result.num_failures}")
    return lines


@effectful
def print_summary(fx: Any, result: AssertionSummary, *, color: bool = True) -> Any:
    logger.info(
        "assertion summary: %d assertions, %d failures",
        result.num_assertions,
        result.num_failures,
    )
    stdout = yield fx.std_out()
    for line in render_summary(result, color=color):
        yield fx.put_str_ln(stdout, line)
    return None
