from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

_GREEN = "\x1b[1;32m"
_RED = "\x1b[1;31m"
_RESET = "\x1b[0;39;49m"


class AssertionResult(str, Enum):
    SUCCESS = "AssertSuccess"
    FAILURE = "AssertFailure"


@dataclass(frozen=True)
class Assertion:
    """One falsifiable claim.

    ``statement`` is the what, ``context`` the where and ``comment`` the why.
    Build them with ``success``, ``failure`` or ``assertion_if``.
    """

    statement: str
    comment: str
    context: str
    result: AssertionResult

    def __post_init__(self) -> None:
        for name in ("statement", "comment", "context"):
            if not isinstance(getattr(self, name), str):
                raise TypeError(f"{name} must be a string")
        if not isinstance(self.result, AssertionResult):
            raise TypeError("result must be an AssertionResult")

    @property
    def justification(self) -> str:
        return self.comment


def is_success(assertion: Assertion) -> bool:
    return assertion.result is AssertionResult.SUCCESS


def success(statement: str, context: str, comment: str) -> Assertion:
    return Assertion(statement, comment, context, AssertionResult.SUCCESS)


def failure(statement: str, context: str, comment: str) -> Assertion:
    return Assertion(statement, comment, context, AssertionResult.FAILURE)


def assertion_if(predicate: bool, statement: str, context: str, comment: str) -> Assertion:
    return (success if predicate else failure)(statement, context, comment)


def show_assertion(assertion: Assertion, *, color: bool = True) -> str:
    if is_success(assertion):
        label, tint = "Valid Assertion", _GREEN
    else:
        label, tint = "Invalid Assertion", _RED
    header = f"{tint}{label}{_RESET}" if color else label
    return " ".join(
        [
            f"{header} in",
            assertion.context,
            f"\nassertion: {assertion.statement}",
            f"\ncomment: {assertion.comment}",
        ]
    )
