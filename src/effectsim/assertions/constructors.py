from __future__ import annotations

from typing import Any, Sequence, Tuple, TypeVar

from effectsim.common.schema_validate import SchemaLike, schema_errors
from effectsim.effects.computation import Computation

from .assertion import assertion_if

T = TypeVar("T")


def _contains(needle: Sequence[Any], haystack: Sequence[Any]) -> bool:
    if isinstance(needle, str) and isinstance(haystack, str):
        return needle in haystack
    if isinstance(needle, (bytes, bytearray)) and isinstance(haystack, (bytes, bytearray)):
        return bytes(needle) in bytes(haystack)
    needle, haystack = list(needle), list(haystack)
    width = len(needle)
    return any(haystack[i : i + width] == needle for i in range(len(haystack) - width + 1))


def assert_success_if(fx: Any, predicate: bool, statement: str, comment: str) -> Computation[None]:
    """Record a success if ``predicate`` holds and a failure otherwise.

    The assertion picks up whatever context ``fx`` currently has in scope.
    """
    if not isinstance(statement, str) or not isinstance(comment, str):
        raise TypeError("statement and comment must be strings")
    return fx.assertion_context().bind(
        lambda context: fx.record(assertion_if(bool(predicate), statement, context, comment))
    )


def assert_success(fx: Any, comment: str) -> Computation[None]:
    return assert_success_if(fx, True, "Success!", comment)


def assert_failure(fx: Any, comment: str) -> Computation[None]:
    return assert_success_if(fx, False, "Failure :(", comment)


def assert_true(fx: Any, p: bool, comment: str) -> Computation[None]:
    return assert_success_if(fx, bool(p), f"{p!r} is True", comment)


def assert_false(fx: Any, p: bool, comment: str) -> Computation[None]:
    return assert_success_if(fx, not p, f"{p!r} is False", comment)


def assert_equal(fx: Any, x: T, y: T, comment: str) -> Computation[None]:
    return assert_success_if(fx, x == y, f"{x!r} is equal to {y!r}", comment)


def assert_not_equal(fx: Any, x: T, y: T, comment: str) -> Computation[None]:
    return assert_success_if(fx, x != y, f"{x!r} is not equal to {y!r}", comment)


def assert_is_substring(fx: Any, x: Sequence[Any], y: Sequence[Any], comment: str) -> Computation[None]:
    return assert_success_if(fx, _contains(x, y), f"{x!r} is a substring of {y!r}", comment)


def assert_is_not_substring(fx: Any, x: Sequence[Any], y: Sequence[Any], comment: str) -> Computation[None]:
    return assert_success_if(
        fx, not _contains(x, y), f"{x!r} is not a substring of {y!r}", comment
    )


# The named variants report the haystack by name; useful when it is large,
# e.g. the body of a web page.
def assert_is_named_substring(
    fx: Any, x: Sequence[Any], named: Tuple[Sequence[Any], str], comment: str
) -> Computation[None]:
    y, name = named
    return assert_success_if(fx, _contains(x, y), f"{x!r} is a substring of {name}", comment)


def assert_is_not_named_substring(
    fx: Any, x: Sequence[Any], named: Tuple[Sequence[Any], str], comment: str
) -> Computation[None]:
    y, name = named
    return assert_success_if(
        fx, not _contains(x, y), f"{x!r} is not a substring of {name}", comment
    )


def assert_matches_schema(
    fx: Any, instance: Any, schema: SchemaLike, comment: str, *, name: str = "document"
) -> Computation[None]:
    errors = schema_errors(instance, schema)
    statement = f"{name} matches schema"
    if errors:
        statement += " (" + "; ".join(errors) + ")"
    return assert_success_if(fx, not errors, statement, comment)

