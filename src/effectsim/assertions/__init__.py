from .assertion import (
    Assertion,
    AssertionResult,
    assertion_if,
    failure,
    is_success,
    show_assertion,
    success,
)
from .constructors import (
    assert_equal,
    assert_failure,
    assert_false,
    assert_is_named_substring,
    assert_is_not_named_substring,
    assert_is_not_substring,
    assert_is_substring,
    assert_matches_schema,
    assert_not_equal,
    assert_success,
    assert_success_if,
    assert_true,
)
from .summary import (
    EMPTY_SUMMARY,
    AssertionSummary,
    combine,
    print_summary,
    render_summary,
    summarize,
    summarize_all,
    summary,
)
from .tree import TestCase, TestGroup, TestLabel, TestTree, iter_cases, render_context, run_test_tree

__all__ = [
    "Assertion",
    "AssertionResult",
    "AssertionSummary",
    "EMPTY_SUMMARY",
    "TestCase",
    "TestGroup",
    "TestLabel",
    "TestTree",
    "assert_equal",
    "assert_failure",
    "assert_false",
    "assert_is_named_substring",
    "assert_is_not_named_substring",
    "assert_is_not_substring",
    "assert_is_substring",
    "assert_matches_schema",
    "assert_not_equal",
    "assert_success",
    "assert_success_if",
    "assert_true",
    "assertion_if",
    "combine",
    "failure",
    "is_success",
    "iter_cases",
    "print_summary",
    "render_context",
    "render_summary",
    "run_test_tree",
    "show_assertion",
    "success",
    "summarize",
    "summarize_all",
    "summary",
]
