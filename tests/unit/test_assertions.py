import pytest

from effectsim.assertions.assertion import (
    Assertion,
    AssertionResult,
    assertion_if,
    failure,
    is_success,
    show_assertion,
    success,
)
from effectsim.assertions.constructors import (
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
from effectsim.mock.interpreter import MOCK
from effectsim.mock.state import MockState


def _recorded(state: MockState, comp) -> Assertion:
    _, final = MOCK.run(comp, state)
    assert len(final.assertions) == 1
    return final.assertions[0]


@pytest.mark.parametrize("predicate", [True, False])
def test_assertion_if_preserves_text(predicate: bool) -> None:
    a = assertion_if(predicate, "stmt", "ctx", "why")
    assert is_success(a) is predicate
    assert (a.statement, a.context, a.comment) == ("stmt", "ctx", "why")
    assert a.justification == "why"


@pytest.mark.parametrize("predicate", [True, False])
def test_assert_success_if_records_outcome(state: MockState, predicate: bool) -> None:
    a = _recorded(state, assert_success_if(MOCK, predicate, "stmt", "why"))
    expected = AssertionResult.SUCCESS if predicate else AssertionResult.FAILURE
    assert a.result is expected
    assert a.statement == "stmt"
    assert a.comment == "why"
    assert a.context == ""


def test_fixed_outcome_constructors(state: MockState) -> None:
    assert _recorded(state, assert_success(MOCK, "ok")).statement == "Success!"
    a = _recorded(state, assert_failure(MOCK, "no"))
    assert a.statement == "Failure :("
    assert not is_success(a)


def test_boolean_constructors(state: MockState) -> None:
    assert is_success(_recorded(state, assert_true(MOCK, True, "c")))
    assert not is_success(_recorded(state, assert_true(MOCK, False, "c")))
    a = _recorded(state, assert_false(MOCK, False, "c"))
    assert is_success(a)
    assert a.statement == "False is False"


def test_equality_statements(state: MockState) -> None:
    a = _recorded(state, assert_equal(MOCK, 1, 2, "why"))
    assert a.statement == "1 is equal to 2"
    assert not is_success(a)
    b = _recorded(state, assert_not_equal(MOCK, "a", "b", "why"))
    assert b.statement == "'a' is not equal to 'b'"
    assert is_success(b)


def test_equality_is_exact(state: MockState) -> None:
    assert not is_success(_recorded(state, assert_equal(MOCK, 0.1 + 0.2, 0.3, "float")))


def test_substring_constructors(state: MockState) -> None:
    assert is_success(_recorded(state, assert_is_substring(MOCK, "ell", "hello", "c")))
    assert is_success(_recorded(state, assert_is_substring(MOCK, [2, 3], [1, 2, 3], "c")))
    assert not is_success(_recorded(state, assert_is_substring(MOCK, [3, 2], [1, 2, 3], "c")))
    a = _recorded(state, assert_is_not_substring(MOCK, "xyz", "hello", "c"))
    assert is_success(a)
    assert a.statement == "'xyz' is not a substring of 'hello'"


def test_named_substring_reports_name(state: MockState) -> None:
    page = "<html>" + "x" * 10_000 + "</html>"
    a = _recorded(state, assert_is_named_substring(MOCK, "<html>", (page, "page source"), "c"))
    assert a.statement == "'<html>' is a substring of page source"
    assert is_success(a)
    b = _recorded(state, assert_is_not_named_substring(MOCK, "<html>", (page, "page source"), "c"))
    assert b.statement == "'<html>' is not a substring of page source"
    assert not is_success(b)


def test_schema_assertion(state: MockState) -> None:
    schema = {"type": "object", "required": ["id"], "properties": {"id": {"type": "integer"}}}
    ok = _recorded(state, assert_matches_schema(MOCK, {"id": 3}, schema, "body", name="response"))
    assert is_success(ok)
    assert ok.statement == "response matches schema"
    bad = _recorded(state, assert_matches_schema(MOCK, {}, schema, "body"))
    assert not is_success(bad)
    assert "'id' is a required property" in bad.statement


def test_statement_must_be_text() -> None:
    with pytest.raises(TypeError):
        assert_success_if(MOCK, True, 3, "why")  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        Assertion("s", "c", "ctx", "AssertSuccess")  # type: ignore[arg-type]


def test_show_assertion() -> None:
    text = show_assertion(failure("1 is equal to 2", "A/B", "why"), color=False)
    assert text == "Invalid Assertion in A/B \nassertion: 1 is equal to 2 \ncomment: why"
    colored = show_assertion(success("s", "", "c"))
    assert colored.startswith("\x1b[1;32mValid Assertion\x1b[0;39;49m in")
