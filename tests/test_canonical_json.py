from datetime import datetime, timezone

from effectsim.assertions.assertion import success
from effectsim.common.canonical_json import canonical_dumps_str, canonicalize
from effectsim.mock.state import mock_state, unreachable_server


def test_canonical_key_order() -> None:
    a = {"b": 1, "a": 2}
    b = {"a": 2, "b": 1}
    assert canonical_dumps_str(a) == canonical_dumps_str(b)


def test_sets_become_sorted_lists() -> None:
    assert canonicalize({3, 1, 2}) == [1, 2, 3]
    assert canonicalize(frozenset({"b", "a"})) == ["a", "b"]
    assert canonicalize({"x": {2, "a"}}) == {"x": ["a", 2]}


def test_fingerprint_ignores_set_iteration_order() -> None:
    server = unreachable_server()
    forward = mock_state(server, client_local={"alpha", "beta", "gamma"})
    backward = mock_state(server, client_local=frozenset(["gamma", "beta", "alpha"]))
    assert forward.fingerprint() == backward.fingerprint()


def test_canonicalize_reduces_bytes_times_and_dataclasses() -> None:
    out = canonicalize(
        {
            "payload": b"\x00\xff",
            "at": datetime(1858, 11, 17, tzinfo=timezone.utc),
            "check": success("x", "ctx", "why"),
        }
    )
    assert out["payload"] == "00ff"
    assert out["at"] == "1858-11-17T00:00:00+00:00"
    assert out["check"] == {
        "statement": "x",
        "comment": "why",
        "context": "ctx",
        "result": "AssertSuccess",
    }


def test_drop_keys() -> None:
    assert canonicalize({"a": 1, "secret": 2}, drop_keys={"secret"}) == {"a": 1}
