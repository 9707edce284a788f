import io
import random
from typing import Any, Tuple

import httpx

from effectsim.assertions.constructors import (
    assert_equal,
    assert_is_substring,
    assert_matches_schema,
    assert_true,
)
from effectsim.assertions.summary import print_summary, summarize
from effectsim.assertions.tree import TestCase, TestGroup, TestLabel
from effectsim.effects.computation import effectful
from effectsim.effects.types import HttpResponse
from effectsim.mock.interpreter import MOCK, run_mock_suite
from effectsim.mock.state import MockServer, mock_state
from effectsim.real.interpreter import RealInterpreter
from effectsim.result import Success

STATUS_SCHEMA = {
    "type": "object",
    "required": ["visits"],
    "properties": {"visits": {"type": "integer", "minimum": 1}},
}


@effectful
def visit_and_report(fx, url):
    """Greets the user, hits a status endpoint and saves the body."""
    stdin = yield fx.std_in()
    stdout = yield fx.std_out()
    name = yield fx.get_line(stdin)
    yield fx.put_str_ln(stdout, f"Hello, {name}!")
    response = yield fx.http_get(url)
    saved = yield fx.attempt(fx.write_file("status.json", response.value.body))
    return name, response.value, saved


def _visits_server() -> MockServer:
    def get(local: int, url: str) -> Tuple[Any, Any]:
        body = ('{"visits": %d}' % (local + 1)).encode()
        return Success(HttpResponse(status_code=200, body=body, url=url)), local + 1

    def refuse(local: Any, url: str, *_: Any) -> Tuple[Any, Any]:
        raise AssertionError("unexpected request")

    return MockServer(get=get, post=refuse, delete=refuse)


def test_program_under_mock() -> None:
    start = mock_state(_visits_server(), client_local=0).with_console_input(["Ada"])
    (name, response, saved), final = MOCK.run(visit_and_report(MOCK, "http://status.test/"), start)
    assert name == "Ada"
    assert response.json() == {"visits": 1}
    assert saved == Success(None)
    assert final.console_transcript() == "Hello, Ada!\n"
    assert final.file_out == (b'{"visits": 1}',)
    assert final.client_local == 1


def test_program_under_real(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b'{"visits": 41}')

    stdout = io.StringIO()
    fx = RealInterpreter(
        stdin=io.StringIO("Ada\n"),
        stdout=stdout,
        rng=random.Random(0),
        client=httpx.Client(transport=httpx.MockTransport(handler)),
    )
    (name, response, saved), _ = fx.run(visit_and_report(fx, "http://status.test/"))
    assert name == "Ada"
    assert response.json() == {"visits": 41}
    assert saved == Success(None)
    assert stdout.getvalue() == "Hello, Ada!\n"
    assert (tmp_path / "status.json").read_bytes() == b'{"visits": 41}'


@effectful
def checks_visits(fx, expected):
    response = yield fx.http_get("http://status.test/")
    yield assert_equal(fx, response.value.status_code, 200, "status endpoint is up")
    yield assert_matches_schema(fx, response.value.json(), STATUS_SCHEMA, "body shape", name="status body")
    yield assert_equal(fx, response.value.json()["visits"], expected, "visit counter")


@effectful
def stamps_increase(fx):
    first = yield fx.get_system_time()
    second = yield fx.get_system_time()
    yield assert_true(fx, second > first, "clock moves forward")


def test_suite_end_to_end() -> None:
    suite = TestGroup(
        [
            TestLabel(
                "status",
                TestGroup(
                    [
                        TestLabel("first", TestCase(checks_visits(MOCK, 1))),
                        TestLabel("second", TestCase(checks_visits(MOCK, 3))),
                    ]
                ),
            ),
            TestLabel("clock", TestCase(stamps_increase(MOCK))),
            TestCase(assert_is_substring(MOCK, "sim", "effectsim", "name")),
        ]
    )
    result, final = run_mock_suite(suite, mock_state(_visits_server(), client_local=0))
    assert result.num_assertions == 8
    assert result.num_failures == 1
    failed = result.failures[0]
    assert failed.context == "status/second"
    assert failed.statement == "2 is equal to 3"
    assert result == summarize(final.assertions)

    _, printed = MOCK.run(print_summary(MOCK, result, color=False), final)
    transcript = printed.console_transcript()
    assert "Invalid Assertion in status/second" in transcript
    assert transcript.endswith("Assertions: 8\nFailures: 1\n")
