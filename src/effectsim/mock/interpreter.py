# Copyright 2026 Joseph Verdicchio
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Any, Callable, Generic, Tuple, Type, TypeVar

from effectsim.assertions.assertion import Assertion
from effectsim.assertions.summary import AssertionSummary, summarize
from effectsim.assertions.tree import TestTree, render_context, run_test_tree
from effectsim.effects.computation import BodyFactory, Computation, require_computation
from effectsim.effects.types import STDERR, STDIN, STDOUT, Handle, HttpResult
from effectsim.faults import EffectFault, EndOfInput, NotFound, StorageFull
from effectsim.result import Failure, Result, Success

from .state import MockSession, MockState

logger = logging.getLogger(__name__)

A = TypeVar("A")
B = TypeVar("B")

Step = Callable[[MockState], Tuple[A, MockState]]


class MockIO(Computation[A], Generic[A]):
    """A pure step ``MockState -> (value, MockState)``.

    Sequencing with ``bind`` advances the simulated clock by one tick between
    the two computations; ``map`` and ``pure`` never touch the clock.
    """

    def __init__(self, step: Step[A]) -> None:
        self._step = step

    def run(self, state: MockState) -> Tuple[A, MockState]:
        return self._step(state)

    def bind(self, f: Callable[[A], Computation[B]]) -> "MockIO[B]":
        def step(state: MockState) -> Tuple[B, MockState]:
            value, after = self._step(state)
            following = f(value)
            require_computation(following, MockIO)
            return following.run(after.advance())

        return MockIO(step)

    def map(self, f: Callable[[A], B]) -> "MockIO[B]":
        def step(state: MockState) -> Tuple[B, MockState]:
            value, after = self._step(state)
            return f(value), after

        return MockIO(step)


def _inspect(read: Callable[[MockState], A]) -> MockIO[A]:
    return MockIO(lambda state: (read(state), state))


def _modify(update: Callable[[MockState], MockState]) -> MockIO[None]:
    return MockIO(lambda state: (None, update(state)))


class MockInterpreter:
    """Implements every capability against a threaded ``MockState``.

    The interpreter itself holds nothing; all simulated resources live in the
    state passed to ``run``.
    """

    # sequencing

    def pure(self, value: A) -> MockIO[A]:
        return MockIO(lambda state: (value, state))

    def do(self, factory: BodyFactory) -> MockIO[Any]:
        def step(state: MockState) -> Tuple[Any, MockState]:
            body = factory()
            try:
                current = next(body)
            except StopIteration as stop:
                return stop.value, state
            while True:
                require_computation(current, MockIO)
                value, state = current.run(state)
                state = state.advance()
                try:
                    current = body.send(value)
                except StopIteration as stop:
                    return stop.value, state

        return MockIO(step)

    def run(self, comp: Computation[A], state: MockState) -> Tuple[A, MockState]:
        require_computation(comp, MockIO)
        return comp.run(state)  # type: ignore[attr-defined]

    def run_suite(
        self, tree: TestTree[Computation[Any]], state: MockState
    ) -> Tuple[AssertionSummary, MockState]:
        _, final = self.run(run_test_tree(self, tree), state)
        return summarize(final.assertions[len(state.assertions) :]), final

    # direct state access

    def get_state(self) -> MockIO[MockState]:
        return _inspect(lambda state: state)

    def put_state(self, new_state: MockState) -> MockIO[None]:
        return MockIO(lambda _: (None, new_state))

    def get_fault(self) -> MockIO[EffectFault | None]:
        return _inspect(lambda state: state.captured_fault)

    def clear_fault(self) -> MockIO[None]:
        return _modify(lambda state: replace(state, captured_fault=None))

    def put_local(self, value: Any) -> MockIO[None]:
        return _modify(lambda state: replace(state, client_local=value))

    def throw(self, fault: EffectFault) -> MockIO[None]:
        if not isinstance(fault, EffectFault):
            raise TypeError("throw expects an EffectFault")

        def step(state: MockState) -> Tuple[None, MockState]:
            logger.debug("captured fault %s at %s", fault, state.clock.isoformat())
            return None, replace(state, captured_fault=fault)

        return MockIO(step)

    # console

    def get_echo(self, handle: Handle) -> MockIO[bool]:
        return _inspect(lambda state: state.echo)

    def set_echo(self, handle: Handle, flag: bool) -> MockIO[None]:
        return _modify(lambda state: replace(state, echo=bool(flag)))

    def std_in(self) -> MockIO[Handle]:
        return self.pure(STDIN)

    def std_out(self) -> MockIO[Handle]:
        return self.pure(STDOUT)

    def std_err(self) -> MockIO[Handle]:
        return self.pure(STDERR)

    def get_char(self, handle: Handle) -> MockIO[str]:
        return _inspect(lambda state: state.console_char)

    def get_line(self, handle: Handle) -> MockIO[str]:
        def step(state: MockState) -> Tuple[str, MockState]:
            queued, default = state.console_in
            if not queued:
                return default, state
            return queued[0], replace(state, console_in=(queued[1:], default))

        return MockIO(step)

    def _write(self, handle: Handle, text: str) -> MockIO[None]:
        def update(state: MockState) -> MockState:
            if handle == STDOUT:
                return replace(state, console_out=(text,) + state.console_out)
            return replace(state, print_log=((handle.name, text),) + state.print_log)

        return _modify(update)

    def put_char(self, handle: Handle, char: str) -> MockIO[None]:
        if len(char) != 1:
            raise ValueError("put_char expects a single character")
        return self._write(handle, char)

    def put_str(self, handle: Handle, text: str) -> MockIO[None]:
        return self._write(handle, text)

    def put_str_ln(self, handle: Handle, text: str) -> MockIO[None]:
        return self.put_str(handle, text + "\n")

    def flush(self, handle: Handle) -> MockIO[None]:
        return self.pure(None)

    # timer

    def thread_delay(self, microseconds: int) -> MockIO[None]:
        if microseconds < 0:
            raise ValueError("microseconds must be >= 0")
        return self.pure(None)

    def get_system_time(self) -> MockIO[datetime]:
        return _inspect(lambda state: state.clock)

    # try

    def attempt(
        self, comp: Computation[A], fault_type: Type[EffectFault] = EffectFault
    ) -> MockIO[Result[A, EffectFault]]:
        require_computation(comp, MockIO)

        def step(state: MockState) -> Tuple[Result[A, EffectFault], MockState]:
            value, after = comp.run(state)  # type: ignore[attr-defined]
            fault = after.captured_fault
            if fault is not None and isinstance(fault, fault_type):
                return Failure(fault), after
            return Success(value), after

        return MockIO(step)

    # files

    def file_exists(self, path: str) -> MockIO[bool]:
        return _inspect(lambda state: state.file_exists)

    def read_file(self, path: str) -> MockIO[bytes]:
        def step(state: MockState) -> Tuple[Any, MockState]:
            if not state.file_exists:
                return self.throw(NotFound("file does not exist", path)).run(state)
            if not state.file_in:
                return self.throw(EndOfInput("no queued file contents", path)).run(state)
            return state.file_in[0], replace(state, file_in=state.file_in[1:])

        return MockIO(step)

    def write_file(self, path: str, contents: bytes) -> MockIO[None]:
        def step(state: MockState) -> Tuple[None, MockState]:
            if state.file_full:
                return self.throw(StorageFull("storage is full", path)).run(state)
            return None, replace(state, file_out=(bytes(contents),) + state.file_out)

        return MockIO(step)

    # random

    def random_int(self) -> MockIO[int]:
        def step(state: MockState) -> Tuple[int, MockState]:
            value, gen = state.rng.random_int()
            return value, replace(state, rng=gen)

        return MockIO(step)

    def random_between(self, lo: Any, hi: Any) -> MockIO[Any]:
        def step(state: MockState) -> Tuple[Any, MockState]:
            value, gen = state.rng.random_between(lo, hi)
            return value, replace(state, rng=gen)

        return MockIO(step)

    # http

    def _respond(self, method: str, url: str, *args: Any) -> MockIO[HttpResult]:
        def step(state: MockState) -> Tuple[HttpResult, MockState]:
            handler = getattr(state.responder, method)
            result, local = handler(state.client_local, url, *args)
            if not isinstance(result, (Success, Failure)):
                raise TypeError(f"{method} handler must return Success or Failure")
            logger.debug("mock %s %s -> %s", method.upper(), url, type(result).__name__)
            return result, replace(state, client_local=local)

        return MockIO(step)

    def http_get(self, url: str, session: Any = None) -> MockIO[HttpResult]:
        return self._respond("get", url)

    def http_post(self, url: str, payload: bytes, session: Any = None) -> MockIO[HttpResult]:
        return self._respond("post", url, bytes(payload))

    def http_delete(self, url: str, session: Any = None) -> MockIO[HttpResult]:
        return self._respond("delete", url)

    def new_session(self) -> MockIO[MockSession]:
        return _inspect(lambda state: state.session)

    # assertions

    def record(self, assertion: Assertion) -> MockIO[None]:
        if not isinstance(assertion, Assertion):
            raise TypeError("record expects an Assertion")
        return _modify(lambda state: replace(state, assertions=state.assertions + (assertion,)))

    def assertion_context(self) -> MockIO[str]:
        return _inspect(lambda state: render_context(state.context))

    def nest_context(self, name: str, comp: Computation[A]) -> MockIO[A]:
        require_computation(comp, MockIO)

        def step(state: MockState) -> Tuple[A, MockState]:
            value, after = comp.run(replace(state, context=state.context + (name,)))  # type: ignore[attr-defined]
            return value, replace(after, context=state.context)

        return MockIO(step)


MOCK = MockInterpreter()


def run_mock(comp: Computation[A], state: MockState) -> Tuple[A, MockState]:
    return MOCK.run(comp, state)


def run_mock_suite(
    tree: TestTree[Computation[Any]], state: MockState
) -> Tuple[AssertionSummary, MockState]:
    return MOCK.run_suite(tree, state)
