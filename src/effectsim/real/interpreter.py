# Copyright 2026 Joseph Verdicchio
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0

from __future__ import annotations

import errno
import logging
import random
import sys
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import IO, Any, Callable, Dict, Generic, List, Optional, Tuple, Type, TypeVar

import httpx

from effectsim.assertions.assertion import Assertion
from effectsim.assertions.tree import render_context
from effectsim.effects.computation import BodyFactory, Computation, require_computation
from effectsim.effects.prng import INT_RANGE_MAX
from effectsim.effects.types import STDERR, STDIN, STDOUT, Handle, HttpResponse, HttpResult
from effectsim.faults import EffectFault, EndOfInput, IOFault, NotFound, StorageFull, TransportFault
from effectsim.result import Failure, Result, Success

logger = logging.getLogger(__name__)

_FULL_ERRNOS = {errno.ENOSPC, getattr(errno, "EDQUOT", errno.ENOSPC)}

A = TypeVar("A")
B = TypeVar("B")


@dataclass(frozen=True)
class RealEnv:
    context: Tuple[str, ...] = ()
    assertions: List[Assertion] = field(default_factory=list)


class RealIO(Computation[A], Generic[A]):
    """A deferred action against the host, read in a ``RealEnv``."""

    def __init__(self, action: Callable[[RealEnv], A]) -> None:
        self._action = action

    def run(self, env: RealEnv) -> A:
        return self._action(env)

    def bind(self, f: Callable[[A], Computation[B]]) -> "RealIO[B]":
        def action(env: RealEnv) -> B:
            following = f(self._action(env))
            require_computation(following, RealIO)
            return following.run(env)

        return RealIO(action)

    def map(self, f: Callable[[A], B]) -> "RealIO[B]":
        return RealIO(lambda env: f(self._action(env)))


def _lift(thunk: Callable[[], A]) -> RealIO[A]:
    return RealIO(lambda _env: thunk())


class RealInterpreter:
    """Implements every capability against the host machine.

    Streams, the random source and the HTTP client are injectable so the
    interpreter can be driven from tests without a terminal or a network.
    """

    def __init__(
        self,
        *,
        stdin: Optional[IO[str]] = None,
        stdout: Optional[IO[str]] = None,
        stderr: Optional[IO[str]] = None,
        rng: Optional[random.Random] = None,
        client: Optional[httpx.Client] = None,
        client_factory: Optional[Callable[[], httpx.Client]] = None,
    ) -> None:
        self._streams: Dict[str, IO[str]] = {
            STDIN.name: stdin if stdin is not None else sys.stdin,
            STDOUT.name: stdout if stdout is not None else sys.stdout,
            STDERR.name: stderr if stderr is not None else sys.stderr,
        }
        self._echo: Dict[str, bool] = {}
        self._rng = rng if rng is not None else random.Random()
        self._client_factory = client_factory or httpx.Client
        self._client = client
        self._sessions: List[httpx.Client] = []

    # sequencing

    def pure(self, value: A) -> RealIO[A]:
        return RealIO(lambda _env: value)

    def do(self, factory: BodyFactory) -> RealIO[Any]:
        def action(env: RealEnv) -> Any:
            body = factory()
            try:
                current = next(body)
            except StopIteration as stop:
                return stop.value
            while True:
                require_computation(current, RealIO)
                value = current.run(env)
                try:
                    current = body.send(value)
                except StopIteration as stop:
                    return stop.value

        return RealIO(action)

    def run(self, comp: Computation[A], context: Tuple[str, ...] = ()) -> Tuple[A, Tuple[Assertion, ...]]:
        require_computation(comp, RealIO)
        env = RealEnv(context=tuple(context))
        value = comp.run(env)  # type: ignore[attr-defined]
        return value, tuple(env.assertions)

    def close(self) -> None:
        """Close the default client and every client handed out by ``new_session``."""
        for session in self._sessions:
            session.close()
        self._sessions.clear()
        if self._client is not None:
            self._client.close()
            self._client = None

    # console

    def _stream(self, handle: Handle) -> IO[str]:
        try:
            return self._streams[handle.name]
        except KeyError:
            raise ValueError(f"unknown handle: {handle.name}") from None

    def get_echo(self, handle: Handle) -> RealIO[bool]:
        def thunk() -> bool:
            stream = self._stream(handle)
            if stream.isatty():
                import termios

                attrs = termios.tcgetattr(stream.fileno())
                return bool(attrs[3] & termios.ECHO)
            return self._echo.get(handle.name, True)

        return _lift(thunk)

    def set_echo(self, handle: Handle, flag: bool) -> RealIO[None]:
        def thunk() -> None:
            stream = self._stream(handle)
            if stream.isatty():
                import termios

                attrs = termios.tcgetattr(stream.fileno())
                attrs[3] = attrs[3] | termios.ECHO if flag else attrs[3] & ~termios.ECHO
                termios.tcsetattr(stream.fileno(), termios.TCSANOW, attrs)
            self._echo[handle.name] = bool(flag)

        return _lift(thunk)

    def std_in(self) -> RealIO[Handle]:
        return self.pure(STDIN)

    def std_out(self) -> RealIO[Handle]:
        return self.pure(STDOUT)

    def std_err(self) -> RealIO[Handle]:
        return self.pure(STDERR)

    def get_char(self, handle: Handle) -> RealIO[str]:
        def thunk() -> str:
            char = self._stream(handle).read(1)
            if char == "":
                raise EndOfInput("end of input", handle.name)
            return char

        return _lift(thunk)

    def get_line(self, handle: Handle) -> RealIO[str]:
        def thunk() -> str:
            line = self._stream(handle).readline()
            if line == "":
                raise EndOfInput("end of input", handle.name)
            return line.rstrip("\n")

        return _lift(thunk)

    def put_char(self, handle: Handle, char: str) -> RealIO[None]:
        if len(char) != 1:
            raise ValueError("put_char expects a single character")
        return self.put_str(handle, char)

    def put_str(self, handle: Handle, text: str) -> RealIO[None]:
        def thunk() -> None:
            self._stream(handle).write(text)

        return _lift(thunk)

    def put_str_ln(self, handle: Handle, text: str) -> RealIO[None]:
        return self.put_str(handle, text + "\n")

    def flush(self, handle: Handle) -> RealIO[None]:
        return _lift(lambda: self._stream(handle).flush())

    # timer

    def thread_delay(self, microseconds: int) -> RealIO[None]:
        if microseconds < 0:
            raise ValueError("microseconds must be >= 0")
        return _lift(lambda: time.sleep(microseconds / 1_000_000))

    def get_system_time(self) -> RealIO[datetime]:
        return _lift(lambda: datetime.now(timezone.utc))

    # try

    def attempt(
        self, comp: Computation[A], fault_type: Type[EffectFault] = EffectFault
    ) -> RealIO[Result[A, EffectFault]]:
        require_computation(comp, RealIO)

        def action(env: RealEnv) -> Result[A, EffectFault]:
            try:
                return Success(comp.run(env))  # type: ignore[attr-defined]
            except fault_type as fault:
                return Failure(fault)

        return RealIO(action)

    # files

    def file_exists(self, path: str) -> RealIO[bool]:
        return _lift(lambda: Path(path).exists())

    def read_file(self, path: str) -> RealIO[bytes]:
        def thunk() -> bytes:
            try:
                return Path(path).read_bytes()
            except FileNotFoundError as exc:
                raise NotFound(exc.strerror or "file does not exist", path) from exc
            except OSError as exc:
                raise IOFault(exc.strerror or type(exc).__name__, path) from exc

        return _lift(thunk)

    def write_file(self, path: str, contents: bytes) -> RealIO[None]:
        def thunk() -> None:
            try:
                Path(path).write_bytes(bytes(contents))
            except OSError as exc:
                if exc.errno in _FULL_ERRNOS:
                    raise StorageFull(exc.strerror or "storage is full", path) from exc
                if exc.errno == errno.ENOENT:
                    raise NotFound(exc.strerror or "directory does not exist", path) from exc
                raise IOFault(exc.strerror or type(exc).__name__, path) from exc

        return _lift(thunk)

    # random

    def random_int(self) -> RealIO[int]:
        return _lift(lambda: self._rng.randint(0, INT_RANGE_MAX))

    def random_between(self, lo: Any, hi: Any) -> RealIO[Any]:
        if lo > hi:
            lo, hi = hi, lo
        if isinstance(lo, float) or isinstance(hi, float):
            return _lift(lambda: self._rng.uniform(lo, hi))
        return _lift(lambda: self._rng.randint(lo, hi))

    # http

    def _session(self, session: Optional[httpx.Client]) -> httpx.Client:
        if session is not None:
            return session
        if self._client is None:
            self._client = self._client_factory()
        return self._client

    def _request(
        self, method: str, url: str, session: Optional[httpx.Client], content: Optional[bytes] = None
    ) -> RealIO[HttpResult]:
        def thunk() -> HttpResult:
            client = self._session(session)
            try:
                response = client.request(method, url, content=content)
            except httpx.TransportError as exc:
                logger.warning("%s %s failed: %s", method, url, exc)
                return Failure(TransportFault(str(exc) or type(exc).__name__, url))
            logger.debug("%s %s -> %d", method, url, response.status_code)
            return Success(
                HttpResponse(
                    status_code=response.status_code,
                    body=response.content,
                    headers=tuple(response.headers.items()),
                    url=str(response.url),
                )
            )

        return _lift(thunk)

    def http_get(self, url: str, session: Optional[httpx.Client] = None) -> RealIO[HttpResult]:
        return self._request("GET", url, session)

    def http_post(
        self, url: str, payload: bytes, session: Optional[httpx.Client] = None
    ) -> RealIO[HttpResult]:
        return self._request("POST", url, session, bytes(payload))

    def http_delete(self, url: str, session: Optional[httpx.Client] = None) -> RealIO[HttpResult]:
        return self._request("DELETE", url, session)

    def new_session(self) -> RealIO[httpx.Client]:
        def thunk() -> httpx.Client:
            session = self._client_factory()
            self._sessions.append(session)
            return session

        return _lift(thunk)

    # assertions

    def record(self, assertion: Assertion) -> RealIO[None]:
        if not isinstance(assertion, Assertion):
            raise TypeError("record expects an Assertion")
        return RealIO(lambda env: env.assertions.append(assertion))

    def assertion_context(self) -> RealIO[str]:
        return RealIO(lambda env: render_context(env.context))

    def nest_context(self, name: str, comp: Computation[A]) -> RealIO[A]:
        require_computation(comp, RealIO)

        def action(env: RealEnv) -> A:
            inner = RealEnv(context=env.context + (name,), assertions=env.assertions)
            return comp.run(inner)  # type: ignore[attr-defined]

        return RealIO(action)
