from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional, Protocol, Tuple, Type, TypeVar, Union

from effectsim.faults import EffectFault, TransportFault
from effectsim.result import Result

from .computation import BodyFactory, Computation

A = TypeVar("A")
Number = Union[int, float]


@dataclass(frozen=True)
class Handle:
    name: str


STDIN = Handle("stdin")
STDOUT = Handle("stdout")
STDERR = Handle("stderr")


@dataclass(frozen=True)
class HttpResponse:
    status_code: int
    body: bytes = b""
    headers: Tuple[Tuple[str, str], ...] = ()
    url: str = ""

    @property
    def text(self) -> str:
        return self.body.decode("utf-8")

    def json(self) -> Any:
        return json.loads(self.body)

    def header(self, name: str) -> Optional[str]:
        wanted = name.lower()
        for key, value in self.headers:
            if key.lower() == wanted:
                return value
        return None


HttpResult = Result[HttpResponse, TransportFault]


class Sequencing(Protocol):
    def pure(self, value: A) -> Computation[A]: ...
    def do(self, factory: BodyFactory) -> Computation[Any]: ...


class Console(Protocol):
    def get_echo(self, handle: Handle) -> Computation[bool]: ...
    def set_echo(self, handle: Handle, flag: bool) -> Computation[None]: ...
    def std_in(self) -> Computation[Handle]: ...
    def std_out(self) -> Computation[Handle]: ...
    def std_err(self) -> Computation[Handle]: ...
    def get_char(self, handle: Handle) -> Computation[str]: ...
    def get_line(self, handle: Handle) -> Computation[str]: ...
    def put_char(self, handle: Handle, char: str) -> Computation[None]: ...
    def put_str(self, handle: Handle, text: str) -> Computation[None]: ...
    def put_str_ln(self, handle: Handle, text: str) -> Computation[None]: ...
    def flush(self, handle: Handle) -> Computation[None]: ...


class Timer(Protocol):
    def thread_delay(self, microseconds: int) -> Computation[None]: ...
    def get_system_time(self) -> Computation[datetime]: ...


class Try(Protocol):
    def attempt(
        self, comp: Computation[A], fault_type: Type[EffectFault] = EffectFault
    ) -> Computation[Result[A, EffectFault]]: ...


class Files(Protocol):
    def file_exists(self, path: str) -> Computation[bool]: ...
    def read_file(self, path: str) -> Computation[bytes]: ...
    def write_file(self, path: str, contents: bytes) -> Computation[None]: ...


class Random(Protocol):
    def random_int(self) -> Computation[int]: ...
    def random_between(self, lo: Number, hi: Number) -> Computation[Number]: ...


class Http(Protocol):
    def http_get(self, url: str, session: Any = None) -> Computation[HttpResult]: ...
    def http_post(self, url: str, payload: bytes, session: Any = None) -> Computation[HttpResult]: ...
    def http_delete(self, url: str, session: Any = None) -> Computation[HttpResult]: ...
    def new_session(self) -> Computation[Any]: ...


class Assert(Protocol):
    def record(self, assertion: Any) -> Computation[None]: ...
    def assertion_context(self) -> Computation[str]: ...
    def nest_context(self, name: str, comp: Computation[A]) -> Computation[A]: ...


class Effects(Sequencing, Console, Timer, Try, Files, Random, Http, Assert, Protocol):
    pass


