from __future__ import annotations

import functools
from abc import ABC, abstractmethod
from typing import Any, Callable, Generator, Generic, Iterable, TypeVar

A = TypeVar("A")
B = TypeVar("B")

# A body yields computations and receives their results back.
Body = Generator["Computation[Any]", Any, A]
BodyFactory = Callable[[], Body]


class Computation(ABC, Generic[A]):
    """A description of an effectful step, run later by an interpreter."""

    @abstractmethod
    def bind(self, f: Callable[[A], "Computation[B]"]) -> "Computation[B]": ...

    @abstractmethod
    def map(self, f: Callable[[A], B]) -> "Computation[B]": ...


def effectful(fn: Callable[..., Body]) -> Callable[..., Computation[Any]]:
    """Turn a generator function ``fn(fx, ...)`` into a computation builder.

    Each ``yield`` hands a computation to the interpreter ``fx`` and receives
    its result; the generator's return value is the computation's result.
    A fresh generator is created for every run, so the same computation can
    be replayed from different states.

        @effectful
        def echo_line(fx):
            stdin = yield fx.std_in()
            line = yield fx.get_line(stdin)
            stdout = yield fx.std_out()
            yield fx.put_str_ln(stdout, line)
            return line
    """

    @functools.wraps(fn)
    def wrapper(fx: Any, *args: Any, **kwargs: Any) -> Computation[Any]:
        return fx.do(lambda: fn(fx, *args, **kwargs))

    return wrapper


def sequence_(fx: Any, steps: Iterable[Computation[Any]]) -> Computation[None]:
    """Run ``steps`` left to right under ``fx``, discarding their results."""
    steps = tuple(steps)

    def body() -> Body:
        for step in steps:
            yield step
        return None

    return fx.do(body)


def require_computation(value: Any, kind: type) -> None:
    if not isinstance(value, kind):
        raise TypeError(
            f"effectful body yielded {type(value).__name__}, expected {kind.__name__}"
        )
