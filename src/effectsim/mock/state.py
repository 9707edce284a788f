from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional, Tuple

from effectsim.common.canonical_json import canonical_dumps_bytes
from effectsim.common.hashing import sha256_prefixed
from effectsim.effects.prng import MockGen
from effectsim.effects.types import HttpResult
from effectsim.faults import EffectFault, TransportFault
from effectsim.result import Failure

# Modified Julian Day 0.
MJD_EPOCH = datetime(1858, 11, 17, tzinfo=timezone.utc)
DEFAULT_SEED = 6171

GetHandler = Callable[[Any, str], Tuple[HttpResult, Any]]
PostHandler = Callable[[Any, str, bytes], Tuple[HttpResult, Any]]
DeleteHandler = Callable[[Any, str], Tuple[HttpResult, Any]]


@dataclass(frozen=True)
class MockServer:
    """Scripted HTTP responder.

    Each handler takes the client-local state and the request arguments and
    returns ``(Success(response) | Failure(TransportFault), new local state)``.
    """

    get: GetHandler
    post: PostHandler
    delete: DeleteHandler

    def __repr__(self) -> str:
        return "<MockServer>"


@dataclass(frozen=True)
class MockSession:
    session_id: str = "mock-session"


@dataclass(frozen=True)
class MockState:
    responder: MockServer
    session: MockSession
    client_local: Any = None
    print_log: Tuple[Tuple[str, str], ...] = ()
    console_out: Tuple[str, ...] = ()
    console_in: Tuple[Tuple[str, ...], str] = ((), "")
    clock: datetime = MJD_EPOCH
    tick: timedelta = timedelta(seconds=1)
    captured_fault: Optional[EffectFault] = None
    file_exists: bool = True
    file_full: bool = False
    file_out: Tuple[bytes, ...] = ()
    file_in: Tuple[bytes, ...] = ()
    rng: MockGen = field(default_factory=MockGen)
    echo: bool = True
    console_char: str = "y"
    assertions: Tuple[Any, ...] = ()
    context: Tuple[str, ...] = ()

    def advance(self) -> "MockState":
        return replace(self, clock=self.clock + self.tick)

    def with_console_input(self, lines: Tuple[str, ...] | list, default: str = "") -> "MockState":
        return replace(self, console_in=(tuple(lines), default))

    def with_file_input(self, payloads: Tuple[bytes, ...] | list) -> "MockState":
        return replace(self, file_in=tuple(payloads))

    def console_transcript(self) -> str:
        """Everything written to stdout, oldest first."""
        return "".join(reversed(self.console_out))

    def written_files(self) -> Tuple[bytes, ...]:
        return tuple(reversed(self.file_out))

    def snapshot(self) -> Dict[str, Any]:
        fault = self.captured_fault
        return {
            "print_log": [list(entry) for entry in self.print_log],
            "console_out": list(self.console_out),
            "console_in": {"queued": list(self.console_in[0]), "default": self.console_in[1]},
            "clock": self.clock,
            "tick": self.tick,
            "captured_fault": None
            if fault is None
            else {"code": fault.code, "message": fault.message, "path": fault.path},
            "file_exists": self.file_exists,
            "file_full": self.file_full,
            "file_out": list(self.file_out),
            "file_in": list(self.file_in),
            "rng_seed": self.rng.seed,
            "echo": self.echo,
            "console_char": self.console_char,
            "client_local": self.client_local,
            "assertions": list(self.assertions),
            "context": list(self.context),
        }

    def fingerprint(self) -> str:
        return sha256_prefixed(canonical_dumps_bytes(self.snapshot()))


def mock_state(
    responder: MockServer,
    session: MockSession | None = None,
    client_local: Any = None,
) -> MockState:
    """A fresh environment: empty buffers, MJD 0 clock, seed 6171."""
    return MockState(
        responder=responder,
        session=session if session is not None else MockSession(),
        client_local=client_local,
        rng=MockGen(DEFAULT_SEED),
    )


def unreachable_server() -> MockServer:
    """A responder that fails every request with a transport fault."""

    def _refuse(local: Any, url: str, *_: Any) -> Tuple[HttpResult, Any]:
        return Failure(TransportFault("no scripted response", url)), local

    return MockServer(get=_refuse, post=_refuse, delete=_refuse)
