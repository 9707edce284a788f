from .interpreter import MOCK, MockInterpreter, MockIO, run_mock, run_mock_suite
from .state import MJD_EPOCH, MockServer, MockSession, MockState, mock_state, unreachable_server

__all__ = [
    "MJD_EPOCH",
    "MOCK",
    "MockIO",
    "MockInterpreter",
    "MockServer",
    "MockSession",
    "MockState",
    "mock_state",
    "run_mock",
    "run_mock_suite",
    "unreachable_server",
]
