"""Deterministic effect simulation for unit tests.

Code written against the capability protocols in ``effectsim.effects`` runs
unchanged on the ``MockInterpreter`` (a pure, clock-ticking simulation) or on
the ``RealInterpreter`` (the host console, filesystem, clock and network).
"""

from .assertions import (
    Assertion,
    AssertionResult,
    AssertionSummary,
    TestCase,
    TestGroup,
    TestLabel,
    print_summary,
    run_test_tree,
    summarize,
)
from .config import MockConfig, load_mock_config
from .effects import STDERR, STDIN, STDOUT, Effects, Handle, HttpResponse, MockGen, effectful
from .faults import EffectFault, EndOfInput, IOFault, NotFound, StorageFull, TransportFault
from .mock import (
    MOCK,
    MockInterpreter,
    MockIO,
    MockServer,
    MockSession,
    MockState,
    mock_state,
    run_mock,
    run_mock_suite,
)
from .real import RealInterpreter, RealIO
from .result import Failure, Result, Success

__all__ = [
    "Assertion",
    "AssertionResult",
    "AssertionSummary",
    "EffectFault",
    "Effects",
    "EndOfInput",
    "Failure",
    "Handle",
    "IOFault",
    "HttpResponse",
    "MOCK",
    "MockConfig",
    "MockGen",
    "MockIO",
    "MockInterpreter",
    "MockServer",
    "MockSession",
    "MockState",
    "NotFound",
    "RealIO",
    "RealInterpreter",
    "Result",
    "STDERR",
    "STDIN",
    "STDOUT",
    "StorageFull",
    "Success",
    "TestCase",
    "TestGroup",
    "TestLabel",
    "TransportFault",
    "effectful",
    "load_mock_config",
    "mock_state",
    "print_summary",
    "run_mock",
    "run_mock_suite",
    "run_test_tree",
    "summarize",
]
