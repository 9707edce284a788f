from .computation import Computation, effectful, sequence_
from .prng import MockGen
from .types import (
    STDERR,
    STDIN,
    STDOUT,
    Assert,
    Console,
    Effects,
    Files,
    Handle,
    Http,
    HttpResponse,
    HttpResult,
    Random,
    Timer,
    Try,
)

__all__ = [
    "Assert",
    "Computation",
    "Console",
    "Effects",
    "Files",
    "Handle",
    "Http",
    "HttpResponse",
    "HttpResult",
    "MockGen",
    "Random",
    "STDERR",
    "STDIN",
    "STDOUT",
    "Timer",
    "Try",
    "effectful",
    "sequence_",
]
