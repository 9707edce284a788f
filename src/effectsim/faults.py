from __future__ import annotations

from typing import Any


class EffectFault(Exception):
    """A failure of a capability operation.

    The mock interpreter stores these in the environment instead of raising
    them; the real interpreter raises them. Either way ``attempt`` turns them
    into ``Failure`` values.
    """

    code = "fault"

    def __init__(self, message: str = "", path: str | None = None) -> None:
        self.message = message
        self.path = path
        super().__init__(self.__str__())

    def __str__(self) -> str:
        text = f"{self.code}: {self.message}" if self.message else self.code
        if self.path:
            return f"{text} ({self.path})"
        return text

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message={self.message!r}, path={self.path!r})"

    def __eq__(self, other: Any) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return (self.message, self.path) == (other.message, other.path)

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.message, self.path))


class EndOfInput(EffectFault):
    code = "eof"


class NotFound(EffectFault):
    code = "not_found"


class StorageFull(EffectFault):
    code = "full"


class TransportFault(EffectFault):
    code = "transport"


class IOFault(EffectFault):
    code = "io"
