from __future__ import annotations

import json
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from effectsim.effects.prng import MockGen
from effectsim.mock.state import DEFAULT_SEED, MJD_EPOCH, MockServer, MockSession, MockState


class MockConfig(BaseModel):
    """Initial settings for a simulated environment."""

    model_config = ConfigDict(extra="forbid")

    seed: int = DEFAULT_SEED
    start_time: datetime = MJD_EPOCH
    tick_seconds: float = Field(default=1.0, gt=0)
    console_input: List[str] = Field(default_factory=list)
    console_default: str = ""
    console_char: str = Field(default="y", min_length=1, max_length=1)
    echo: bool = True
    file_exists: bool = True
    file_full: bool = False
    file_input: List[bytes] = Field(default_factory=list)

    @field_validator("start_time")
    @classmethod
    def _timezone_aware(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            raise ValueError("start_time must carry a timezone")
        return value

    def to_state(
        self,
        responder: MockServer,
        session: MockSession | None = None,
        client_local: Any = None,
    ) -> MockState:
        return MockState(
            responder=responder,
            session=session if session is not None else MockSession(),
            client_local=client_local,
            console_in=(tuple(self.console_input), self.console_default),
            clock=self.start_time,
            tick=timedelta(seconds=self.tick_seconds),
            file_exists=self.file_exists,
            file_full=self.file_full,
            file_in=tuple(self.file_input),
            rng=MockGen(self.seed),
            echo=self.echo,
            console_char=self.console_char,
        )


def load_mock_config(path: Path) -> MockConfig:
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError("mock config must be a JSON object")
    return MockConfig.model_validate(payload)
