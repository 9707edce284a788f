from typing import Any, Tuple

import pytest

from effectsim.effects.types import HttpResponse
from effectsim.mock.state import MockServer, MockState, mock_state
from effectsim.result import Success


def _counting(local: Any, url: str, *_: Any) -> Tuple[Any, Any]:
    return Success(HttpResponse(status_code=200, body=str(local).encode(), url=url)), local + 1


@pytest.fixture
def counting_server() -> MockServer:
    return MockServer(get=_counting, post=_counting, delete=_counting)


@pytest.fixture
def state(counting_server: MockServer) -> MockState:
    return mock_state(counting_server, client_local=0)
