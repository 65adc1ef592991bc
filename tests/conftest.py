from __future__ import annotations

from typing import Dict, List, Optional

import pytest

from adsapi.domain.models.request_spec import RequestSpec
from adsapi.domain.models.response import Response


class FakeTransport:
    """Returns canned responses in order and records every request"""

    def __init__(self, *responses: Response):
        self.responses = list(responses)
        self.requests: List[RequestSpec] = []

    def execute(self, request: RequestSpec) -> Response:
        self.requests.append(request)
        if len(self.responses) > 1:
            return self.responses.pop(0)
        return self.responses[0]

    @property
    def calls(self) -> int:
        return len(self.requests)


class RecordingSleep:
    def __init__(self):
        self.calls: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


def make_response(status_code: int, body: str = "", headers: Optional[Dict[str, str]] = None, reason: str = "") -> Response:
    return Response(status_code=status_code, headers=headers or {}, body=body, reason=reason)


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()
