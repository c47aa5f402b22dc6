import json
from typing import Callable, List

import httpx
import pytest

from unity_tracker.config import Settings
from unity_tracker.xrpscan_service import XrpscanService


API_BASE = "https://api.xrpscan.com/api/v1"


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: List[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


def json_response(status_code: int, payload) -> Callable[[httpx.Request], httpx.Response]:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, content=json.dumps(payload).encode("utf-8"))

    return handler


def make_service(transport: httpx.MockTransport, **overrides) -> XrpscanService:
    settings = Settings(tracker_mode="xrpscan", xrpscan_api_url=API_BASE, **overrides)
    return XrpscanService(settings, client=httpx.AsyncClient(transport=transport))


@pytest.fixture
def account_body():
    return {"account": "rABC", "xrpBalance": "123.45", "sequence": 7}
