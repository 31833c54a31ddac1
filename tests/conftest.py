import json

import httpx
import pytest

from cdn77_client.models.settings import EnvSettings

TOKEN = "s3cret-token-value"


class RecordingTransport(httpx.MockTransport):
    """Mock transport that keeps every request it handles."""

    def __init__(self, handler):
        self.requests: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


def job_response(request: httpx.Request, status: int = 202) -> httpx.Response:
    urls = json.loads(request.content)["url"]
    return httpx.Response(
        status,
        json={"id": f"job-{len(urls)}", "type": "purge", "url": urls, "state": "queued"},
    )


@pytest.fixture
def settings() -> EnvSettings:
    return EnvSettings(
        _env_file=None,
        api_base="https://api.cdn77.test/v3",
        resource_id=None,
        timeout=5.0,
        batch_size=2000,
        verbose=False,
    )


@pytest.fixture
def accepting_transport() -> RecordingTransport:
    return RecordingTransport(job_response)


@pytest.fixture
def unreachable_transport() -> RecordingTransport:
    def handler(request):
        raise AssertionError(f"Unexpected request to {request.url}")

    return RecordingTransport(handler)


@pytest.fixture(autouse=True)
def restore_logging():
    import logging

    root = logging.getLogger()
    level, handlers = root.level, root.handlers[:]
    yield
    root.setLevel(level)
    root.handlers[:] = handlers
