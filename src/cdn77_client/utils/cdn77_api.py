from __future__ import annotations

import logging
import time

import httpx

from cdn77_client.models.command import ApiRequest
from cdn77_client.models.outcome import ApiOutcome, TransportCause, TransportFailure
from cdn77_client.utils.responses import interpret_response

log = logging.getLogger(__name__)


def transport_cause(error: httpx.TransportError) -> TransportCause:
    if isinstance(error, httpx.TimeoutException):
        return TransportCause.TIMEOUT
    if isinstance(error, httpx.ConnectError):
        return TransportCause.CONNECT
    if isinstance(error, httpx.NetworkError):
        return TransportCause.NETWORK
    return TransportCause.PROTOCOL


class Cdn77Api:
    def __init__(self, timeout: float, transport: httpx.BaseTransport | None = None):
        """Initializes a session against the CDN77 API."""
        self.client = httpx.Client(
            timeout=httpx.Timeout(timeout),
            transport=transport,
            follow_redirects=False,
        )

    def __enter__(self) -> Cdn77Api:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        self.client.close()

    def send(self, request: ApiRequest) -> ApiOutcome:
        """Sends a single request and interprets the response."""
        log.debug("%s %s with %d URL(s)", request.method, request.url, request.url_count)
        started = time.monotonic()
        try:
            res = self.client.request(
                request.method,
                request.url,
                headers=request.headers,
                content=request.body,
            )
        except httpx.TransportError as e:
            cause = transport_cause(e)
            log.debug("Request failed after %.2fs: %r", time.monotonic() - started, e)
            return TransportFailure(cause=cause, detail=str(e) or type(e).__name__)

        log.debug("Got %d after %.2fs", res.status_code, time.monotonic() - started)
        return interpret_response(res.status_code, res.content, sent=request.url_count)
