"""CDN77 job request construction."""
from __future__ import annotations

import json
from collections.abc import Iterable, Iterator
from importlib import metadata
from typing import assert_never

from cdn77_client.errors import InvalidInput, MissingCredential
from cdn77_client.models.command import ApiRequest, Command, JobKind, Prefetch, Purge
from cdn77_client.utils import uris

try:
    VERSION = metadata.version("cdn77-client")
except metadata.PackageNotFoundError:
    VERSION = "0.0.0"

USER_AGENT = f"cdn77-client/{VERSION}"


def validate_urls(urls: Iterable[str]) -> tuple[str, ...]:
    """Strip and check URLs, keeping their order."""
    result = tuple(url.strip() for url in urls)
    if not result:
        raise InvalidInput("No URLs given.")

    invalid = [url for url in result if not uris.is_absolute_http(url)]
    if invalid:
        shown = ", ".join(repr(url) for url in invalid[:3])
        more = f" (and {len(invalid) - 3} more)" if len(invalid) > 3 else ""
        raise InvalidInput(f"Not an absolute http(s) URL: {shown}{more}")

    return result


def build_command(kind: JobKind, resource_id: int | None, urls: Iterable[str]) -> Command:
    if resource_id is None:
        raise InvalidInput("No CDN resource ID given. Pass --resource-id or set CDN77_RESOURCE_ID.")
    if resource_id < 1:
        raise InvalidInput(f"Invalid CDN resource ID: {resource_id}")

    valid = validate_urls(urls)
    match kind:
        case JobKind.PREFETCH:
            return Prefetch(resource_id=resource_id, urls=valid)
        case JobKind.PURGE:
            return Purge(resource_id=resource_id, urls=valid)
        case _:
            assert_never(kind)


def encode_body(urls: Iterable[str]) -> bytes:
    return json.dumps({"url": list(urls)}, separators=(",", ":")).encode("utf-8")


def endpoint(command: Command, api_base: str) -> str:
    match command:
        case Prefetch(resource_id=resource_id):
            return uris.join(api_base, "cdn", str(resource_id), "job", "prefetch")
        case Purge(resource_id=resource_id):
            return uris.join(api_base, "cdn", str(resource_id), "job", "purge")
        case _:
            assert_never(command)


def build_request(command: Command, token: str, api_base: str) -> ApiRequest:
    """Build the job request for a command."""
    if not token:
        raise MissingCredential("Empty API token.")
    if not command.urls:
        raise InvalidInput("No URLs given.")

    headers = {
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
        "Accept": "application/json",
        "User-Agent": USER_AGENT,
    }
    return ApiRequest(
        method="POST",
        url=endpoint(command, api_base),
        headers=headers,
        body=encode_body(command.urls),
        url_count=len(command.urls),
    )


def chunked(urls: tuple[str, ...], size: int) -> Iterator[tuple[str, ...]]:
    for start in range(0, len(urls), size):
        yield urls[start:start + size]


def build_requests(
    command: Command, token: str, api_base: str, batch_size: int
) -> list[ApiRequest]:
    """Split a command into sequential requests of at most batch_size URLs."""
    if batch_size < 1:
        raise InvalidInput(f"Batch size must be at least 1, got {batch_size}")
    if not command.urls:
        raise InvalidInput("No URLs given.")

    return [
        build_request(type(command)(resource_id=command.resource_id, urls=chunk), token, api_base)
        for chunk in chunked(command.urls, batch_size)
    ]
