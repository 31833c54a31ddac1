"""CDN77 response interpretation."""
from __future__ import annotations

import json
from http import HTTPStatus
from typing import Any, assert_never

from pydantic import ValidationError

from cdn77_client.errors import Cdn77ClientError, InvalidInput, MissingCredential
from cdn77_client.models.job import JobInfo
from cdn77_client.models.outcome import (
    ApiOutcome,
    ClientError,
    ExitCode,
    ServerError,
    Success,
    TransportFailure,
)

MAX_MESSAGE_LENGTH = 300

# Default meanings from the CDN77 API reference. Some operations reuse these
# codes, so they only apply when the body carries no message of its own.
STATUS_HINTS = {
    401: "Please check your credentials.",
    403: "Please check your credentials or the job arguments.",
    404: "The CDN resource was not found. Please check the resource ID.",
    405: "This client might be outdated due to API changes.",
    422: "The API rejected the request body. Please check for a client update.",
}


def describe_status(status: int) -> str:
    """Generic description of a status code."""
    try:
        phrase = HTTPStatus(status).phrase
    except ValueError:
        phrase = "Unknown status"

    hint = STATUS_HINTS.get(status)
    return f"{phrase}. {hint}" if hint else phrase


def _flatten_errors(errors: Any) -> list[str]:
    if isinstance(errors, str):
        return [errors]
    if isinstance(errors, list):
        return [item for error in errors for item in _flatten_errors(error)]
    if isinstance(errors, dict):
        result = []
        for field, value in errors.items():
            result.extend(f"{field}: {item}" for item in _flatten_errors(value))
        return result
    return [str(errors)]


def _decode(body: bytes | str) -> str:
    if isinstance(body, bytes):
        return body.decode("utf-8", errors="replace")
    return body


def extract_message(status: int, body: bytes | str) -> str:
    """Best human-readable message of an error response."""
    text = _decode(body).strip()
    if not text:
        return describe_status(status)

    try:
        data = json.loads(text)
    except ValueError:
        data = None

    if isinstance(data, dict):
        parts = []
        for key in ("message", "error", "detail"):
            value = data.get(key)
            if isinstance(value, str) and value.strip():
                parts.append(value.strip())
                break
        if data.get("errors"):
            parts.extend(_flatten_errors(data["errors"]))
        if parts:
            return "; ".join(parts)[:MAX_MESSAGE_LENGTH]
        return describe_status(status)

    if isinstance(data, str):
        return data.strip()[:MAX_MESSAGE_LENGTH] or describe_status(status)
    if data is not None:
        return describe_status(status)

    return text[:MAX_MESSAGE_LENGTH]


def parse_job(body: bytes | str) -> JobInfo | None:
    try:
        return JobInfo.model_validate_json(body)
    except ValidationError:
        return None


def interpret_response(status: int, body: bytes | str, sent: int = 0) -> ApiOutcome:
    """
    Map an HTTP status and body to an outcome.
    `sent` is the number of URLs in the request, used when the API
    does not report how many it accepted.
    """
    if 200 <= status <= 299:
        job = parse_job(body) if _decode(body).strip() else None
        accepted = job.url_count if job and job.url_count is not None else sent
        return Success(status=status, accepted=accepted, job=job)
    if 500 <= status:
        return ServerError(status=status, message=extract_message(status, body))
    # 4xx, plus redirects and informational codes, which mean a misconfigured API base
    return ClientError(status=status, message=extract_message(status, body))


def exit_code_for(result: ApiOutcome | Cdn77ClientError) -> ExitCode:
    match result:
        case Success():
            return ExitCode.SUCCESS
        case ClientError():
            return ExitCode.CLIENT_ERROR
        case ServerError():
            return ExitCode.SERVER_ERROR
        case TransportFailure():
            return ExitCode.TRANSPORT_FAILURE
        case MissingCredential():
            return ExitCode.MISSING_CREDENTIAL
        case InvalidInput():
            return ExitCode.INVALID_INPUT
        case Cdn77ClientError():
            return ExitCode.INVALID_INPUT
        case _:
            assert_never(result)


def describe_outcome(outcome: ApiOutcome) -> str:
    """One-line description of an outcome, without a leading marker."""
    match outcome:
        case Success(status=status, accepted=accepted, job=job):
            job_part = f", job {job.id}" if job and job.id is not None else ""
            return f"accepted {accepted} URL(s) ({status}{job_part})"
        case ClientError(status=status, message=message):
            return f"Client error {status}: {message}"
        case ServerError(status=status, message=message):
            return f"Server error {status}: {message}"
        case TransportFailure(cause=cause, detail=detail):
            return f"Transport failure ({cause}): {detail}"
        case _:
            assert_never(outcome)
