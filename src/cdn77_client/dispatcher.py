"""Runs one prefetch or purge job from start to finish."""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

import httpx
import typer
from rich.console import Console

from cdn77_client.errors import Cdn77ClientError, InvalidInput
from cdn77_client.models.command import ApiRequest, JobKind
from cdn77_client.models.outcome import ApiOutcome, ExitCode, Success
from cdn77_client.models.settings import EnvSettings
from cdn77_client.utils import uris
from cdn77_client.utils.cdn77_api import Cdn77Api
from cdn77_client.utils.credentials import redact, resolve_token
from cdn77_client.utils.job_request import build_command, build_requests
from cdn77_client.utils.responses import describe_outcome, exit_code_for

log = logging.getLogger(__name__)


def _fail(message: str, token: str | None = None) -> None:
    typer.echo(f"❌  {redact(message, token)}", err=True)


def _print_dry_run(requests: list[ApiRequest]) -> None:
    for request in requests:
        typer.echo(f"{request.method} {request.url}")
        for name, value in request.masked_headers().items():
            typer.echo(f"  {name}: {value}")
        typer.echo(f"  {request.body.decode('utf-8')}")


def _send_all(
    requests: list[ApiRequest], timeout: float, transport: httpx.BaseTransport | None
) -> tuple[list[Success], ApiOutcome | None]:
    """Send requests in order, stopping at the first failure."""
    accepted: list[Success] = []
    with Cdn77Api(timeout=timeout, transport=transport) as api:
        for index, request in enumerate(requests, start=1):
            outcome = api.send(request)
            if not isinstance(outcome, Success):
                if index < len(requests):
                    log.warning("Skipping %d remaining request(s)", len(requests) - index)
                return accepted, outcome
            accepted.append(outcome)
    return accepted, None


def dispatch(
    kind: JobKind,
    urls: Iterable[str],
    *,
    resource_id: int | None,
    cli_token: str | None,
    environ: Mapping[str, str],
    dotenv_values: Mapping[str, str | None],
    settings: EnvSettings,
    timeout: float | None = None,
    transport: httpx.BaseTransport | None = None,
    dry_run: bool = False,
) -> ExitCode:
    """
    Resolve the token, build the job requests, send them and report.
    Prints one summary line (stdout on success, stderr on failure)
    and returns the exit code for the process.
    """
    token: str | None = None
    try:
        token = resolve_token(cli_token, environ, dotenv_values)
        if not uris.is_absolute_http(settings.api_base):
            raise InvalidInput(f"Invalid API base URL: {settings.api_base!r}")
        command = build_command(kind, resource_id, urls)
        requests = build_requests(command, token, settings.api_base, settings.batch_size)
    except Cdn77ClientError as e:
        _fail(f"{e.category.capitalize()}: {e}", token)
        return exit_code_for(e)

    label = kind.value.capitalize()
    if dry_run:
        _print_dry_run(requests)
        typer.echo(
            f"✅  Dry run: {label} of {len(command.urls)} URL(s) "
            f"in {len(requests)} request(s) not sent"
        )
        return ExitCode.SUCCESS

    try:
        accepted, failure = _send_all(
            requests,
            timeout=settings.timeout if timeout is None else timeout,
            transport=transport,
        )
    except Exception as e:
        if settings.verbose:
            raise
        _fail(f"{label} failed. Unexpected error: {type(e).__name__}: {e}", token)
        return ExitCode.UNEXPECTED_ERROR

    if settings.verbose:
        console = Console(stderr=True)
        for success in accepted:
            if success.job is not None:
                console.print_json(success.job.model_dump_json(by_alias=True))

    if failure is not None:
        progress = (
            f" after {len(accepted)}/{len(requests)} request(s) were accepted"
            if accepted else ""
        )
        _fail(f"{label} failed{progress}. {describe_outcome(failure)}", token)
        return exit_code_for(failure)

    total = sum(success.accepted for success in accepted)
    job_ids = [str(s.job.id) for s in accepted if s.job is not None and s.job.id is not None]
    jobs = f" (job {', '.join(job_ids)})" if job_ids else ""
    typer.echo(
        f"✅  {label} accepted for {total} URL(s) of resource {command.resource_id} "
        f"in {len(requests)} request(s){jobs}"
    )
    return ExitCode.SUCCESS
