"""Command line client for the CDN77 API."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from typing_extensions import Annotated

from cdn77_client.dispatcher import dispatch
from cdn77_client.logs import setup_logging
from cdn77_client.models.command import JobKind
from cdn77_client.models.outcome import ExitCode
from cdn77_client.models.settings import DOTENV_FILE, EnvSettings, describe_errors
from cdn77_client.utils.credentials import read_dotenv

app = typer.Typer(no_args_is_help=True, pretty_exceptions_show_locals=False)

UrlsArg = Annotated[Optional[list[str]], typer.Argument(help="URLs of the CDN resource", show_default=False)]
ResourceIdOption = Annotated[
    Optional[int],
    typer.Option("--resource-id", "-r", help="CDN resource ID, defaults to CDN77_RESOURCE_ID"),
]
FromFileOption = Annotated[
    Optional[typer.FileText],
    typer.Option("--from-file", "-f", help="Read newline separated URLs from a file ('-' for stdin)"),
]
DryRunOption = Annotated[bool, typer.Option("--dry-run", help="Print the requests without sending them")]


@app.callback()
def main(
    ctx: typer.Context,
    api_token: Annotated[
        Optional[str],
        typer.Option(
            "--api-token", "-a",
            help="API token (dangerous!), prefer the CDN77_API_TOKEN environment variable",
            show_default=False,
        ),
    ] = None,
    timeout: Annotated[Optional[float], typer.Option("--timeout", help="Request timeout in seconds", min=0.1)] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
):
    """Prefetch and purge CDN77 cached content."""
    ctx.ensure_object(dict)
    if "settings" not in ctx.obj:
        try:
            ctx.obj["settings"] = EnvSettings()
        except ValidationError as e:
            typer.echo(f"❌  Invalid input: {describe_errors(e)}", err=True)
            raise typer.Exit(int(ExitCode.INVALID_INPUT))

    ctx.obj["api_token"] = api_token
    ctx.obj["timeout"] = timeout
    ctx.obj["verbose"] = verbose or ctx.obj["settings"].verbose
    setup_logging(ctx.obj["verbose"])


def read_url_file(file) -> list[str]:
    """Read URLs, skipping blank lines and # comments."""
    urls = []
    for line in file:
        line = line.strip()
        if line and not line.startswith("#"):
            urls.append(line)
    return urls


def run_job(
    ctx: typer.Context,
    kind: JobKind,
    urls: list[str] | None,
    resource_id: int | None,
    from_file,
    dry_run: bool,
):
    all_urls = list(urls or [])
    if from_file is not None:
        all_urls.extend(read_url_file(from_file))

    settings = ctx.obj["settings"].model_copy(update={"verbose": ctx.obj["verbose"]})
    code = dispatch(
        kind,
        all_urls,
        resource_id=resource_id if resource_id is not None else settings.resource_id,
        cli_token=ctx.obj["api_token"],
        environ=dict(os.environ),
        dotenv_values=read_dotenv(Path.cwd() / DOTENV_FILE),
        settings=settings,
        timeout=ctx.obj["timeout"],
        transport=ctx.obj.get("transport"),
        dry_run=dry_run,
    )
    raise typer.Exit(int(code))


@app.command()
def prefetch(
    ctx: typer.Context,
    urls: UrlsArg = None,
    resource_id: ResourceIdOption = None,
    from_file: FromFileOption = None,
    dry_run: DryRunOption = False,
):
    """Prefetch URLs into the CDN edge caches."""
    run_job(ctx, JobKind.PREFETCH, urls, resource_id, from_file, dry_run)


@app.command()
def purge(
    ctx: typer.Context,
    urls: UrlsArg = None,
    resource_id: ResourceIdOption = None,
    from_file: FromFileOption = None,
    dry_run: DryRunOption = False,
):
    """Purge URLs from the CDN cache."""
    run_job(ctx, JobKind.PURGE, urls, resource_id, from_file, dry_run)
