"""API token resolution."""
from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

import dotenv

from cdn77_client.errors import InvalidInput, MissingCredential

TOKEN_VAR = "CDN77_API_TOKEN"
MASK = "********"


def check_token(token: str) -> str:
    """Tokens go into an HTTP header: printable ASCII, no whitespace."""
    if not all("!" <= c <= "~" for c in token):
        raise InvalidInput(
            "API token contains whitespace, control or non-ASCII characters. "
            f"Please check {TOKEN_VAR}."
        )
    return token


def resolve_token(
    cli_token: str | None,
    environ: Mapping[str, str],
    dotenv_values: Mapping[str, str | None],
) -> str:
    """
    Pick the API token from the given sources.
    First non-empty value wins: cli argument, environment, then .env file.
    """
    candidates = (
        cli_token,
        environ.get(TOKEN_VAR),
        dotenv_values.get(TOKEN_VAR),
    )
    for candidate in candidates:
        if candidate and candidate.strip():
            return check_token(candidate.strip())

    raise MissingCredential(
        f"No API token found. Set {TOKEN_VAR} in the environment or in ./.env, "
        f"or pass --api-token."
    )


def read_dotenv(path: Path | str) -> dict[str, str | None]:
    """Read a .env file, or nothing if it does not exist."""
    path = Path(path)
    if not path.is_file():
        return {}
    return dict(dotenv.dotenv_values(path))


def redact(text: str, token: str | None) -> str:
    """Remove any echo of the token from text."""
    if not token:
        return text
    return text.replace(token, MASK)
