import pytest

from cdn77_client.errors import InvalidInput, MissingCredential
from cdn77_client.utils.credentials import MASK, read_dotenv, redact, resolve_token


def test_cli_wins_over_env_and_dotenv():
    token = resolve_token(
        "cli-token",
        {"CDN77_API_TOKEN": "env-token"},
        {"CDN77_API_TOKEN": "file-token"},
    )
    assert token == "cli-token"


def test_env_wins_over_dotenv():
    token = resolve_token(None, {"CDN77_API_TOKEN": "env-token"}, {"CDN77_API_TOKEN": "file-token"})
    assert token == "env-token"


def test_dotenv_is_last_resort():
    assert resolve_token(None, {}, {"CDN77_API_TOKEN": "file-token"}) == "file-token"


@pytest.mark.parametrize(
    "cli,environ,dotenv",
    [
        (None, {}, {}),
        ("", {"CDN77_API_TOKEN": ""}, {"CDN77_API_TOKEN": None}),
        ("  ", {"CDN77_API_TOKEN": " \t"}, {}),
        (None, {"OTHER": "x"}, {"OTHER": "y"}),
    ],
)
def test_missing(cli, environ, dotenv):
    with pytest.raises(MissingCredential):
        resolve_token(cli, environ, dotenv)


def test_empty_sources_are_skipped():
    assert resolve_token("", {"CDN77_API_TOKEN": "  "}, {"CDN77_API_TOKEN": "file-token"}) == "file-token"


def test_token_is_stripped():
    assert resolve_token(" abc \n", {}, {}) == "abc"


def test_read_dotenv(tmp_path):
    path = tmp_path / ".env"
    path.write_text("# comment\nCDN77_API_TOKEN=from-file\nCDN77_RESOURCE_ID=12\n")

    values = read_dotenv(path)
    assert values["CDN77_API_TOKEN"] == "from-file"
    assert resolve_token(None, {}, values) == "from-file"


def test_read_dotenv_missing_file(tmp_path):
    assert read_dotenv(tmp_path / ".env") == {}


def test_redact():
    assert redact("bad token s3cret given", "s3cret") == f"bad token {MASK} given"
    assert redact("nothing here", None) == "nothing here"


@pytest.mark.parametrize(
    "token",
    [
        "s3cret-töken",
        "two words",
        "bell\x07char",
        "tab\tinside",
    ],
)
def test_unusable_token(token):
    with pytest.raises(InvalidInput) as info:
        resolve_token(None, {"CDN77_API_TOKEN": token}, {})
    assert token not in str(info.value)


def test_unusable_cli_token_does_not_fall_back():
    with pytest.raises(InvalidInput):
        resolve_token("bad töken", {"CDN77_API_TOKEN": "env-token"}, {})
