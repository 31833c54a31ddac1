"""Uri helpers"""
from urllib import parse

__all__ = ["join", "is_absolute_http"]


def join(*parts: str, quote: bool = False) -> str:
    """Join uri parts onto a base, keeping the base path."""
    if not parts:
        return ""

    base = parts[0].rstrip("/") + "/"
    return parse.urljoin(
        base,
        "/".join(
            (parse.quote_plus(part.strip("/"), safe="/") if quote else part.strip("/"))
            for part in parts[1:]
        ),
    )


def is_absolute_http(url: str) -> bool:
    """Check that a url is an absolute http(s) url with a host."""
    if not url or any(c.isspace() for c in url):
        return False
    try:
        parsed = parse.urlsplit(url)
        # raises on an invalid port
        parsed.port
    except ValueError:
        return False

    return parsed.scheme in ("http", "https") and bool(parsed.hostname)
