"""Errors raised before a request reaches the API."""


class Cdn77ClientError(Exception):
    """Base class for local, non-retryable failures."""

    category: str = "error"


class MissingCredential(Cdn77ClientError):
    category = "missing credential"


class InvalidInput(Cdn77ClientError):
    category = "invalid input"
