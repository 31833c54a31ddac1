from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TypeAlias

from cdn77_client.models.job import JobInfo


class ExitCode(enum.IntEnum):
    """Process exit codes, one per outcome category."""

    SUCCESS = 0
    CLIENT_ERROR = 1
    INVALID_INPUT = 2
    MISSING_CREDENTIAL = 3
    SERVER_ERROR = 4
    TRANSPORT_FAILURE = 5
    UNEXPECTED_ERROR = 6

    @property
    def retryable(self) -> bool:
        """Whether a pipeline may retry the same invocation."""
        return self in (ExitCode.SERVER_ERROR, ExitCode.TRANSPORT_FAILURE)


class TransportCause(enum.StrEnum):
    TIMEOUT = "timeout"
    CONNECT = "connect"
    NETWORK = "network"
    PROTOCOL = "protocol"


@dataclass(frozen=True)
class Success:
    status: int
    accepted: int
    job: JobInfo | None = None


@dataclass(frozen=True)
class ClientError:
    status: int
    message: str


@dataclass(frozen=True)
class ServerError:
    status: int
    message: str


@dataclass(frozen=True)
class TransportFailure:
    cause: TransportCause
    detail: str


ApiOutcome: TypeAlias = Success | ClientError | ServerError | TransportFailure
