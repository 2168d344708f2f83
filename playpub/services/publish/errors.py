from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from playpub.store.api import HttpError


@dataclass(frozen=True, slots=True)
class ConfigurationError:
    """Invalid request; detected without contacting the store."""

    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class TrackNotFound:
    track: str
    available: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class RemoteRejection:
    """The store answered with an error, or with a 2xx body missing required data."""

    operation: str
    # None when the call succeeded but the body lacked required data
    status: int | None
    message: str

    @classmethod
    def from_http(cls, operation: str, error: HttpError) -> RemoteRejection:
        return cls(operation=operation, status=error.status, message=error.message)


@dataclass(frozen=True, slots=True)
class LocalIOError:
    path: Path
    message: str


PublishError = ConfigurationError | TrackNotFound | RemoteRejection | LocalIOError
