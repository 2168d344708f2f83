"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from playpub.core.errors import ErrorCode
from playpub.output.console import Style
from playpub.services.publish.errors import (
    ConfigurationError,
    LocalIOError,
    PublishError,
    RemoteRejection,
    TrackNotFound,
)

if TYPE_CHECKING:
    from playpub.output.console import ConsoleProtocol

__all__ = ["format_publish_error", "print_publish_error", "publish_error_exit_code"]


def format_publish_error(error: PublishError) -> str:
    """One-line, most specific description of a publish failure."""
    match error:
        case ConfigurationError(message=message):
            return message
        case TrackNotFound(track=track, available=available):
            return (
                f'Track "{track}" could not be found. '
                f"Available tracks are: {','.join(available)}"
            )
        case RemoteRejection(operation=operation, status=None, message=message):
            return f"{operation} failed: {message}"
        case RemoteRejection(operation=operation, status=0, message=message):
            return f"{operation} failed: {message}"
        case RemoteRejection(operation=operation, status=status, message=message):
            return f"{operation} failed: Error {status}: {message}"
        case LocalIOError(message=message):
            return message


def print_publish_error(error: PublishError, console: ConsoleProtocol) -> None:
    console.error(format_publish_error(error))
    match error:
        case ConfigurationError(hint=hint) if hint:
            console.print(f"hint: {hint}", Style.DIM)
        case LocalIOError(path=path):
            console.print(f"path: {path}", Style.DIM)
        case _:
            pass


def publish_error_exit_code(error: PublishError) -> int:
    match error:
        case ConfigurationError() | TrackNotFound():
            return int(ErrorCode.USER_ERROR)
        case RemoteRejection():
            return int(ErrorCode.NETWORK_ERROR)
        case LocalIOError():
            return int(ErrorCode.IO_ERROR)
