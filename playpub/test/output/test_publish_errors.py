from __future__ import annotations

from pathlib import Path

import pytest

from playpub.core.errors import ErrorCode
from playpub.output.console import MockConsole
from playpub.output.errors import (
    format_publish_error,
    print_publish_error,
    publish_error_exit_code,
)
from playpub.services.publish.errors import (
    ConfigurationError,
    LocalIOError,
    PublishError,
    RemoteRejection,
    TrackNotFound,
)


def test_track_not_found_lists_available_tracks() -> None:
    error = TrackNotFound(track="prod", available=("production", "beta", "internal"))
    assert format_publish_error(error) == (
        'Track "prod" could not be found. Available tracks are: production,beta,internal'
    )


def test_remote_rejection_surfaces_status_and_text() -> None:
    error = RemoteRejection(
        operation="commit edit", status=403, message="The caller does not have permission"
    )
    assert format_publish_error(error) == (
        "commit edit failed: Error 403: The caller does not have permission"
    )


def test_remote_rejection_without_status() -> None:
    error = RemoteRejection(
        operation="upload bundle", status=None, message="Failed to upload bundle."
    )
    assert format_publish_error(error) == "upload bundle failed: Failed to upload bundle."


def test_print_includes_hint_and_path() -> None:
    console = MockConsole()
    print_publish_error(ConfigurationError("bad status", hint="use draft"), console)
    print_publish_error(LocalIOError(path=Path("out/mapping.txt"), message="missing"), console)

    assert console.messages == [
        "error: bad status",
        "hint: use draft",
        "error: missing",
        f"path: {Path('out/mapping.txt')}",
    ]


@pytest.mark.parametrize(
    ("error", "code"),
    [
        (ConfigurationError("x"), ErrorCode.USER_ERROR),
        (TrackNotFound(track="x", available=()), ErrorCode.USER_ERROR),
        (RemoteRejection(operation="x", status=500, message="x"), ErrorCode.NETWORK_ERROR),
        (LocalIOError(path=Path("x"), message="x"), ErrorCode.IO_ERROR),
    ],
)
def test_exit_codes(error: PublishError, code: ErrorCode) -> None:
    assert publish_error_exit_code(error) == int(code)
