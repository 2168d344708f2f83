from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from playpub.core.result import Err, Ok
from playpub.services.publish.errors import ConfigurationError
from playpub.services.publish.model import PublishRequest, validate_request


def _request(**overrides: Any) -> PublishRequest:
    fields: dict[str, Any] = {
        "package_name": "com.example.app",
        "release_files": (Path("app-release.aab"),),
    }
    fields.update(overrides)
    return PublishRequest(**fields)


@pytest.mark.parametrize(
    ("status", "fraction", "ok"),
    [
        (None, None, True),
        (None, 0.5, True),
        ("completed", None, True),
        ("completed", 0.5, False),
        ("draft", None, True),
        ("draft", 0.1, False),
        ("inProgress", 0.1, True),
        ("inProgress", None, False),
        ("halted", 0.5, True),
        ("halted", None, False),
    ],
)
def test_status_and_fraction_combinations(
    status: str | None, fraction: float | None, ok: bool
) -> None:
    result = validate_request(_request(status=status, user_fraction=fraction))
    assert isinstance(result, Ok) is ok


def test_fraction_error_messages() -> None:
    result = validate_request(_request(status="completed", user_fraction=0.5))
    assert result == Err(ConfigurationError("Status 'completed' does not support 'userFraction'"))

    result = validate_request(_request(status="inProgress"))
    assert result == Err(
        ConfigurationError("Status 'inProgress' requires a 'userFraction' to be set")
    )


@pytest.mark.parametrize(("priority", "ok"), [(0, True), (5, True), (-1, False), (6, False)])
def test_priority_range(priority: int, ok: bool) -> None:
    result = validate_request(_request(in_app_update_priority=priority))
    assert isinstance(result, Ok) is ok


@pytest.mark.parametrize(
    ("fraction", "ok"), [(0.0, True), (1.0, True), (-0.1, False), (1.5, False)]
)
def test_fraction_range(fraction: float, ok: bool) -> None:
    result = validate_request(_request(user_fraction=fraction))
    assert isinstance(result, Ok) is ok


def test_unknown_status() -> None:
    result = validate_request(_request(status="live"))
    assert isinstance(result, Err)
    assert "Got live" in result.error.message


def test_requires_release_files() -> None:
    result = validate_request(_request(release_files=()))
    assert result == Err(ConfigurationError("You must provide at least one release file"))


def test_requires_package_name() -> None:
    assert isinstance(validate_request(_request(package_name=" ")), Err)


def test_internal_sharing_track() -> None:
    assert _request(track="internalsharing").is_internal_sharing
    assert not _request(track="internal").is_internal_sharing
