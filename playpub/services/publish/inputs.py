"""Turn raw command-line / config values into a validated ``PublishRequest``."""

from __future__ import annotations

import glob
from collections.abc import Iterable
from pathlib import Path
from typing import cast

from playpub.core.result import Err, Ok, Result
from playpub.services.publish.errors import ConfigurationError, LocalIOError, PublishError
from playpub.services.publish.model import (
    RELEASE_STATUSES,
    PublishRequest,
    ReleaseStatus,
    validate_request,
)


def split_patterns(values: Iterable[str]) -> list[str]:
    """Flatten values that may hold several newline-separated patterns."""
    out: list[str] = []
    for value in values:
        out.extend(line.strip() for line in value.splitlines() if line.strip())
    return out


def resolve_release_files(patterns: Iterable[str]) -> Result[tuple[Path, ...], PublishError]:
    """Expand glob patterns, keeping pattern order and dropping duplicates."""
    pattern_list = split_patterns(patterns)
    if not pattern_list:
        return Err(ConfigurationError("You must provide at least one release file"))

    files: list[Path] = []
    seen: set[Path] = set()
    for pattern in pattern_list:
        for match in sorted(glob.glob(pattern, recursive=True)):
            path = Path(match)
            if path.is_dir() or path in seen:
                continue
            seen.add(path)
            files.append(path)

    if not files:
        joined = ",".join(pattern_list)
        return Err(
            LocalIOError(
                path=Path(pattern_list[0]),
                message=f"Unable to find any release file @ {joined}",
            )
        )
    return Ok(tuple(files))


def _parse_status(value: str | None) -> Result[ReleaseStatus | None, PublishError]:
    if value is None or not value.strip():
        return Ok(None)
    status = value.strip()
    if status in RELEASE_STATUSES:
        return Ok(cast(ReleaseStatus, status))
    return Err(
        ConfigurationError(
            "Invalid status provided! Must be one of "
            f"'completed', 'inProgress', 'halted', 'draft'. Got {status}"
        )
    )


def _optional_path(value: str | None) -> Path | None:
    if value is None or not value.strip():
        return None
    return Path(value.strip())


def build_request(
    *,
    package_name: str | None,
    release_files: Iterable[str],
    track: str,
    release_name: str | None = None,
    in_app_update_priority: int | None = None,
    user_fraction: float | None = None,
    status: str | None = None,
    whats_new_directory: str | None = None,
    mapping_file: str | None = None,
    debug_symbols: str | None = None,
    changes_not_sent_for_review: bool = False,
    existing_edit_id: str | None = None,
) -> Result[PublishRequest, PublishError]:
    if package_name is None or not package_name.strip():
        return Err(ConfigurationError("packageName is required", hint="pass --package-name"))

    parsed_status = _parse_status(status)
    if isinstance(parsed_status, Err):
        return parsed_status

    files = resolve_release_files(release_files)
    if isinstance(files, Err):
        return files

    whats_new = _optional_path(whats_new_directory)
    if whats_new is not None and not whats_new.exists():
        return Err(
            LocalIOError(
                path=whats_new,
                message=f"Unable to find 'whatsnew' directory @ {whats_new}",
            )
        )

    mapping = _optional_path(mapping_file)
    if mapping is not None and not mapping.exists():
        return Err(LocalIOError(path=mapping, message=f"Unable to find 'mappingFile' @ {mapping}"))

    name = release_name.strip() if release_name and release_name.strip() else None
    request = PublishRequest(
        package_name=package_name.strip(),
        release_files=files.value,
        track=track.strip(),
        release_name=name,
        in_app_update_priority=in_app_update_priority,
        user_fraction=user_fraction,
        status=parsed_status.value,
        whats_new_directory=whats_new,
        mapping_file=mapping,
        debug_symbols=_optional_path(debug_symbols),
        changes_not_sent_for_review=changes_not_sent_for_review,
        existing_edit_id=(existing_edit_id or "").strip() or None,
    )

    valid = validate_request(request)
    if isinstance(valid, Err):
        return valid
    return Ok(request)
