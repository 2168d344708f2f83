from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, get_args

from playpub.core.result import Err, Ok, Result
from playpub.services.publish.errors import ConfigurationError

ReleaseStatus = Literal["completed", "draft", "halted", "inProgress"]

RELEASE_STATUSES: tuple[str, ...] = get_args(ReleaseStatus)

# Statuses that describe a staged rollout and therefore need a user fraction.
ROLLOUT_STATUSES = frozenset({"halted", "inProgress"})
# Statuses that must not carry a user fraction.
FULL_STATUSES = frozenset({"completed", "draft"})

INTERNAL_SHARING_TRACK = "internalsharing"

MIN_PRIORITY = 0
MAX_PRIORITY = 5


@dataclass(frozen=True, slots=True)
class PublishRequest:
    """Everything a single publish run needs, already parsed.

    The authenticated store client is passed next to the request rather than
    inside it.
    """

    package_name: str
    release_files: tuple[Path, ...]
    track: str = "production"
    release_name: str | None = None
    in_app_update_priority: int | None = None
    user_fraction: float | None = None
    status: ReleaseStatus | None = None
    whats_new_directory: Path | None = None
    mapping_file: Path | None = None
    debug_symbols: Path | None = None
    changes_not_sent_for_review: bool = False
    existing_edit_id: str | None = None

    @property
    def is_internal_sharing(self) -> bool:
        return self.track == INTERNAL_SHARING_TRACK


@dataclass(frozen=True, slots=True)
class LocalizedNote:
    language: str
    text: str


@dataclass(frozen=True, slots=True)
class PublishOutcome:
    """Result of a successful run.

    ``version_codes`` is filled on the track path, ``download_urls`` on the
    internal sharing path.
    """

    track: str
    edit_id: str | None
    version_codes: tuple[int, ...] = ()
    download_urls: tuple[str, ...] = ()


def validate_request(request: PublishRequest) -> Result[None, ConfigurationError]:
    """Reject invalid requests before any remote call is made."""
    if not request.package_name.strip():
        return Err(ConfigurationError("packageName must not be empty"))

    if not request.release_files:
        return Err(ConfigurationError("You must provide at least one release file"))

    if not request.track.strip():
        return Err(ConfigurationError("track must not be empty"))

    priority = request.in_app_update_priority
    if priority is not None and not MIN_PRIORITY <= priority <= MAX_PRIORITY:
        return Err(
            ConfigurationError(
                "inAppUpdatePriority must be between 0 and 5, inclusive-inclusive",
                hint=f"got {priority}",
            )
        )

    fraction = request.user_fraction
    if fraction is not None and not 0.0 <= fraction <= 1.0:
        return Err(
            ConfigurationError(
                "A provided userFraction must be between 0.0 and 1.0, inclusive-inclusive",
                hint=f"got {fraction}",
            )
        )

    status = request.status
    if status is None:
        return Ok(None)

    if status not in RELEASE_STATUSES:
        return Err(
            ConfigurationError(
                "Invalid status provided! Must be one of "
                "'completed', 'inProgress', 'halted', 'draft'. "
                f"Got {status}"
            )
        )
    if status in FULL_STATUSES and fraction is not None:
        return Err(ConfigurationError(f"Status '{status}' does not support 'userFraction'"))
    if status in ROLLOUT_STATUSES and fraction is None:
        return Err(ConfigurationError(f"Status '{status}' requires a 'userFraction' to be set"))

    return Ok(None)
