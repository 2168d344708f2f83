from __future__ import annotations

from dataclasses import dataclass

from playpub.core.result import Err, Ok, Result
from playpub.core.structured import StrDict
from playpub.output.console import ConsoleProtocol
from playpub.services.publish.edit import EditSession
from playpub.services.publish.errors import PublishError, RemoteRejection
from playpub.services.publish.model import LocalizedNote, PublishRequest, ReleaseStatus


def default_status(user_fraction: float | None) -> ReleaseStatus:
    """Status used when none was configured explicitly."""
    if user_fraction is not None:
        return "inProgress"
    return "completed"


@dataclass(frozen=True, slots=True)
class ReleaseDescriptor:
    """One release on a track, as sent to ``tracks.update``."""

    status: ReleaseStatus
    version_codes: tuple[int, ...]
    name: str | None = None
    user_fraction: float | None = None
    in_app_update_priority: int | None = None
    release_notes: tuple[LocalizedNote, ...] = ()

    def to_release_body(self) -> StrDict:
        body: StrDict = {"status": self.status}
        if self.name is not None:
            body["name"] = self.name
        if self.user_fraction is not None:
            body["userFraction"] = self.user_fraction
        if self.in_app_update_priority is not None:
            body["inAppUpdatePriority"] = self.in_app_update_priority
        if self.release_notes:
            body["releaseNotes"] = [
                {"language": note.language, "text": note.text} for note in self.release_notes
            ]
        # A zero version code marks a missing upload and must never reach the track.
        body["versionCodes"] = [str(code) for code in self.version_codes if code != 0]
        return body

    def to_track_body(self, track: str) -> StrDict:
        return {"track": track, "releases": [self.to_release_body()]}


def build_release_descriptor(
    request: PublishRequest,
    version_codes: tuple[int, ...],
    notes: tuple[LocalizedNote, ...],
) -> ReleaseDescriptor:
    return ReleaseDescriptor(
        status=request.status or default_status(request.user_fraction),
        version_codes=version_codes,
        name=request.release_name,
        user_fraction=request.user_fraction,
        in_app_update_priority=request.in_app_update_priority,
        release_notes=notes,
    )


def assign_track(
    session: EditSession,
    track: str,
    descriptor: ReleaseDescriptor,
    *,
    console: ConsoleProtocol,
) -> Result[StrDict, PublishError]:
    """Push the release onto ``track``; returns the track as echoed by the store."""
    console.debug(
        f"Creating Track Release for Edit({session.edit_id}) for Track({track}) "
        f"with a UserFraction({descriptor.user_fraction}), Status({descriptor.status}), "
        f"and VersionCodes({list(descriptor.version_codes)})"
    )
    result = session.api.update_track(
        session.package_name,
        session.edit_id,
        track,
        descriptor.to_track_body(track),
    )
    if isinstance(result, Err):
        return Err(RemoteRejection.from_http("update track", result.error))
    return Ok(result.value)
