from __future__ import annotations

from playpub.core.result import Err, Ok, Result
from playpub.output.console import ConsoleProtocol
from playpub.services.publish.edit import EditSession
from playpub.services.publish.errors import PublishError
from playpub.services.publish.model import PublishOutcome, PublishRequest, validate_request
from playpub.services.publish.notes import read_localized_notes
from playpub.services.publish.sharing import upload_internal_sharing
from playpub.services.publish.track import assign_track, build_release_descriptor
from playpub.services.publish.upload import upload_release_files
from playpub.store.api import StoreApi


def publish_to_track(
    request: PublishRequest, *, api: StoreApi, console: ConsoleProtocol
) -> Result[PublishOutcome, PublishError]:
    session = EditSession(api=api, package_name=request.package_name, console=console)

    obtained = session.obtain(request.existing_edit_id)
    if isinstance(obtained, Err):
        return obtained

    # Before any upload, so a typo in the track name cannot leave half an edit.
    ok = session.validate_track(request.track)
    if isinstance(ok, Err):
        return ok

    notes = read_localized_notes(request.whats_new_directory, console=console)
    if isinstance(notes, Err):
        return notes

    uploaded = upload_release_files(session, request, console=console)
    if isinstance(uploaded, Err):
        return uploaded
    version_codes = uploaded.value

    console.info(f"Adding {len(version_codes)} artifacts to release on '{request.track}' track")
    descriptor = build_release_descriptor(request, version_codes, notes.value)
    track = assign_track(session, request.track, descriptor, console=console)
    if isinstance(track, Err):
        return track
    console.debug(f"Track: {track.value}")

    committed = session.commit(changes_not_sent_for_review=request.changes_not_sent_for_review)
    if isinstance(committed, Err):
        return committed

    return Ok(
        PublishOutcome(
            track=request.track,
            edit_id=committed.value,
            version_codes=version_codes,
        )
    )


def publish(
    request: PublishRequest, *, api: StoreApi, console: ConsoleProtocol
) -> Result[PublishOutcome, PublishError]:
    """Run one publish workflow.

    ``internalsharing`` uploads each file for direct download; any other track
    goes through create edit, validate track, upload, assign track, commit.
    The first failure ends the run.
    """
    valid = validate_request(request)
    if isinstance(valid, Err):
        return valid

    if request.is_internal_sharing:
        shared = upload_internal_sharing(api, request, console=console)
        if isinstance(shared, Err):
            return shared
        console.debug("Finished uploading to the Play Store.")
        return Ok(PublishOutcome(track=request.track, edit_id=None, download_urls=shared.value))

    result = publish_to_track(request, api=api, console=console)
    if isinstance(result, Ok):
        console.debug("Finished uploading to the Play Store.")
    return result
