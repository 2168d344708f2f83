"""Internal app sharing uploads.

The ``internalsharing`` pseudo-track bypasses edits entirely: each artifact is
uploaded on its own and the store returns a direct download link for testers.
"""

from __future__ import annotations

from pathlib import Path

from playpub.core.result import Err, Ok, Result
from playpub.core.structured import get_str
from playpub.output.console import ConsoleProtocol
from playpub.services.publish.artifacts import ArtifactKind, classify_artifact, invalid_artifact
from playpub.services.publish.errors import LocalIOError, PublishError, RemoteRejection
from playpub.services.publish.model import PublishRequest
from playpub.store.api import StoreApi


def share_artifact(
    api: StoreApi, package_name: str, path: Path, *, console: ConsoleProtocol
) -> Result[str, PublishError]:
    """Upload one artifact for internal sharing; returns its download URL."""
    match classify_artifact(path):
        case ArtifactKind.PACKAGE:
            operation = "internal sharing upload APK"
            upload = api.share_upload_apk
        case ArtifactKind.BUNDLE:
            operation = "internal sharing upload bundle"
            upload = api.share_upload_bundle
        case ArtifactKind.INVALID:
            return Err(invalid_artifact(path))

    if not path.is_file():
        return Err(LocalIOError(path=path, message=f"Unable to find release file @ {path}"))

    console.debug(f"[packageName={package_name}]: Uploading Internal Sharing artifact @ {path}")
    result = upload(package_name, path)
    if isinstance(result, Err):
        return Err(RemoteRejection.from_http(operation, result.error))

    url = get_str(result.value, "downloadUrl")
    if url is None:
        return Err(
            RemoteRejection(
                operation=operation,
                status=None,
                message="Uploaded file has no download URL.",
            )
        )
    console.debug(f"{path} uploaded to Internal Sharing, download it with {url}")
    return Ok(url)


def upload_internal_sharing(
    api: StoreApi, request: PublishRequest, *, console: ConsoleProtocol
) -> Result[tuple[str, ...], PublishError]:
    """Share every release file in order; returns one download URL per file."""
    console.debug("Track is Internal app sharing, switch to special upload api")
    urls: list[str] = []
    for release_file in request.release_files:
        console.info(f"Uploading {release_file}")
        shared = share_artifact(api, request.package_name, release_file, console=console)
        if isinstance(shared, Err):
            return shared
        urls.append(shared.value)
    return Ok(tuple(urls))
