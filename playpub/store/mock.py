"""In-memory ``StoreApi`` for tests.

Usage:
    api = MockStoreApi()
    api.queue("create_edit", {"id": "edit-1"})
    api.queue("upload_bundle", {"versionCode": 42})
    api.queue("upload_bundle", HttpError(url="mock", status=403, message="denied"))

Responses are consumed in FIFO order per call name. A call with nothing
queued fails with HTTP 404 so an unexpected call is visible in the result.
Every call is recorded in ``calls`` as ``(name, *args)``.
"""

from __future__ import annotations

from collections import deque
from pathlib import Path

from playpub.core.result import Err, Ok, Result
from playpub.core.structured import StrDict
from playpub.store.api import DeobfuscationFileType, HttpError, Media

__all__ = ["MockStoreApi"]

Response = StrDict | HttpError


class MockStoreApi:
    def __init__(self) -> None:
        self._responses: dict[str, deque[Response]] = {}
        self.calls: list[tuple[object, ...]] = []
        self.uploaded_media: list[tuple[str, bytes]] = []

    def queue(self, name: str, *responses: Response) -> None:
        """Append responses for the named call."""
        self._responses.setdefault(name, deque()).extend(responses)

    def call_names(self) -> list[str]:
        return [str(c[0]) for c in self.calls]

    def _reply(self, name: str, *args: object) -> Result[StrDict, HttpError]:
        self.calls.append((name, *args))
        pending = self._responses.get(name)
        if not pending:
            return Err(HttpError(url=f"mock://{name}", status=404, message="Not found (mock)"))
        response = pending.popleft()
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)

    def _record_media(self, name: str, media: Media) -> None:
        data = media if isinstance(media, bytes) else media.read_bytes()
        self.uploaded_media.append((name, data))

    def create_edit(self, package_name: str) -> Result[StrDict, HttpError]:
        return self._reply("create_edit", package_name)

    def list_tracks(self, package_name: str, edit_id: str) -> Result[StrDict, HttpError]:
        return self._reply("list_tracks", package_name, edit_id)

    def update_track(
        self, package_name: str, edit_id: str, track: str, body: StrDict
    ) -> Result[StrDict, HttpError]:
        return self._reply("update_track", package_name, edit_id, track, body)

    def commit_edit(
        self, package_name: str, edit_id: str, *, changes_not_sent_for_review: bool
    ) -> Result[StrDict, HttpError]:
        return self._reply("commit_edit", package_name, edit_id, changes_not_sent_for_review)

    def upload_apk(self, package_name: str, edit_id: str, path: Path) -> Result[StrDict, HttpError]:
        return self._reply("upload_apk", package_name, edit_id, path)

    def upload_bundle(
        self, package_name: str, edit_id: str, path: Path
    ) -> Result[StrDict, HttpError]:
        return self._reply("upload_bundle", package_name, edit_id, path)

    def upload_deobfuscation_file(
        self,
        package_name: str,
        edit_id: str,
        version_code: int,
        file_type: DeobfuscationFileType,
        media: Media,
    ) -> Result[StrDict, HttpError]:
        self._record_media(file_type, media)
        return self._reply(
            "upload_deobfuscation_file", package_name, edit_id, version_code, file_type
        )

    def share_upload_apk(self, package_name: str, path: Path) -> Result[StrDict, HttpError]:
        return self._reply("share_upload_apk", package_name, path)

    def share_upload_bundle(self, package_name: str, path: Path) -> Result[StrDict, HttpError]:
        return self._reply("share_upload_bundle", package_name, path)
