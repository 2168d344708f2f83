"""Remote store API surface.

``StoreApi`` lists the Google Play Developer API calls the publish engine
needs. Every call returns ``Ok(body)`` for a 2xx response and
``Err(HttpError)`` otherwise. A 2xx body can still be semantically
incomplete (no edit id, no version code); checking that is the caller's job.

Implementations:
- HttpStoreApi (store/http.py): urllib transport with a bearer token
- MockStoreApi (store/mock.py): queued responses for tests
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Protocol, runtime_checkable

from playpub.core.result import Result
from playpub.core.structured import StrDict

__all__ = [
    "DeobfuscationFileType",
    "HttpError",
    "Media",
    "StoreApi",
]

DeobfuscationFileType = Literal["proguard", "nativeCode"]

# A file streamed from disk, or an in-memory payload (packaged symbols).
Media = Path | bytes


@dataclass(frozen=True, slots=True)
class HttpError:
    """HTTP error details.

    Attributes:
        url: The URL that failed
        status: HTTP status code (0 for network errors)
        message: Remote error text, verbatim when the store supplied one
    """

    url: str
    status: int
    message: str

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


@runtime_checkable
class StoreApi(Protocol):
    """The androidpublisher v3 calls used by a publish run."""

    def create_edit(self, package_name: str) -> Result[StrDict, HttpError]: ...

    def list_tracks(self, package_name: str, edit_id: str) -> Result[StrDict, HttpError]: ...

    def update_track(
        self, package_name: str, edit_id: str, track: str, body: StrDict
    ) -> Result[StrDict, HttpError]: ...

    def commit_edit(
        self, package_name: str, edit_id: str, *, changes_not_sent_for_review: bool
    ) -> Result[StrDict, HttpError]: ...

    def upload_apk(
        self, package_name: str, edit_id: str, path: Path
    ) -> Result[StrDict, HttpError]: ...

    def upload_bundle(
        self, package_name: str, edit_id: str, path: Path
    ) -> Result[StrDict, HttpError]: ...

    def upload_deobfuscation_file(
        self,
        package_name: str,
        edit_id: str,
        version_code: int,
        file_type: DeobfuscationFileType,
        media: Media,
    ) -> Result[StrDict, HttpError]: ...

    def share_upload_apk(self, package_name: str, path: Path) -> Result[StrDict, HttpError]: ...

    def share_upload_bundle(
        self, package_name: str, path: Path
    ) -> Result[StrDict, HttpError]: ...
