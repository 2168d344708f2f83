"""Google Play Developer API transport over urllib.

Authentication is out of scope here: the client is handed a ready OAuth 2.0
access token (for example from ``gcloud auth print-access-token`` or a
workload identity step in CI) and sends it as a bearer token.

Media uploads use the simple ``uploadType=media`` protocol. Files are
streamed from disk with an explicit Content-Length and closed as soon as the
call returns.
"""

from __future__ import annotations

import json
import ssl
import urllib.error
import urllib.request
from pathlib import Path
from typing import BinaryIO
from urllib.parse import quote, urlencode

from playpub import __version__
from playpub.core.result import Err, Ok, Result
from playpub.core.structured import StrDict, as_str_dict, get_str, get_table
from playpub.store.api import DeobfuscationFileType, HttpError, Media
from playpub.store.timeouts import API_TIMEOUT_SECONDS, UPLOAD_TIMEOUT_SECONDS

__all__ = ["HttpStoreApi", "API_ROOT", "UPLOAD_ROOT"]

API_ROOT = "https://androidpublisher.googleapis.com/androidpublisher/v3/applications"
UPLOAD_ROOT = "https://androidpublisher.googleapis.com/upload/androidpublisher/v3/applications"

APK_MIME_TYPE = "application/vnd.android.package-archive"
OCTET_STREAM = "application/octet-stream"


def _seg(value: str | int) -> str:
    return quote(str(value), safe="")


def _error_message(raw: bytes, fallback: str) -> str:
    """Extract ``error.message`` from a Google API error envelope."""
    try:
        data = as_str_dict(json.loads(raw.decode("utf-8")))
    except (json.JSONDecodeError, UnicodeDecodeError):
        return fallback
    if data is None:
        return fallback
    error = get_table(data, "error")
    if error is None:
        return fallback
    return get_str(error, "message") or fallback


class HttpStoreApi:
    """Real ``StoreApi`` implementation.

    Handles:
    - HTTPS with system certificates
    - JSON request/response bodies
    - Streaming media uploads from disk or memory
    """

    def __init__(
        self,
        access_token: str,
        *,
        api_timeout: float = API_TIMEOUT_SECONDS,
        upload_timeout: float = UPLOAD_TIMEOUT_SECONDS,
        user_agent: str = f"playpub/{__version__}",
    ) -> None:
        self._access_token = access_token
        self.api_timeout = api_timeout
        self.upload_timeout = upload_timeout
        self.user_agent = user_agent
        self._ssl_context = ssl.create_default_context()

    # -- transport -----------------------------------------------------------

    def _headers(self, content_type: str | None, content_length: int | None) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self._access_token}",
            "User-Agent": self.user_agent,
            "Accept": "application/json",
        }
        if content_type is not None:
            headers["Content-Type"] = content_type
        if content_length is not None:
            headers["Content-Length"] = str(content_length)
        return headers

    def _send(
        self,
        method: str,
        url: str,
        *,
        data: bytes | BinaryIO | None,
        content_type: str | None,
        content_length: int | None,
        timeout: float,
    ) -> Result[StrDict, HttpError]:
        req = urllib.request.Request(
            url,
            data=data,
            method=method,
            headers=self._headers(content_type, content_length),
        )
        try:
            with urllib.request.urlopen(req, timeout=timeout, context=self._ssl_context) as resp:
                raw: bytes = resp.read()
        except urllib.error.HTTPError as e:
            body = e.read() if e.fp is not None else b""
            return Err(HttpError(url=url, status=e.code, message=_error_message(body, e.reason)))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url=url, status=0, message="Request timed out"))
        except OSError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))

        if not raw.strip():
            return Ok({})
        try:
            data_obj: object = json.loads(raw.decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return Err(HttpError(url=url, status=0, message=f"JSON parse error: {e}"))
        parsed = as_str_dict(data_obj)
        if parsed is None:
            return Err(HttpError(url=url, status=0, message="Expected JSON object"))
        return Ok(parsed)

    def _json(
        self, method: str, url: str, body: StrDict | None = None
    ) -> Result[StrDict, HttpError]:
        payload = json.dumps(body).encode("utf-8") if body is not None else None
        return self._send(
            method,
            url,
            data=payload,
            content_type="application/json; charset=utf-8" if payload is not None else None,
            content_length=len(payload) if payload is not None else None,
            timeout=self.api_timeout,
        )

    def _upload(self, url: str, media: Media, content_type: str) -> Result[StrDict, HttpError]:
        upload_url = f"{url}?{urlencode({'uploadType': 'media'})}"
        if isinstance(media, bytes):
            return self._send(
                "POST",
                upload_url,
                data=media,
                content_type=content_type,
                content_length=len(media),
                timeout=self.upload_timeout,
            )

        try:
            size = media.stat().st_size
            f = media.open("rb")
        except OSError as e:
            return Err(HttpError(url=upload_url, status=0, message=f"{media}: {e.strerror}"))
        with f:
            return self._send(
                "POST",
                upload_url,
                data=f,
                content_type=content_type,
                content_length=size,
                timeout=self.upload_timeout,
            )

    # -- edits ---------------------------------------------------------------

    def create_edit(self, package_name: str) -> Result[StrDict, HttpError]:
        return self._json("POST", f"{API_ROOT}/{_seg(package_name)}/edits", {})

    def list_tracks(self, package_name: str, edit_id: str) -> Result[StrDict, HttpError]:
        url = f"{API_ROOT}/{_seg(package_name)}/edits/{_seg(edit_id)}/tracks"
        return self._json("GET", url)

    def update_track(
        self, package_name: str, edit_id: str, track: str, body: StrDict
    ) -> Result[StrDict, HttpError]:
        url = f"{API_ROOT}/{_seg(package_name)}/edits/{_seg(edit_id)}/tracks/{_seg(track)}"
        return self._json("PUT", url, body)

    def commit_edit(
        self, package_name: str, edit_id: str, *, changes_not_sent_for_review: bool
    ) -> Result[StrDict, HttpError]:
        url = f"{API_ROOT}/{_seg(package_name)}/edits/{_seg(edit_id)}:commit"
        if changes_not_sent_for_review:
            url += "?" + urlencode({"changesNotSentForReview": "true"})
        return self._json("POST", url)

    # -- uploads -------------------------------------------------------------

    def upload_apk(self, package_name: str, edit_id: str, path: Path) -> Result[StrDict, HttpError]:
        url = f"{UPLOAD_ROOT}/{_seg(package_name)}/edits/{_seg(edit_id)}/apks"
        return self._upload(url, path, APK_MIME_TYPE)

    def upload_bundle(
        self, package_name: str, edit_id: str, path: Path
    ) -> Result[StrDict, HttpError]:
        url = f"{UPLOAD_ROOT}/{_seg(package_name)}/edits/{_seg(edit_id)}/bundles"
        return self._upload(url, path, OCTET_STREAM)

    def upload_deobfuscation_file(
        self,
        package_name: str,
        edit_id: str,
        version_code: int,
        file_type: DeobfuscationFileType,
        media: Media,
    ) -> Result[StrDict, HttpError]:
        url = (
            f"{UPLOAD_ROOT}/{_seg(package_name)}/edits/{_seg(edit_id)}"
            f"/apks/{_seg(version_code)}/deobfuscationFiles/{_seg(file_type)}"
        )
        return self._upload(url, media, OCTET_STREAM)

    def share_upload_apk(self, package_name: str, path: Path) -> Result[StrDict, HttpError]:
        url = f"{UPLOAD_ROOT}/internalappsharing/{_seg(package_name)}/artifacts/apk"
        return self._upload(url, path, APK_MIME_TYPE)

    def share_upload_bundle(self, package_name: str, path: Path) -> Result[StrDict, HttpError]:
        url = f"{UPLOAD_ROOT}/internalappsharing/{_seg(package_name)}/artifacts/bundle"
        return self._upload(url, path, OCTET_STREAM)
