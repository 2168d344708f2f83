"""Tests for store/http.py - urllib transport."""

from __future__ import annotations

import io
import json
import urllib.error
import urllib.request
from email.message import Message
from pathlib import Path
from typing import Any

import pytest

from playpub.core.result import Err, Ok
from playpub.store.http import API_ROOT, UPLOAD_ROOT, HttpStoreApi


class FakeResponse:
    def __init__(self, body: bytes) -> None:
        self._body = body

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> FakeResponse:
        return self

    def __exit__(self, *exc: object) -> None:
        return None


class Recorder:
    """Stands in for urllib.request.urlopen."""

    def __init__(self, body: object = None, error: Exception | None = None) -> None:
        self.body = body
        self.error = error
        self.requests: list[urllib.request.Request] = []
        self.payloads: list[bytes | None] = []

    def __call__(self, req: urllib.request.Request, **kwargs: Any) -> FakeResponse:
        self.requests.append(req)
        data = req.data
        if data is None or isinstance(data, bytes):
            self.payloads.append(data)
        else:
            self.payloads.append(data.read())  # type: ignore[union-attr]
        if self.error is not None:
            raise self.error
        raw = b"" if self.body is None else json.dumps(self.body).encode()
        return FakeResponse(raw)


@pytest.fixture
def recorder(monkeypatch: pytest.MonkeyPatch) -> Recorder:
    rec = Recorder()
    monkeypatch.setattr(urllib.request, "urlopen", rec)
    return rec


def test_create_edit_posts_with_bearer_token(recorder: Recorder) -> None:
    recorder.body = {"id": "edit-1", "expiryTimeSeconds": "1700000000"}
    api = HttpStoreApi("token-123")

    result = api.create_edit("com.example.app")

    assert result == Ok({"id": "edit-1", "expiryTimeSeconds": "1700000000"})
    req = recorder.requests[0]
    assert req.get_method() == "POST"
    assert req.full_url == f"{API_ROOT}/com.example.app/edits"
    assert req.get_header("Authorization") == "Bearer token-123"
    assert recorder.payloads[0] == b"{}"


def test_update_track_sends_json_body(recorder: Recorder) -> None:
    recorder.body = {"track": "beta"}
    api = HttpStoreApi("t")
    body: dict[str, object] = {"track": "beta", "releases": [{"status": "completed"}]}

    api.update_track("com.example.app", "edit-1", "beta", body)

    req = recorder.requests[0]
    assert req.get_method() == "PUT"
    assert req.full_url == f"{API_ROOT}/com.example.app/edits/edit-1/tracks/beta"
    assert req.get_header("Content-type") == "application/json; charset=utf-8"
    assert json.loads(recorder.payloads[0] or b"") == body


def test_commit_sets_changes_not_sent_for_review(recorder: Recorder) -> None:
    recorder.body = {"id": "edit-1"}
    api = HttpStoreApi("t")

    api.commit_edit("com.example.app", "edit-1", changes_not_sent_for_review=True)
    api.commit_edit("com.example.app", "edit-1", changes_not_sent_for_review=False)

    assert recorder.requests[0].full_url == (
        f"{API_ROOT}/com.example.app/edits/edit-1:commit?changesNotSentForReview=true"
    )
    assert recorder.requests[1].full_url == f"{API_ROOT}/com.example.app/edits/edit-1:commit"


def test_upload_bundle_streams_file(recorder: Recorder, tmp_path: Path) -> None:
    recorder.body = {"versionCode": 42}
    bundle = tmp_path / "app.aab"
    bundle.write_bytes(b"bundle-bytes")
    api = HttpStoreApi("t")

    result = api.upload_bundle("com.example.app", "edit-1", bundle)

    assert result == Ok({"versionCode": 42})
    req = recorder.requests[0]
    assert req.full_url == f"{UPLOAD_ROOT}/com.example.app/edits/edit-1/bundles?uploadType=media"
    assert req.get_header("Content-length") == str(len(b"bundle-bytes"))
    assert req.get_header("Content-type") == "application/octet-stream"
    assert recorder.payloads[0] == b"bundle-bytes"


def test_upload_apk_uses_package_archive_mime(recorder: Recorder, tmp_path: Path) -> None:
    recorder.body = {"versionCode": 7}
    apk = tmp_path / "app.apk"
    apk.write_bytes(b"apk")

    HttpStoreApi("t").upload_apk("com.example.app", "edit-1", apk)

    assert recorder.requests[0].get_header("Content-type") == (
        "application/vnd.android.package-archive"
    )


def test_deobfuscation_upload_from_memory(recorder: Recorder) -> None:
    recorder.body = {"deobfuscationFile": {"symbolType": "nativeCode"}}

    HttpStoreApi("t").upload_deobfuscation_file(
        "com.example.app", "edit-1", 42, "nativeCode", b"zipdata"
    )

    req = recorder.requests[0]
    assert req.full_url == (
        f"{UPLOAD_ROOT}/com.example.app/edits/edit-1/apks/42"
        "/deobfuscationFiles/nativeCode?uploadType=media"
    )
    assert recorder.payloads[0] == b"zipdata"


def test_internal_sharing_upload_url(recorder: Recorder, tmp_path: Path) -> None:
    recorder.body = {"downloadUrl": "https://play.google.com/apps/test/abc"}
    apk = tmp_path / "app.apk"
    apk.write_bytes(b"apk")

    result = HttpStoreApi("t").share_upload_apk("com.example.app", apk)

    assert isinstance(result, Ok)
    assert recorder.requests[0].full_url == (
        f"{UPLOAD_ROOT}/internalappsharing/com.example.app/artifacts/apk?uploadType=media"
    )


def test_http_error_unwraps_google_error_message(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    message = "APK specifies a version code that has already been used."
    body = json.dumps({"error": {"code": 403, "message": message}})
    error = urllib.error.HTTPError(
        url="https://example.invalid",
        code=403,
        msg="Forbidden",
        hdrs=Message(),
        fp=io.BytesIO(body.encode()),
    )
    monkeypatch.setattr(urllib.request, "urlopen", Recorder(error=error))

    result = HttpStoreApi("t").create_edit("com.example.app")

    assert isinstance(result, Err)
    assert result.error.status == 403
    assert result.error.message == message


def test_network_error_has_status_zero(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        urllib.request, "urlopen", Recorder(error=urllib.error.URLError("connection refused"))
    )

    result = HttpStoreApi("t").list_tracks("com.example.app", "edit-1")

    assert isinstance(result, Err)
    assert result.error.status == 0
    assert "connection refused" in result.error.message


def test_missing_upload_file_is_reported(recorder: Recorder, tmp_path: Path) -> None:
    result = HttpStoreApi("t").upload_bundle("com.example.app", "edit-1", tmp_path / "nope.aab")

    assert isinstance(result, Err)
    assert result.error.status == 0
    assert recorder.requests == []
