from __future__ import annotations

from pathlib import Path

from playpub.core.result import Err, Ok, Result
from playpub.core.structured import get_int
from playpub.output.console import ConsoleProtocol
from playpub.services.publish.artifacts import ArtifactKind, classify_artifact, invalid_artifact
from playpub.services.publish.edit import EditSession
from playpub.services.publish.errors import LocalIOError, PublishError, RemoteRejection
from playpub.services.publish.model import PublishRequest
from playpub.services.publish.symbols import SymbolsPayload, load_symbols


def _require_file(path: Path, label: str) -> Result[None, PublishError]:
    if not path.is_file():
        return Err(LocalIOError(path=path, message=f"Unable to find {label} @ {path}"))
    return Ok(None)


def upload_artifact(
    session: EditSession, path: Path, *, console: ConsoleProtocol
) -> Result[int, PublishError]:
    """Upload one APK or bundle into the edit; returns its version code."""
    kind = classify_artifact(path)
    match kind:
        case ArtifactKind.PACKAGE:
            operation = "upload APK"
            failure = "Failed to upload APK."
            upload = session.api.upload_apk
        case ArtifactKind.BUNDLE:
            operation = "upload bundle"
            failure = "Failed to upload bundle."
            upload = session.api.upload_bundle
        case ArtifactKind.INVALID:
            return Err(invalid_artifact(path))

    ok = _require_file(path, "release file")
    if isinstance(ok, Err):
        return ok

    console.debug(
        f"[{session.edit_id}, packageName={session.package_name}]: Uploading {kind} @ {path}"
    )
    result = upload(session.package_name, session.edit_id, path)
    if isinstance(result, Err):
        return Err(RemoteRejection.from_http(operation, result.error))

    version_code = get_int(result.value, "versionCode")
    if not version_code:
        return Err(RemoteRejection(operation=operation, status=None, message=failure))
    return Ok(version_code)


def upload_mapping_file(
    session: EditSession,
    version_code: int,
    mapping_file: Path | None,
    *,
    console: ConsoleProtocol,
) -> Result[None, PublishError]:
    if mapping_file is None:
        return Ok(None)

    ok = _require_file(mapping_file, "'mappingFile'")
    if isinstance(ok, Err):
        return ok

    console.debug(
        f"[{session.edit_id}, versionCode={version_code}, packageName={session.package_name}]: "
        f"Uploading Proguard mapping file @ {mapping_file}"
    )
    result = session.api.upload_deobfuscation_file(
        session.package_name, session.edit_id, version_code, "proguard", mapping_file
    )
    if isinstance(result, Err):
        return Err(RemoteRejection.from_http("upload mapping file", result.error))
    return Ok(None)


def upload_debug_symbols(
    session: EditSession,
    version_code: int,
    symbols: SymbolsPayload | None,
    *,
    console: ConsoleProtocol,
) -> Result[None, PublishError]:
    if symbols is None:
        return Ok(None)

    console.debug(
        f"[{session.edit_id}, versionCode={version_code}, packageName={session.package_name}]: "
        f"Uploading Debug Symbols file @ {symbols.source}"
    )
    result = session.api.upload_deobfuscation_file(
        session.package_name, session.edit_id, version_code, "nativeCode", symbols.media
    )
    if isinstance(result, Err):
        return Err(RemoteRejection.from_http("upload debug symbols", result.error))
    return Ok(None)


def upload_release_files(
    session: EditSession,
    request: PublishRequest,
    *,
    console: ConsoleProtocol,
) -> Result[tuple[int, ...], PublishError]:
    """Upload every release file in order, each followed by its attachments.

    Strictly sequential: attachments are addressed by the version code the
    upload just returned, and the edit does not accept concurrent mutation.
    """
    symbols: SymbolsPayload | None = None
    if request.debug_symbols is not None:
        loaded = load_symbols(request.debug_symbols)
        if isinstance(loaded, Err):
            return loaded
        symbols = loaded.value

    version_codes: list[int] = []
    for release_file in request.release_files:
        console.info(f"Uploading {release_file}")
        uploaded = upload_artifact(session, release_file, console=console)
        if isinstance(uploaded, Err):
            return uploaded
        version_code = uploaded.value

        ok = upload_mapping_file(session, version_code, request.mapping_file, console=console)
        if isinstance(ok, Err):
            return ok
        ok = upload_debug_symbols(session, version_code, symbols, console=console)
        if isinstance(ok, Err):
            return ok

        version_codes.append(version_code)

    console.info(f"Successfully uploaded {len(version_codes)} artifacts")
    return Ok(tuple(version_codes))
