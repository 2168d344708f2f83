from __future__ import annotations

import os
from pathlib import Path
from typing import NoReturn

import typer

from playpub.cli.context import build_context, build_store_api
from playpub.cli.outputs import outcome_urls, write_github_outputs
from playpub.core.errors import ErrorCode
from playpub.core.result import Err
from playpub.output.console import ConsoleProtocol, Style
from playpub.output.errors import print_publish_error, publish_error_exit_code
from playpub.services.publish.errors import PublishError
from playpub.services.publish.inputs import build_request
from playpub.services.publish.service import publish as run_publish

ACCESS_TOKEN_ENV = "PLAYPUB_ACCESS_TOKEN"


def _fail(error: PublishError, console: ConsoleProtocol) -> NoReturn:
    print_publish_error(error, console)
    raise typer.Exit(code=publish_error_exit_code(error))


def publish(
    release_file: list[str] = typer.Option(
        [],
        "--release-file",
        "-f",
        help="Release file or glob (.apk / .aab). Repeat for several files.",
    ),
    package_name: str | None = typer.Option(
        None, "--package-name", "-p", help="Application id, e.g. com.example.app"
    ),
    track: str | None = typer.Option(
        None, "--track", "-t", help="Target track, or 'internalsharing' for direct links"
    ),
    release_name: str | None = typer.Option(None, "--release-name", help="Release name"),
    in_app_update_priority: int | None = typer.Option(
        None, "--in-app-update-priority", help="In-app update priority, 0-5"
    ),
    user_fraction: float | None = typer.Option(
        None, "--user-fraction", help="Staged rollout fraction, 0.0-1.0"
    ),
    status: str | None = typer.Option(
        None, "--status", help="completed | inProgress | halted | draft"
    ),
    whats_new_dir: str | None = typer.Option(
        None, "--whats-new-dir", help="Directory of whatsnew-<locale> release notes"
    ),
    mapping_file: str | None = typer.Option(
        None, "--mapping-file", help="ProGuard/R8 mapping.txt"
    ),
    debug_symbols: str | None = typer.Option(
        None, "--debug-symbols", help="native-debug-symbols.zip or a directory of symbols"
    ),
    changes_not_sent_for_review: bool | None = typer.Option(
        None,
        "--changes-not-sent-for-review/--send-for-review",
        help="Keep the changes out of review until sent from the Play Console",
    ),
    existing_edit_id: str | None = typer.Option(
        None, "--existing-edit-id", help="Append to this pending edit instead of creating one"
    ),
    access_token: str | None = typer.Option(
        None,
        "--access-token",
        envvar=ACCESS_TOKEN_ENV,
        help="OAuth 2.0 access token with the androidpublisher scope",
    ),
    config: Path | None = typer.Option(None, "--config", help="Config file (playpub.toml)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug output"),
) -> None:
    """Upload release files to Google Play and roll them out on a track."""
    ctx = build_context(config_path=config, verbose=verbose)
    console = ctx.console
    defaults = ctx.config.publish

    request = build_request(
        package_name=package_name or defaults.package_name,
        release_files=release_file,
        track=track or defaults.track,
        release_name=release_name or defaults.release_name,
        in_app_update_priority=(
            in_app_update_priority
            if in_app_update_priority is not None
            else defaults.in_app_update_priority
        ),
        user_fraction=user_fraction if user_fraction is not None else defaults.user_fraction,
        status=status or defaults.status,
        whats_new_directory=whats_new_dir or defaults.whats_new_directory,
        mapping_file=mapping_file or defaults.mapping_file,
        debug_symbols=debug_symbols or defaults.debug_symbols,
        changes_not_sent_for_review=(
            changes_not_sent_for_review
            if changes_not_sent_for_review is not None
            else defaults.changes_not_sent_for_review
        ),
        existing_edit_id=existing_edit_id,
    )
    if isinstance(request, Err):
        _fail(request.error, console)

    if not access_token:
        console.error("access token required")
        console.print(f"hint: pass --access-token or set {ACCESS_TOKEN_ENV}", Style.DIM)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    req = request.value
    console.header(f"Publishing {req.package_name} to '{req.track}'")
    result = run_publish(req, api=build_store_api(access_token), console=console)
    if isinstance(result, Err):
        _fail(result.error, console)

    outcome = result.value
    urls = outcome_urls(outcome, package_name=req.package_name)
    if outcome.download_urls:
        for url in urls:
            console.success(url)
    else:
        codes = ", ".join(str(code) for code in outcome.version_codes)
        console.success(f"version codes {codes} released on '{outcome.track}'")
        for url in urls:
            console.print(url, Style.DIM)

    github_output = os.environ.get("GITHUB_OUTPUT")
    if github_output:
        write_github_outputs(Path(github_output), urls)
        console.debug(f"Outputs written to {github_output}")
