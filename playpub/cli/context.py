from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from playpub.core.config import DEFAULT_CONFIG_FILE, Config, load_config
from playpub.core.errors import ErrorCode
from playpub.core.result import Err
from playpub.output.console import ConsoleProtocol, RichConsole
from playpub.store.api import StoreApi
from playpub.store.http import HttpStoreApi


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: Config
    console: ConsoleProtocol


def build_context(*, config_path: Path | None = None, verbose: bool = False) -> CLIContext:
    """Load the optional config file and set up console output.

    An explicit ``--config`` must exist; the default ``playpub.toml`` is only
    read when present.
    """
    path = config_path or Path(DEFAULT_CONFIG_FILE)
    config = Config()
    if config_path is not None or path.exists():
        loaded = load_config(path)
        if isinstance(loaded, Err):
            typer.echo(f"error: {loaded.error.message}", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))
        config = loaded.value

    return CLIContext(config=config, console=RichConsole(verbose=verbose))


def build_store_api(access_token: str) -> StoreApi:
    return HttpStoreApi(access_token)
