"""Typed configuration loading.

An optional ``playpub.toml`` supplies defaults for the ``publish`` command so
CI workflows can keep long-lived settings (package name, track, mapping file)
out of the command line. Command-line flags always win.

Example::

    [publish]
    package_name = "com.example.app"
    track = "beta"
    user_fraction = 0.2
    status = "inProgress"
    whats_new_directory = "distribution/whatsnew"
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_float, get_int, get_str, get_table

__all__ = [
    "Config",
    "ConfigError",
    "PublishDefaults",
    "DEFAULT_CONFIG_FILE",
    "DEFAULT_TRACK",
    "load_config",
]

DEFAULT_CONFIG_FILE = "playpub.toml"
DEFAULT_TRACK = "production"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class PublishDefaults:
    """Defaults for ``playpub publish``; None means not configured."""

    package_name: str | None = None
    track: str = DEFAULT_TRACK
    release_name: str | None = None
    status: str | None = None
    user_fraction: float | None = None
    in_app_update_priority: int | None = None
    whats_new_directory: str | None = None
    mapping_file: str | None = None
    debug_symbols: str | None = None
    changes_not_sent_for_review: bool = False


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    publish: PublishDefaults = field(default_factory=PublishDefaults)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        publish: StrDict = get_table(data, "publish") or {}

        return cls(
            publish=PublishDefaults(
                package_name=get_str(publish, "package_name"),
                track=get_str(publish, "track") or DEFAULT_TRACK,
                release_name=get_str(publish, "release_name"),
                status=get_str(publish, "status"),
                user_fraction=get_float(publish, "user_fraction"),
                in_app_update_priority=get_int(publish, "in_app_update_priority"),
                whats_new_directory=get_str(publish, "whats_new_directory"),
                mapping_file=get_str(publish, "mapping_file"),
                debug_symbols=get_str(publish, "debug_symbols"),
                changes_not_sent_for_review=bool(
                    get_bool(publish, "changes_not_sent_for_review")
                ),
            )
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to the TOML file

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))

