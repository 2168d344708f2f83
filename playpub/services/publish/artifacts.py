from __future__ import annotations

from enum import Enum
from pathlib import Path

from playpub.services.publish.errors import ConfigurationError


class ArtifactKind(Enum):
    """Upload semantics of a release file, decided by its name suffix."""

    PACKAGE = "apk"
    BUNDLE = "aab"
    INVALID = "invalid"

    def __str__(self) -> str:
        match self:
            case ArtifactKind.PACKAGE:
                return "APK"
            case ArtifactKind.BUNDLE:
                return "App Bundle"
            case ArtifactKind.INVALID:
                return "unknown"


def classify_artifact(path: Path | str) -> ArtifactKind:
    name = str(path)
    if name.endswith(".apk"):
        return ArtifactKind.PACKAGE
    if name.endswith(".aab"):
        return ArtifactKind.BUNDLE
    return ArtifactKind.INVALID


def invalid_artifact(path: Path) -> ConfigurationError:
    return ConfigurationError(
        f"{path} is invalid (missing or invalid file extension).",
        hint="release files must end with .apk or .aab",
    )
