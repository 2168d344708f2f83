"""Publish orchestration: edits, uploads, track assignment, internal sharing."""

from .errors import (
    ConfigurationError,
    LocalIOError,
    PublishError,
    RemoteRejection,
    TrackNotFound,
)
from .model import LocalizedNote, PublishOutcome, PublishRequest, ReleaseStatus, validate_request
from .service import publish

__all__ = [
    "ConfigurationError",
    "LocalIOError",
    "LocalizedNote",
    "PublishError",
    "PublishOutcome",
    "PublishRequest",
    "ReleaseStatus",
    "RemoteRejection",
    "TrackNotFound",
    "publish",
    "validate_request",
]
