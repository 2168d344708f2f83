"""Remote store access (Google Play Developer API)."""

from .api import DeobfuscationFileType, HttpError, Media, StoreApi
from .http import HttpStoreApi
from .mock import MockStoreApi

__all__ = [
    "DeobfuscationFileType",
    "HttpError",
    "HttpStoreApi",
    "Media",
    "MockStoreApi",
    "StoreApi",
]
