"""
locale_sync

Keep a machine-translated locale JSON file in step with its source, sending
only new or changed strings to the translator.

Example usage:
    >>> from pathlib import Path
    >>> from locale_sync import SyncConfig, SyncDriver
    >>> report = SyncDriver(SyncConfig(target_json=Path("locales/de.json"),
    ...                                target_lang="de")).run()
    >>> print(report.summary())
"""

__version__ = "1.0.0"

from .cache import CacheRecord, NeedsTranslation, Reuse, decide
from .config import SyncConfig
from .errors import (
    ConfigError,
    DocumentError,
    MalformedPathError,
    MissingSourceError,
    PathConflictError,
    SyncError,
    TranslationError,
)
from .gateway import EmptyResultFallbackPolicy, RetryPolicy, TranslationGateway, is_transient
from .paths import decode_path, encode_path
from .sync import SyncDriver, SyncReport
from .tree import flatten, inflate

__all__ = [
    # Paths and trees
    "encode_path",
    "decode_path",
    "flatten",
    "inflate",
    # Change detection
    "CacheRecord",
    "Reuse",
    "NeedsTranslation",
    "decide",
    # Translation
    "TranslationGateway",
    "RetryPolicy",
    "EmptyResultFallbackPolicy",
    "is_transient",
    # Driver
    "SyncConfig",
    "SyncDriver",
    "SyncReport",
    # Errors
    "SyncError",
    "ConfigError",
    "DocumentError",
    "MissingSourceError",
    "MalformedPathError",
    "PathConflictError",
    "TranslationError",
]
