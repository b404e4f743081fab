"""
config.py

Run settings, read once from the environment (or any mapping) and then
passed around explicitly. CLI flags override individual fields with
dataclasses.replace().
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .errors import ConfigError
from .gateway import DEFAULT_ENDPOINT, DEFAULT_TIMEOUT

DEFAULT_SOURCE_JSON = "locales/en.json"
DEFAULT_TARGET_JSON = "locales/sv-SE.json"
DEFAULT_SOURCE_LANG = "en"
DEFAULT_TARGET_LANG = "sv"
DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_DELAY = 0.4

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off"})


def parse_bool(name: str, raw: Optional[str], default: bool) -> bool:
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigError(f"{name} must be a boolean (true/false), got {raw!r}")


def _parse_number(name: str, raw: Optional[str], default, kind):
    if raw is None or raw.strip() == "":
        return default
    try:
        value = kind(raw.strip())
    except ValueError:
        raise ConfigError(f"{name} must be a {kind.__name__}, got {raw!r}") from None
    if value < 0:
        raise ConfigError(f"{name} must not be negative, got {raw!r}")
    return value


def default_cache_path(target_json: Path, target_lang: str) -> Path:
    """One cache per target language, next to the output file."""
    return target_json.parent / f".i18n-cache.{target_lang}.json"


@dataclass(frozen=True)
class SyncConfig:
    source_json: Path = Path(DEFAULT_SOURCE_JSON)
    target_json: Path = Path(DEFAULT_TARGET_JSON)
    source_lang: str = DEFAULT_SOURCE_LANG
    target_lang: str = DEFAULT_TARGET_LANG
    strip_quotes: bool = True
    cache_file: Optional[Path] = None
    prune_cache: bool = True
    max_retries: int = DEFAULT_MAX_RETRIES
    retry_delay: float = DEFAULT_RETRY_DELAY
    timeout: float = DEFAULT_TIMEOUT
    endpoint: str = DEFAULT_ENDPOINT
    dry_run: bool = False
    use_cache: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "source_lang", self.source_lang.lower())
        object.__setattr__(self, "target_lang", self.target_lang.lower())
        if not self.source_lang or not self.target_lang:
            raise ConfigError("SOURCE_LANG and TARGET_LANG must not be empty")

    @property
    def cache_path(self) -> Path:
        if self.cache_file is not None:
            return self.cache_file
        return default_cache_path(self.target_json, self.target_lang)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SyncConfig":
        env = os.environ if environ is None else environ
        cache = env.get("I18N_CACHE")
        return cls(
            source_json=Path(env.get("SOURCE_JSON") or DEFAULT_SOURCE_JSON),
            target_json=Path(env.get("TARGET_JSON") or DEFAULT_TARGET_JSON),
            source_lang=env.get("SOURCE_LANG") or DEFAULT_SOURCE_LANG,
            target_lang=env.get("TARGET_LANG") or DEFAULT_TARGET_LANG,
            strip_quotes=parse_bool("STRIP_QUOTES", env.get("STRIP_QUOTES"), True),
            cache_file=Path(cache) if cache else None,
            prune_cache=parse_bool("I18N_PRUNE_CACHE", env.get("I18N_PRUNE_CACHE"), True),
            max_retries=_parse_number(
                "I18N_MAX_RETRIES", env.get("I18N_MAX_RETRIES"), DEFAULT_MAX_RETRIES, int
            ),
            retry_delay=_parse_number(
                "I18N_RETRY_DELAY", env.get("I18N_RETRY_DELAY"), DEFAULT_RETRY_DELAY, float
            ),
            timeout=_parse_number("I18N_TIMEOUT", env.get("I18N_TIMEOUT"), DEFAULT_TIMEOUT, float),
            endpoint=env.get("I18N_ENDPOINT") or DEFAULT_ENDPOINT,
        )
