"""
cache.py

Change detection between runs.

The cache file maps each leaf path to the source text that was last sent
for translation at that path. A leaf is reused only when its source text is
unchanged AND the previous output still holds a non-blank translation for
it; anything else goes back to the translator.
"""

import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Union

from .errors import DocumentError
from .paths import is_valid_path


# ── Decisions ──────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Reuse:
    value: str


@dataclass(frozen=True)
class NeedsTranslation:
    pass


Decision = Union[Reuse, NeedsTranslation]


def decide(
    path: str,
    source_value: str,
    cache_record,
    previous_output: dict[str, str],
) -> Decision:
    """Reuse the previous translation of `path` or ask for a new one."""
    previous = previous_output.get(path)
    if (
        cache_record.get(path) == source_value
        and isinstance(previous, str)
        and previous.strip() != ""
    ):
        return Reuse(previous)
    return NeedsTranslation()


# ── Persisted record ───────────────────────────────────────────────────────────

class CacheRecord:
    """path -> last source text translated for that path."""

    def __init__(self, entries: Optional[dict[str, str]] = None) -> None:
        self._entries: dict[str, str] = dict(entries or {})

    @classmethod
    def load(cls, cache_file: Path) -> "CacheRecord":
        """
        Read a cache file; a missing file gives an empty record.

        Entries that cannot belong to this tool (undecodable path, non-string
        value) are dropped with a warning so a hand-edited file cannot break
        the run.
        """
        if not cache_file.exists():
            return cls()
        try:
            with open(cache_file, encoding="utf-8") as f:
                raw = json.load(f)
        except UnicodeDecodeError as exc:
            raise DocumentError(f"Cache file {cache_file} is not UTF-8 text: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise DocumentError(f"Cache file {cache_file} is not valid JSON: {exc}") from exc
        if not isinstance(raw, dict):
            raise DocumentError(f"Cache file {cache_file} must hold a JSON object")

        entries: dict[str, str] = {}
        for key, value in raw.items():
            if not isinstance(value, str) or not is_valid_path(key):
                print(f"[WARN] Dropping malformed cache entry {key!r}", file=sys.stderr)
                continue
            entries[key] = value
        print(f"[cache] Loaded {len(entries)} cached source strings.", flush=True)
        return cls(entries)

    def save(self, cache_file: Path) -> None:
        cache_file.parent.mkdir(parents=True, exist_ok=True)
        cache_file.write_text(
            json.dumps(self._entries, ensure_ascii=False, indent=2) + "\n",
            encoding="utf-8",
        )
        print(f"[cache] Saved {len(self._entries)} source strings.", flush=True)

    def get(self, path: str) -> Optional[str]:
        return self._entries.get(path)

    def record(self, path: str, source_value: str) -> None:
        self._entries[path] = source_value

    def prune(self, live_paths: Iterable[str]) -> int:
        """Drop entries for paths no longer in the source. Returns how many went."""
        live = set(live_paths)
        stale = [path for path in self._entries if path not in live]
        for path in stale:
            del self._entries[path]
        return len(stale)

    def as_dict(self) -> dict[str, str]:
        return dict(self._entries)

    def __contains__(self, path: str) -> bool:
        return path in self._entries

    def __len__(self) -> int:
        return len(self._entries)
