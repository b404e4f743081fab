"""
sync.py

One synchronization run: source locale JSON in, translated locale JSON out.

    source tree ──flatten──> {path: text} ──decide──> reuse | translate
                                                         │
    output tree <──inflate── {path: translated text} <───┘

Only leaves whose source text changed since the last run (or whose previous
translation is missing or blank) are sent to the translator. The output file
is rewritten only when its content changes; the cache file always is.
"""

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from .cache import CacheRecord, Reuse, decide
from .config import SyncConfig
from .errors import DocumentError, MissingSourceError
from .gateway import EmptyResultFallbackPolicy, RetryPolicy, Translate, TranslationGateway
from .tree import flatten, inflate

SURROUNDING_QUOTES_RE = re.compile(r"\A['\"]+|['\"]+\Z")


# ── JSON document helpers ──────────────────────────────────────────────────────

def read_json(path: Path) -> Optional[Any]:
    """Parsed content of `path`, or None when the file does not exist."""
    if not path.is_file():
        return None
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except UnicodeDecodeError as exc:
        raise DocumentError(f"{path} is not UTF-8 text: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise DocumentError(f"{path} is not valid JSON: {exc}") from exc


def dump_json(tree: Any) -> str:
    return json.dumps(tree, ensure_ascii=False, indent=2) + "\n"


def write_if_changed(path: Path, tree: Any) -> bool:
    """Write `tree` to `path` unless the file already holds exactly that."""
    data = dump_json(tree).encode("utf-8")
    if path.is_file() and path.read_bytes() == data:
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return True


def strip_surrounding_quotes(text: str) -> str:
    return SURROUNDING_QUOTES_RE.sub("", text)


# ── Driver ─────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class SyncReport:
    translated: int
    reused: int
    output_written: bool
    output_path: Path
    cache_path: Path
    dry_run: bool = False

    def summary(self) -> str:
        if self.dry_run:
            return (
                f"Dry run. Would translate: {self.translated}, Reused: {self.reused}, "
                f"nothing written."
            )
        outcome = (
            f"wrote {self.output_path}." if self.output_written
            else f"no changes to {self.output_path}."
        )
        return f"Done. Translated: {self.translated}, Reused: {self.reused}, {outcome}"


class SyncDriver:
    """
    Runs one pass for a SyncConfig.

    `translate` is any callable (text, source_lang, target_lang) -> text.
    When omitted, a TranslationGateway is built from the config on first use
    and closed at the end of the run.
    """

    def __init__(self, config: SyncConfig, translate: Optional[Translate] = None) -> None:
        self.config = config
        self._translate = translate
        self._gateway: Optional[TranslationGateway] = None

    def _translator(self) -> Translate:
        if self._translate is None:
            self._gateway = TranslationGateway(
                endpoint=self.config.endpoint,
                timeout=self.config.timeout,
                retry=RetryPolicy(
                    max_attempts=self.config.max_retries + 1,
                    base_delay=self.config.retry_delay,
                ),
                fallback=EmptyResultFallbackPolicy(),
            )
            self._translate = self._gateway.translate
        return self._translate

    def sanitize(self, text: str) -> str:
        return strip_surrounding_quotes(text) if self.config.strip_quotes else text

    def run(self) -> SyncReport:
        try:
            return self._run()
        finally:
            if self._gateway is not None:
                self._gateway.close()

    def _run(self) -> SyncReport:
        cfg = self.config
        cache_path = cfg.cache_path

        source = read_json(cfg.source_json)
        if source is None:
            raise MissingSourceError(cfg.source_json)

        flat_source = flatten(source)
        if not flat_source:
            print("No string leaves found in source JSON. Nothing to translate.", flush=True)
            return SyncReport(0, 0, False, cfg.target_json, cache_path, cfg.dry_run)

        previous = read_json(cfg.target_json)
        # only mined for reusable translations, so bad entries are skipped
        flat_previous = flatten(previous, strict=False) if previous is not None else {}
        cache = CacheRecord.load(cache_path) if cfg.use_cache else CacheRecord()

        # Phase 1: decide
        merged: dict[str, str] = {}
        pending: list[tuple[str, str]] = []
        for path, raw in flat_source.items():
            value = self.sanitize(raw)
            decision = decide(path, value, cache, flat_previous)
            if isinstance(decision, Reuse):
                merged[path] = decision.value
            else:
                merged[path] = ""
                pending.append((path, value))
        reused = len(flat_source) - len(pending)

        if cfg.dry_run:
            for path, value in pending:
                print(f"  [sync] would translate {path}: {value[:60]!r}", flush=True)
            return SyncReport(len(pending), reused, False, cfg.target_json, cache_path, True)

        # Phase 2: translate
        if pending:
            print(
                f"[sync] {cfg.source_lang} -> {cfg.target_lang}: translating "
                f"{len(pending)} new or changed string(s)...",
                flush=True,
            )
        translate = self._translator() if pending else None
        for done, (path, value) in enumerate(pending, start=1):
            print(f"  [{done}/{len(pending)}] {path}", end="\r", flush=True)
            merged[path] = translate(value, cfg.source_lang, cfg.target_lang)
            cache.record(path, value)
        if pending:
            print(f"  Done - {len(pending)} strings translated.          ", flush=True)

        # Phase 3: write
        if cfg.prune_cache:
            removed = cache.prune(flat_source)
            if removed:
                print(f"[cache] Pruned {removed} entries for removed paths.", flush=True)

        changed = write_if_changed(cfg.target_json, inflate(merged))
        cache.save(cache_path)

        return SyncReport(len(pending), reused, changed, cfg.target_json, cache_path)
