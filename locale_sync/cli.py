"""
Translate a source locale JSON file into a target language, retranslating
only the strings that changed since the previous run.

Usage:
    locale-sync                                   # settings from the environment
    locale-sync --target locales/de.json --target-lang de
    locale-sync --dry-run                         # show what would be translated
    locale-sync --no-cache                        # retranslate everything

Environment: SOURCE_JSON, TARGET_JSON, SOURCE_LANG, TARGET_LANG, STRIP_QUOTES,
I18N_CACHE, I18N_PRUNE_CACHE, I18N_MAX_RETRIES, I18N_RETRY_DELAY,
I18N_TIMEOUT, I18N_ENDPOINT. Flags win over the environment.
"""

import argparse
import dataclasses
import sys
from pathlib import Path
from typing import Mapping, Optional, Sequence

from .config import SyncConfig
from .errors import SyncError
from .sync import SyncDriver


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="locale-sync",
        description="Machine-translate a locale JSON file, reusing unchanged strings.",
    )
    parser.add_argument("--source", type=Path, metavar="PATH", help="Source JSON (SOURCE_JSON).")
    parser.add_argument("--target", type=Path, metavar="PATH", help="Output JSON (TARGET_JSON).")
    parser.add_argument("--source-lang", metavar="TAG", help="Source language (SOURCE_LANG).")
    parser.add_argument("--target-lang", metavar="TAG", help="Target language (TARGET_LANG).")
    parser.add_argument(
        "--cache",
        type=Path,
        metavar="PATH",
        help="Cache file (I18N_CACHE). Default: .i18n-cache.<lang>.json next to the output.",
    )
    parser.add_argument(
        "--no-strip-quotes",
        action="store_true",
        help="Keep quote characters around source strings (STRIP_QUOTES=false).",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report what would be translated without calling the API or writing files.",
    )
    parser.add_argument(
        "--no-cache",
        action="store_true",
        help="Ignore the existing cache and retranslate every string.",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace, environ: Optional[Mapping[str, str]] = None) -> SyncConfig:
    config = SyncConfig.from_env(environ)
    overrides = {}
    if args.source is not None:
        overrides["source_json"] = args.source
    if args.target is not None:
        overrides["target_json"] = args.target
    if args.source_lang:
        overrides["source_lang"] = args.source_lang
    if args.target_lang:
        overrides["target_lang"] = args.target_lang
    if args.cache is not None:
        overrides["cache_file"] = args.cache
    if args.no_strip_quotes:
        overrides["strip_quotes"] = False
    if args.dry_run:
        overrides["dry_run"] = True
    if args.no_cache:
        overrides["use_cache"] = False
    return dataclasses.replace(config, **overrides) if overrides else config


def main(argv: Optional[Sequence[str]] = None, environ: Optional[Mapping[str, str]] = None) -> int:
    args = parse_args(argv)
    try:
        config = build_config(args, environ)
        report = SyncDriver(config).run()
    except SyncError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1
    print(report.summary())
    return 0
