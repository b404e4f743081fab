"""
gateway.py

Single-string machine translation over HTTP.

Uses the public Google Translate endpoint (client=gtx), one request per
string. Transient failures (rate limiting, 5xx, dropped connections) are
retried with exponential backoff; everything else surfaces at once as a
TranslationError.
"""

import sys
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

import requests

from .errors import TranslationError

DEFAULT_ENDPOINT = "https://translate.googleapis.com/translate_a/single"
DEFAULT_TIMEOUT = 30.0

TRANSIENT_STATUSES = frozenset({429, 500, 502, 503, 504})

# (text, source_lang, target_lang) -> translated text
Translate = Callable[[str, str, str], str]


# ── Retry policy ───────────────────────────────────────────────────────────────

def is_transient(error: BaseException) -> bool:
    """Rate limiting, server unavailability, connection reset or timeout."""
    if isinstance(error, TranslationError):
        if error.status is not None:
            return error.status in TRANSIENT_STATUSES
        error = error.__cause__
    return isinstance(error, (requests.ConnectionError, requests.Timeout))


@dataclass
class RetryPolicy:
    """
    Call a function up to `max_attempts` times.

    Waits base_delay, 2*base_delay, 4*base_delay... between attempts, but
    only when `classifier` says the failure is transient. The last failure
    is re-raised unchanged.
    """

    max_attempts: int = 4
    base_delay: float = 0.4
    classifier: Callable[[BaseException], bool] = is_transient
    sleep: Callable[[float], None] = time.sleep

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay < 0:
            raise ValueError("base_delay must not be negative")

    def delay(self, attempt: int) -> float:
        return self.base_delay * (2 ** attempt)

    def call(self, fn: Callable[[], Any]) -> Any:
        for attempt in range(self.max_attempts):
            try:
                return fn()
            except Exception as exc:
                if attempt == self.max_attempts - 1 or not self.classifier(exc):
                    raise
                wait = self.delay(attempt)
                print(
                    f"  [retry] {exc} (attempt {attempt + 1}/{self.max_attempts}, "
                    f"next in {wait:.1f}s)",
                    file=sys.stderr,
                    flush=True,
                )
                self.sleep(wait)


@dataclass(frozen=True)
class EmptyResultFallbackPolicy:
    """Keep the source text when the backend answers with a blank string."""

    enabled: bool = True

    def apply(self, source: str, translated: str) -> str:
        if self.enabled and translated.strip() == "":
            return source
        return translated


# ── Response parsing ───────────────────────────────────────────────────────────

def parse_response(data: Any) -> Optional[str]:
    """
    Join the translated segments of a gtx response.

    Shape: [ [ [translated, original, ...], ... ], ... ]. Returns None when
    the payload does not look like that.
    """
    if not isinstance(data, list) or not data or not isinstance(data[0], list):
        return None
    parts: list[str] = []
    for seg in data[0]:
        if isinstance(seg, list) and seg:
            parts.append(seg[0] if isinstance(seg[0], str) else "")
    return "".join(parts)


# ── Gateway ────────────────────────────────────────────────────────────────────

class TranslationGateway:
    """
    Translate one string per request.

    Example:
        >>> gateway = TranslationGateway()
        >>> gateway.translate("Hello", "en", "sv")
        'Hej'
    """

    def __init__(
        self,
        endpoint: str = DEFAULT_ENDPOINT,
        timeout: float = DEFAULT_TIMEOUT,
        retry: Optional[RetryPolicy] = None,
        fallback: Optional[EmptyResultFallbackPolicy] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.endpoint = endpoint
        self.timeout = timeout
        self.retry = retry or RetryPolicy()
        self.fallback = fallback or EmptyResultFallbackPolicy()
        self.session = session or requests.Session()

    def translate(self, text: str, source_lang: str, target_lang: str) -> str:
        data = self.retry.call(lambda: self._request(text, source_lang, target_lang))
        translated = parse_response(data)
        if translated is None:
            print(f"  [WARN] Unexpected response for '{text[:50]}', keeping source text",
                  file=sys.stderr)
            return text
        return self.fallback.apply(text, translated)

    def _request(self, text: str, source_lang: str, target_lang: str) -> Any:
        params = {
            "client": "gtx",
            "sl": source_lang,
            "tl": target_lang,
            "dt": "t",
            "q": text,
        }
        try:
            resp = self.session.get(self.endpoint, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            raise TranslationError(f"Translate request failed: {exc}") from exc

        if not 200 <= resp.status_code < 300:
            raise TranslationError(
                f"Translate failed ({resp.status_code}): {resp.text[:200]}",
                status=resp.status_code,
            )
        try:
            return resp.json()
        except ValueError as exc:
            raise TranslationError(
                f"Translate returned invalid JSON: {exc}", status=resp.status_code
            ) from exc

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "TranslationGateway":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
