"""helpers.py - shared fakes and fixtures for the test suite"""

import json
import sys
import tempfile
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))
from locale_sync import SyncConfig


class FakeTranslator:
    """Records calls; answers from a table, else '<tl>:<text>'."""

    def __init__(self, answers=None):
        self.answers = dict(answers or {})
        self.calls = []

    def __call__(self, text, source_lang, target_lang):
        self.calls.append((text, source_lang, target_lang))
        return self.answers.get(text, f"{target_lang}:{text}")


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text or json.dumps(payload)

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    """Stands in for requests.Session; plays back responses or raises exceptions."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.requests = []
        self.closed = False

    def get(self, url, params=None, timeout=None):
        self.requests.append({"url": url, "params": params, "timeout": timeout})
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def close(self):
        self.closed = True


def gtx_payload(*segments):
    """Build a gtx-shaped response body from translated segments."""
    return [[[seg, "src", None, None] for seg in segments], None, "en"]


class WorkspaceTestCase(unittest.TestCase):
    """TestCase with a temporary locales/ directory and a default config."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.source = self.root / "locales" / "en.json"
        self.target = self.root / "locales" / "sv-SE.json"
        self.cache = self.root / "locales" / ".i18n-cache.sv.json"
        self.config = SyncConfig(source_json=self.source, target_json=self.target)

    def tearDown(self):
        self._tmp.cleanup()

    def write_json(self, path, data):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")

    def read_json(self, path):
        return json.loads(path.read_text(encoding="utf-8"))
