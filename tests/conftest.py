import json
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import pytest

PROJECT_SRC = Path(__file__).resolve().parents[1] / "src"
if str(PROJECT_SRC) not in sys.path:
    sys.path.insert(0, str(PROJECT_SRC))

from sfxcue.asr import Word  # noqa: E402

ENV_PREFIXES = ("SFXCUE_",)
ENV_NAMES = ("OPENAI_API_KEY", "ELEVEN_LABS_API_KEY")


class FakeResponse:
    """Minimal stand-in for ``requests.Response``."""

    def __init__(
        self,
        status_code: int = 200,
        payload: Any = None,
        content: bytes = b"",
        headers: Optional[Dict[str, str]] = None,
        text: Optional[str] = None,
    ) -> None:
        self.status_code = status_code
        self._payload = payload
        self.content = content
        self.headers = headers or {}
        if text is not None:
            self.text = text
        elif payload is not None:
            self.text = json.dumps(payload)
        else:
            self.text = content.decode("utf-8", errors="replace")

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self) -> Any:
        if self._payload is None:
            return json.loads(self.text)
        return self._payload

    def raise_for_status(self) -> None:
        if not self.ok:
            raise RuntimeError(f"HTTP {self.status_code}")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keeps developer environment variables out of config-dependent tests."""
    import os

    for name in list(os.environ):
        if name.startswith(ENV_PREFIXES) or name in ENV_NAMES:
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_response() -> Callable[..., FakeResponse]:
    return FakeResponse


@pytest.fixture
def fox_words() -> List[Word]:
    texts = ["the", "quick", "brown", "fox", "jumps"]
    return [Word(text, i * 0.5, i * 0.5 + 0.4) for i, text in enumerate(texts)]


@pytest.fixture
def knight_words() -> List[Word]:
    texts = ["Once", "upon", "a", "time,", "the", "brave", "knight", "rode", "off."]
    starts = [0.0, 0.4, 0.7, 0.9, 1.5, 1.8, 2.2, 2.6, 3.0]
    return [Word(text, start, start + 0.3) for text, start in zip(texts, starts)]
