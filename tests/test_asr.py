"""Tests for transcription engines and transcript parsing."""

import json
from pathlib import Path
from typing import Any, Dict, List

import pytest

from sfxcue.asr import Transcript, Word, get_asr_engine, transcript_from_payload
from sfxcue.asr import whisper_engine
from sfxcue.asr.json_engine import JsonTranscriptEngine
from sfxcue.asr.whisper_engine import WhisperAPIEngine
from sfxcue.config import SfxCueConfig

VERBOSE_JSON = {
    "text": "The quick brown fox.",
    "words": [
        {"word": "The", "start": 0.0, "end": 0.3},
        {"word": "quick", "start": 0.3, "end": 0.6},
        {"word": "brown", "start": 0.6, "end": 0.9},
        {"word": "fox.", "start": 0.9, "end": 1.2},
    ],
}


def test_transcript_from_payload_parses_words() -> None:
    transcript = transcript_from_payload(VERBOSE_JSON)

    assert transcript.text == "The quick brown fox."
    assert transcript.words[0] == Word("The", 0.0, 0.3)
    assert [w.text for w in transcript.words] == ["The", "quick", "brown", "fox."]


def test_transcript_from_payload_skips_incomplete_entries() -> None:
    payload = {
        "words": [
            {"text": "hello", "start": "0.5", "end": 1},
            {"word": "missing-end", "start": 1.0},
            {"word": "bad", "start": "soon", "end": 2.0},
            "not-a-dict",
        ]
    }

    transcript = transcript_from_payload(payload)

    assert transcript.words == (Word("hello", 0.5, 1.0),)
    assert transcript.text == "hello"


def test_json_engine_reads_saved_transcript(tmp_path: Path) -> None:
    path = tmp_path / "episode.json"
    path.write_text(json.dumps(VERBOSE_JSON), encoding="utf-8")

    transcript = JsonTranscriptEngine().transcribe(path)

    assert isinstance(transcript, Transcript)
    assert len(transcript.words) == 4


def test_json_engine_rejects_missing_and_invalid_files(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        JsonTranscriptEngine().transcribe(tmp_path / "nope.json")

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(RuntimeError):
        JsonTranscriptEngine().transcribe(broken)


def test_get_asr_engine_selects_backend() -> None:
    config = SfxCueConfig.from_env(openai_api_key="sk-test")

    assert isinstance(get_asr_engine("openai", config), WhisperAPIEngine)
    assert isinstance(get_asr_engine("JSON", config), JsonTranscriptEngine)
    with pytest.raises(ValueError):
        get_asr_engine("nemo", config)  # type: ignore[arg-type]


def test_whisper_engine_requires_api_key() -> None:
    with pytest.raises(RuntimeError):
        WhisperAPIEngine(SfxCueConfig.from_env())


def test_whisper_engine_fetches_url_and_requests_word_timestamps(
    monkeypatch: pytest.MonkeyPatch, make_response: Any
) -> None:
    calls: Dict[str, List[Dict[str, Any]]] = {"get": [], "post": []}

    def fake_get(url: str, **kwargs: Any) -> Any:
        calls["get"].append({"url": url, **kwargs})
        return make_response(content=b"ID3audio", headers={"content-type": "audio/mpeg"})

    def fake_post(url: str, **kwargs: Any) -> Any:
        calls["post"].append({"url": url, **kwargs})
        return make_response(payload=VERBOSE_JSON)

    monkeypatch.setattr(whisper_engine.requests, "get", fake_get)
    monkeypatch.setattr(whisper_engine.requests, "post", fake_post)

    engine = WhisperAPIEngine(SfxCueConfig.from_env(openai_api_key="sk-test"))
    transcript = engine.transcribe("https://example.com/episode.mp3")

    assert calls["get"][0]["url"] == "https://example.com/episode.mp3"
    post = calls["post"][0]
    assert post["url"] == "https://api.openai.com/v1/audio/transcriptions"
    assert post["headers"]["Authorization"] == "Bearer sk-test"
    assert post["data"] == {
        "model": "whisper-1",
        "response_format": "verbose_json",
        "timestamp_granularities[]": "word",
    }
    assert post["files"]["file"] == ("audio.mp3", b"ID3audio", "audio/mpeg")
    assert len(transcript.words) == 4


def test_whisper_engine_reads_local_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, make_response: Any
) -> None:
    audio = tmp_path / "clip.mp3"
    audio.write_bytes(b"local-bytes")
    sent: Dict[str, Any] = {}

    def fake_post(url: str, **kwargs: Any) -> Any:
        sent.update(kwargs)
        return make_response(payload=VERBOSE_JSON)

    monkeypatch.setattr(whisper_engine.requests, "post", fake_post)

    engine = WhisperAPIEngine(SfxCueConfig.from_env(openai_api_key="sk-test"))
    engine.transcribe(audio)

    assert sent["files"]["file"][:2] == ("clip.mp3", b"local-bytes")


def test_whisper_engine_reports_fetch_failure(
    monkeypatch: pytest.MonkeyPatch, make_response: Any
) -> None:
    monkeypatch.setattr(
        whisper_engine.requests, "get", lambda url, **kwargs: make_response(status_code=404)
    )

    engine = WhisperAPIEngine(SfxCueConfig.from_env(openai_api_key="sk-test"))
    with pytest.raises(RuntimeError, match="Failed to fetch audio file"):
        engine.transcribe("https://example.com/missing.mp3")


def test_whisper_engine_surfaces_service_error_message(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, make_response: Any
) -> None:
    audio = tmp_path / "clip.mp3"
    audio.write_bytes(b"x")
    monkeypatch.setattr(
        whisper_engine.requests,
        "post",
        lambda url, **kwargs: make_response(
            status_code=401, payload={"error": {"message": "Invalid API key"}}
        ),
    )

    engine = WhisperAPIEngine(SfxCueConfig.from_env(openai_api_key="sk-test"))
    with pytest.raises(RuntimeError, match="Invalid API key"):
        engine.transcribe(audio)


def test_whisper_engine_reports_status_for_non_json_errors(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, make_response: Any
) -> None:
    audio = tmp_path / "clip.mp3"
    audio.write_bytes(b"x")
    monkeypatch.setattr(
        whisper_engine.requests,
        "post",
        lambda url, **kwargs: make_response(status_code=502, text="<html>Bad Gateway</html>"),
    )

    engine = WhisperAPIEngine(SfxCueConfig.from_env(openai_api_key="sk-test"))
    with pytest.raises(RuntimeError, match="status 502"):
        engine.transcribe(audio)
