"""Tests for timestamp formatting and cue rendering."""

import json
from pathlib import Path

import pytest

from sfxcue.cues import (
    SoundEffectCue,
    cue_to_payload,
    format_timestamp,
    render_cue_lines,
    write_cue_sheet,
)


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [
        (0.0, "00:00.00"),
        (3.14159, "00:03.14"),
        (65.5, "01:05.50"),
        (59.999, "01:00.00"),
        (600.0, "10:00.00"),
        (-2.0, "00:00.00"),
    ],
)
def test_format_timestamp(seconds: float, expected: str) -> None:
    assert format_timestamp(seconds) == expected


def _cues() -> list[SoundEffectCue]:
    return [
        SoundEffectCue("Door creak", "the door opened", 2.0, "foreground", timestamp=65.5, score=0.91, mapped=True),
        SoundEffectCue("Rain", "it began to rain", 8.0, "background", mapped=True),
        SoundEffectCue("Owl hoot", "an owl called", 1.5, "foreground"),
    ]


def test_cue_payload_uses_null_for_unmatched_timestamp() -> None:
    matched, unmatched, _ = _cues()

    assert cue_to_payload(matched)["timestamp_label"] == "01:05.50"
    payload = cue_to_payload(unmatched)
    assert payload["timestamp"] is None
    assert payload["timestamp_label"] is None
    assert payload["mapped"] is True


def test_render_cue_lines_marks_unmatched_cues_explicitly() -> None:
    lines = render_cue_lines(_cues())

    assert "[01:05.50]" in lines[0]
    assert "未找到" in lines[2]
    assert "--:--.--" in lines[4]
    assert lines[1].strip() == '位置: "the door opened"'


def test_write_cue_sheet(tmp_path: Path) -> None:
    out_path = write_cue_sheet(_cues(), tmp_path / "nested" / "cues.json")

    data = json.loads(out_path.read_text(encoding="utf-8"))
    assert [cue["timestamp"] for cue in data["sound_effects"]] == [65.5, None, None]
    assert data["sound_effects"][1]["intensity"] == "background"
