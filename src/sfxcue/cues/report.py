from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List

from .types import SoundEffectCue

NOT_FOUND_LABEL = "未找到"


def format_timestamp(seconds: float) -> str:
    """
    格式化为 MM:SS.ss（分钟至少两位，秒保留两位小数）。
    """
    if seconds < 0:
        seconds = 0.0
    total_cs = int(round(seconds * 100))
    minutes = total_cs // 6000
    remaining = (total_cs % 6000) / 100
    return f"{minutes:02d}:{remaining:05.2f}"


def cue_to_payload(cue: SoundEffectCue) -> Dict[str, Any]:
    return {
        "description": cue.description,
        "position": cue.position,
        "duration": cue.duration,
        "intensity": cue.intensity,
        "timestamp": cue.timestamp,
        "timestamp_label": (
            format_timestamp(cue.timestamp) if cue.timestamp is not None else None
        ),
        "score": cue.score,
        "mapped": cue.mapped,
        "audio_url": cue.audio_url,
    }


def cues_to_payload(cues: Iterable[SoundEffectCue]) -> List[Dict[str, Any]]:
    return [cue_to_payload(cue) for cue in cues]


def render_cue_lines(cues: Iterable[SoundEffectCue]) -> List[str]:
    lines: list[str] = []
    for idx, cue in enumerate(cues, start=1):
        if cue.timestamp is not None:
            when = format_timestamp(cue.timestamp)
        elif cue.mapped:
            # 已尝试映射但未找到匹配，需要显式展示
            when = NOT_FOUND_LABEL
        else:
            when = "--:--.--"
        lines.append(
            f"{idx:>3}. [{when}] ({cue.intensity}, {cue.duration:g}s) {cue.description}"
        )
        lines.append(f"     位置: \"{cue.position}\"")
    return lines


def write_cue_sheet(cues: Iterable[SoundEffectCue], path: str | Path) -> Path:
    out_path = Path(path).expanduser().resolve()
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(
        json.dumps({"sound_effects": cues_to_payload(cues)}, ensure_ascii=False, indent=2)
        + "\n",
        encoding="utf-8",
    )
    return out_path
