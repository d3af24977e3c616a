from __future__ import annotations

from .types import INTENSITIES, Intensity, SoundEffectCue
from .generator import CueGenerator
from .llm_generator import LLMCueGenerator
from .factory import get_cue_generator
from .report import (
    cue_to_payload,
    cues_to_payload,
    format_timestamp,
    render_cue_lines,
    write_cue_sheet,
)

__all__ = [
    "INTENSITIES",
    "CueGenerator",
    "Intensity",
    "LLMCueGenerator",
    "SoundEffectCue",
    "cue_to_payload",
    "cues_to_payload",
    "format_timestamp",
    "get_cue_generator",
    "render_cue_lines",
    "write_cue_sheet",
]
