from __future__ import annotations

from sfxcue.config import SfxCueConfig

from .generator import CueGenerator
from .llm_generator import LLMCueGenerator


def get_cue_generator(name: str, config: SfxCueConfig) -> CueGenerator:
    key = name.lower()
    if key == "llm":
        return LLMCueGenerator(config)
    raise ValueError(f"Unknown cue generator: {name}")
