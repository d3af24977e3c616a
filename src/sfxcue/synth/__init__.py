from __future__ import annotations

from .sound_synthesizer import SoundSynthesizer, to_data_url

__all__ = ["SoundSynthesizer", "to_data_url"]
