from __future__ import annotations

from .types import Transcript, Word
from .base import ASREngine
from .payload import transcript_from_payload
from .factory import get_asr_engine

__all__ = ["ASREngine", "Transcript", "Word", "get_asr_engine", "transcript_from_payload"]
