from __future__ import annotations

from typing import Literal

from sfxcue.config import SfxCueConfig

from .base import ASREngine
from .json_engine import JsonTranscriptEngine
from .whisper_engine import WhisperAPIEngine


BackendType = Literal["openai", "json"]


def get_asr_engine(backend: BackendType, config: SfxCueConfig) -> ASREngine:
    """
    根据后端名称返回 ASR 引擎：

      - "openai" : WhisperAPIEngine（在线转录接口）
      - "json"   : JsonTranscriptEngine（本地 verbose_json 文件）
    """
    key = backend.lower()
    if key == "openai":
        return WhisperAPIEngine(config)
    if key == "json":
        return JsonTranscriptEngine()
    raise ValueError(f"Unknown ASR backend: {backend}")
