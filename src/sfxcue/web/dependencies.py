from __future__ import annotations

"""
Web 层与核心 Pipeline 之间的集成点。

路由通过 FastAPI 的 Depends(get_pipeline) 获取 Pipeline，
测试中可以用 app.dependency_overrides 替换为假实现。
"""

from typing import Any, Dict, Iterable, List

from pydantic import BaseModel, Field

from sfxcue.asr import Transcript, Word
from sfxcue.config import SfxCueConfig
from sfxcue.cues import SoundEffectCue
from sfxcue.pipeline import SfxCuePipeline


class TranscribeRequest(BaseModel):
    audio_url: str = ""


class GenerateSfxRequest(BaseModel):
    transcription: str = ""


class WordPayload(BaseModel):
    word: str
    start: float
    end: float


class CuePayload(BaseModel):
    description: str = ""
    position: str
    duration: float = 0.0
    intensity: str = "foreground"


class MapPositionsRequest(BaseModel):
    sfx_list: List[CuePayload] = Field(default_factory=list)
    words: List[WordPayload] = Field(default_factory=list)


class GenerateSoundRequest(BaseModel):
    text: str = ""
    duration: float | None = None


def get_config() -> SfxCueConfig:
    return SfxCueConfig.from_env()


def get_pipeline() -> SfxCuePipeline:
    """
    每个请求构造一个 Pipeline；协作组件在首次使用时才会初始化。
    """
    return SfxCuePipeline(get_config())


def words_to_payload(words: Iterable[Word]) -> List[Dict[str, Any]]:
    # 对外保持与转录接口一致的 "word" 字段名
    return [{"word": w.text, "start": w.start, "end": w.end} for w in words]


def transcript_to_payload(transcript: Transcript) -> Dict[str, Any]:
    return {
        "transcription": transcript.text,
        "words": words_to_payload(transcript.words),
    }


def words_from_payload(words: Iterable[WordPayload]) -> List[Word]:
    return [Word(text=w.word, start=w.start, end=w.end) for w in words]


def cues_from_payload(cues: Iterable[CuePayload]) -> List[SoundEffectCue]:
    result: List[SoundEffectCue] = []
    for cue in cues:
        intensity = cue.intensity if cue.intensity in {"background", "foreground"} else "foreground"
        result.append(
            SoundEffectCue(
                description=cue.description,
                position=cue.position,
                duration=cue.duration,
                intensity=intensity,  # type: ignore[arg-type]
            )
        )
    return result
