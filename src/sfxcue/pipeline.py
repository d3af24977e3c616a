from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
import logging
from pathlib import Path
import re
from typing import List, Optional, Sequence

from .config import SfxCueConfig
from .asr import ASREngine, Transcript, Word, get_asr_engine
from .cues import CueGenerator, SoundEffectCue, get_cue_generator
from .locate import locate
from .synth import SoundSynthesizer, to_data_url

logger = logging.getLogger(__name__)


def _slugify(text: str, limit: int = 40) -> str:
    slug = re.sub(r"[^\w]+", "_", text.strip().lower()).strip("_")
    return slug[:limit] or "sfx"


class SfxCuePipeline:
    """
    转录 -> 生成音效提示 -> 将提示短语映射到时间戳 -> （可选）合成音效。

    各协作组件可以显式注入；未注入时按配置懒加载。
    """

    def __init__(
        self,
        config: SfxCueConfig,
        asr_engine: Optional[ASREngine] = None,
        cue_generator: Optional[CueGenerator] = None,
        synthesizer: Optional[SoundSynthesizer] = None,
    ) -> None:
        self.config = config
        self._asr_engine = asr_engine
        self._cue_generator = cue_generator
        self._synthesizer = synthesizer

    @property
    def asr_engine(self) -> ASREngine:
        if self._asr_engine is None:
            self._asr_engine = get_asr_engine(self.config.asr_backend, self.config)  # type: ignore[arg-type]
        return self._asr_engine

    @property
    def cue_generator(self) -> CueGenerator:
        if self._cue_generator is None:
            self._cue_generator = get_cue_generator("llm", self.config)
        return self._cue_generator

    @property
    def synthesizer(self) -> SoundSynthesizer:
        if self._synthesizer is None:
            self._synthesizer = SoundSynthesizer(self.config)
        return self._synthesizer

    def run_transcription(self, source: str | Path) -> Transcript:
        return self.asr_engine.transcribe(source)

    def run_cue_generation(self, transcript: Transcript) -> List[SoundEffectCue]:
        return self.cue_generator.generate(transcript.text)

    def _map_one(self, cue: SoundEffectCue, words: Sequence[Word]) -> SoundEffectCue:
        result = locate(cue.position, words)
        candidate = result.candidate
        if candidate is None or result.timestamp is None:
            logger.warning("Could not find timestamp for position: %s", cue.position)
            return replace(cue, timestamp=None, score=None, mapped=True)
        logger.debug(
            "Mapped %r -> %.2fs (window=%d, score=%.3f, matched=%r)",
            cue.position,
            result.timestamp,
            candidate.window_size,
            candidate.score,
            candidate.matched_text,
        )
        return replace(
            cue,
            timestamp=result.timestamp,
            score=candidate.score,
            mapped=True,
        )

    def run_mapping(
        self,
        cues: Sequence[SoundEffectCue],
        words: Sequence[Word],
    ) -> List[SoundEffectCue]:
        """
        为每条提示查找时间戳，返回新的列表（顺序与输入一致）。

        未找到匹配的提示 timestamp 为 None，调用方需要显式展示。
        """
        worker_count = min(self.config.map_concurrency, len(cues))
        if worker_count <= 1:
            mapped = [self._map_one(cue, words) for cue in cues]
        else:
            # locate 为纯函数，按提示并行即可；map 保持输入顺序
            with ThreadPoolExecutor(max_workers=worker_count) as executor:
                mapped = list(executor.map(lambda c: self._map_one(c, words), cues))

        found = sum(1 for cue in mapped if cue.timestamp is not None)
        logger.info("Mapped %d/%d cue positions to timestamps", found, len(mapped))
        return mapped

    def run_synthesis(
        self,
        cues: Sequence[SoundEffectCue],
        output_dir: str | Path | None = None,
    ) -> List[SoundEffectCue]:
        """
        为每条提示合成音效，写入 audio_url（data URL）；
        指定 output_dir 时同时将 mp3 写入磁盘。
        """
        out_dir: Path | None = None
        if output_dir is not None:
            out_dir = Path(output_dir).expanduser().resolve()
            out_dir.mkdir(parents=True, exist_ok=True)

        results: List[SoundEffectCue] = []
        for idx, cue in enumerate(cues, start=1):
            audio = self.synthesizer.generate(cue.description, duration=cue.duration)
            if out_dir is not None:
                (out_dir / f"{idx:02d}_{_slugify(cue.description)}.mp3").write_bytes(audio)
            results.append(replace(cue, audio_url=to_data_url(audio)))
        return results

    def run(self, source: str | Path) -> tuple[Transcript, List[SoundEffectCue]]:
        transcript = self.run_transcription(source)
        cues = self.run_cue_generation(transcript)
        return transcript, self.run_mapping(cues, transcript.words)
