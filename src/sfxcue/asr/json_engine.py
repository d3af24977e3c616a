from __future__ import annotations

import json
import logging
from pathlib import Path

from .base import ASREngine
from .payload import transcript_from_payload
from .types import Transcript

logger = logging.getLogger(__name__)


class JsonTranscriptEngine(ASREngine):
    """
    从磁盘读取已保存的 verbose_json 转录结果，便于离线重新执行映射。
    """

    def transcribe(self, source: str | Path) -> Transcript:
        path = Path(source).expanduser().resolve()
        if not path.is_file():
            raise FileNotFoundError(f"Transcript JSON not found: {path}")
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as parse_err:
            raise RuntimeError(f"Transcript file is not valid JSON: {path}") from parse_err
        if not isinstance(payload, dict):
            raise RuntimeError(f"Transcript JSON must be an object: {path}")

        transcript = transcript_from_payload(payload)
        logger.info("Loaded %d words from %s", len(transcript.words), path)
        return transcript
