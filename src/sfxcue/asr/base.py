from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from .types import Transcript


class ASREngine(ABC):
    """
    抽象 ASR 引擎，封装不同来源（在线转录接口 / 本地 JSON）的统一接口。
    """

    @abstractmethod
    def transcribe(self, source: str | Path) -> Transcript:
        """
        对输入音频（URL 或本地路径）进行转录，返回全文与词级时间戳。
        """
