from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from .types import SoundEffectCue


class CueGenerator(ABC):
    """
    音效提示生成器抽象接口。
    """

    @abstractmethod
    def generate(self, transcription: str) -> List[SoundEffectCue]:
        """
        根据转录全文生成音效提示列表（此时尚未包含时间戳）。
        """
