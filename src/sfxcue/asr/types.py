from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class Word:
    """
    词级时间戳结构（单位：秒），按转录顺序排列。
    """

    text: str
    start: float
    end: float


@dataclass(frozen=True)
class Transcript:
    text: str
    words: Tuple[Word, ...] = field(default_factory=tuple)
