from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional


Intensity = Literal["background", "foreground"]
INTENSITIES = ("background", "foreground")


@dataclass
class SoundEffectCue:
    """
    单条音效提示：由 LLM 给出 description / position 等字段，
    映射阶段填充 timestamp（mapped 表示已执行过映射，timestamp 仍为 None
    即未找到匹配），合成阶段填充 audio_url。
    """

    description: str
    position: str
    duration: float
    intensity: Intensity = "foreground"
    timestamp: Optional[float] = None
    score: Optional[float] = None
    mapped: bool = False
    audio_url: Optional[str] = None
