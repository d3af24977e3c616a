from __future__ import annotations

from .config import SfxCueConfig
from .locate import LocateResult, locate
from .pipeline import SfxCuePipeline

__all__ = ["LocateResult", "SfxCueConfig", "SfxCuePipeline", "locate"]

__version__ = "0.1.0"
