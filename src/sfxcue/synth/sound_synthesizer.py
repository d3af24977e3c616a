from __future__ import annotations

import base64
import logging

import requests

from sfxcue.config import SfxCueConfig

logger = logging.getLogger(__name__)


def to_data_url(audio_bytes: bytes, mime: str = "audio/mpeg") -> str:
    encoded = base64.b64encode(audio_bytes).decode("ascii")
    return f"data:{mime};base64,{encoded}"


class SoundSynthesizer:
    """
    调用 ElevenLabs 兼容的 sound-generation 接口，根据文字描述合成音效。

    环境变量约定：
      - SFXCUE_SOUND_API_KEY（或 ELEVEN_LABS_API_KEY） # 必填
      - SFXCUE_SOUND_URL                               # 可选，接口完整 URL
      - SFXCUE_SOUND_DURATION                          # 可选，默认时长（秒），默认 5
    """

    def __init__(self, config: SfxCueConfig) -> None:
        if not config.sound_api_key:
            raise RuntimeError(
                "SoundSynthesizer requires SFXCUE_SOUND_API_KEY (or ELEVEN_LABS_API_KEY) to be set."
            )
        self.config = config

    def generate(self, text: str, duration: float | None = None) -> bytes:
        if not text or not text.strip():
            raise ValueError("Text is required to generate a sound effect.")
        duration_seconds = duration if duration and duration > 0 else self.config.sound_duration

        logger.info("Generating sound for text: %s", text)
        response = requests.post(
            self.config.sound_url,
            headers={
                "Accept": "audio/mpeg",
                "xi-api-key": self.config.sound_api_key or "",
                "Content-Type": "application/json",
            },
            json={"text": text, "duration_seconds": duration_seconds},
            timeout=self.config.request_timeout,
            proxies=self.config.proxies,
        )
        if not response.ok:
            raise RuntimeError(f"Sound generation API error: {response.status_code}")

        logger.info("Sound generated (%d bytes)", len(response.content))
        return response.content
