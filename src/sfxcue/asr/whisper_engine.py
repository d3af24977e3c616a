from __future__ import annotations

import logging
from pathlib import Path
from typing import Tuple

import requests

from sfxcue.config import SfxCueConfig

from .base import ASREngine
from .payload import transcript_from_payload
from .types import Transcript

logger = logging.getLogger(__name__)


class WhisperAPIEngine(ASREngine):
    """
    调用 OpenAI 兼容的 /v1/audio/transcriptions 接口进行转录。

    - 输入可以是 http(s) URL（先下载音频）或本地文件路径；
    - 使用 response_format=verbose_json 与 timestamp_granularities[]=word
      获取词级时间戳。
    """

    def __init__(self, config: SfxCueConfig) -> None:
        if not config.openai_api_key:
            raise RuntimeError(
                "WhisperAPIEngine requires SFXCUE_OPENAI_API_KEY (or OPENAI_API_KEY) to be set."
            )
        self.config = config

    def _fetch_audio(self, source: str | Path) -> Tuple[bytes, str, str]:
        """
        返回 (音频字节, 文件名, content-type)。
        """
        source_str = str(source)
        if source_str.startswith(("http://", "https://")):
            logger.info("Fetching audio file from URL: %s", source_str)
            try:
                response = requests.get(
                    source_str,
                    timeout=self.config.request_timeout,
                    proxies=self.config.proxies,
                )
            except requests.RequestException as fetch_err:
                raise RuntimeError(f"Failed to fetch audio file: {fetch_err}") from fetch_err
            if not response.ok:
                raise RuntimeError(
                    f"Failed to fetch audio file: HTTP {response.status_code}"
                )
            content_type = response.headers.get("content-type") or "audio/mpeg"
            return response.content, "audio.mp3", content_type

        path = Path(source_str).expanduser().resolve()
        if not path.is_file():
            raise FileNotFoundError(f"Audio file not found: {path}")
        return path.read_bytes(), path.name, "audio/mpeg"

    def transcribe(self, source: str | Path) -> Transcript:
        audio_bytes, filename, content_type = self._fetch_audio(source)

        logger.info(
            "Sending %d bytes to transcription endpoint (model=%s)",
            len(audio_bytes),
            self.config.transcribe_model,
        )
        response = requests.post(
            self.config.transcribe_url,
            headers={"Authorization": f"Bearer {self.config.openai_api_key}"},
            files={"file": (filename, audio_bytes, content_type)},
            data={
                "model": self.config.transcribe_model,
                "response_format": "verbose_json",
                "timestamp_granularities[]": "word",
            },
            timeout=self.config.request_timeout,
            proxies=self.config.proxies,
        )

        try:
            data = response.json()
        except ValueError as json_err:
            snippet = response.text[:500]
            raise RuntimeError(
                f"Transcription response is not valid JSON (status {response.status_code}), "
                f"first 500 chars: {snippet}"
            ) from json_err

        if not response.ok:
            message = None
            if isinstance(data, dict) and isinstance(data.get("error"), dict):
                message = data["error"].get("message")
            raise RuntimeError(message or "Failed to transcribe audio.")

        if not isinstance(data, dict):
            raise RuntimeError("Transcription response must be a JSON object.")

        transcript = transcript_from_payload(data)
        logger.info("Received transcription with %d timestamped words", len(transcript.words))
        return transcript
