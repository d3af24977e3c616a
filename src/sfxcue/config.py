from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Any, Optional


DEFAULT_TRANSCRIBE_URL = "https://api.openai.com/v1/audio/transcriptions"
DEFAULT_LLM_URL = "https://api.openai.com/v1/chat/completions"
DEFAULT_SOUND_URL = "https://api.elevenlabs.io/v1/sound-generation"


def _env_str(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(name, "").strip()
    return value or default


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, "") or default)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, "") or default)
    except ValueError:
        return default


@dataclass
class SfxCueConfig:
    """
    核心配置对象。

    所有字段都可以通过 from_env() 从环境变量（或 .env）读取，
    显式传入的参数优先于环境变量。
    """

    openai_api_key: Optional[str] = None
    asr_backend: str = "openai"
    transcribe_url: str = DEFAULT_TRANSCRIBE_URL
    transcribe_model: str = "whisper-1"
    llm_url: str = DEFAULT_LLM_URL
    llm_model: str = "gpt-4o"
    llm_api_key: Optional[str] = None
    llm_temperature: float = 0.7
    response_format_key: str = "response_format"
    min_cues: int = 10
    sound_url: str = DEFAULT_SOUND_URL
    sound_api_key: Optional[str] = None
    sound_duration: float = 5.0
    http_proxy: Optional[str] = None
    https_proxy: Optional[str] = None
    request_timeout: float = 60.0
    map_concurrency: int = 1
    log_level: str = "INFO"

    @property
    def proxies(self) -> dict[str, str] | None:
        proxies: dict[str, str] = {}
        if self.http_proxy:
            proxies["http"] = self.http_proxy
        if self.https_proxy:
            proxies["https"] = self.https_proxy
        return proxies or None

    @classmethod
    def from_env(cls, **overrides: Any) -> "SfxCueConfig":
        openai_api_key = _env_str("SFXCUE_OPENAI_API_KEY") or _env_str("OPENAI_API_KEY")
        values: dict[str, Any] = {
            "openai_api_key": openai_api_key,
            "asr_backend": (_env_str("SFXCUE_ASR_BACKEND", "openai") or "openai").lower(),
            "transcribe_url": _env_str("SFXCUE_TRANSCRIBE_URL", DEFAULT_TRANSCRIBE_URL),
            "transcribe_model": _env_str("SFXCUE_TRANSCRIBE_MODEL", "whisper-1"),
            "llm_url": _env_str("SFXCUE_LLM_URL", DEFAULT_LLM_URL),
            "llm_model": _env_str("SFXCUE_LLM_MODEL", "gpt-4o"),
            # LLM 网关默认与转录共用 OpenAI Key
            "llm_api_key": _env_str("SFXCUE_LLM_API_KEY") or openai_api_key,
            "llm_temperature": _env_float("SFXCUE_LLM_TEMPERATURE", 0.7),
            # 某些非 OpenAI 平台使用不同的参数名（例如 "format"），置空则不发送 schema
            "response_format_key": os.getenv(
                "SFXCUE_LLM_RESPONSE_FORMAT_KEY", "response_format"
            ).strip(),
            "min_cues": _env_int("SFXCUE_MIN_CUES", 10),
            "sound_url": _env_str("SFXCUE_SOUND_URL", DEFAULT_SOUND_URL),
            "sound_api_key": _env_str("SFXCUE_SOUND_API_KEY") or _env_str("ELEVEN_LABS_API_KEY"),
            "sound_duration": _env_float("SFXCUE_SOUND_DURATION", 5.0),
            "http_proxy": _env_str("SFXCUE_HTTP_PROXY"),
            "https_proxy": _env_str("SFXCUE_HTTPS_PROXY"),
            "request_timeout": _env_float("SFXCUE_REQUEST_TIMEOUT", 60.0),
            "map_concurrency": max(1, _env_int("SFXCUE_MAP_CONCURRENCY", 1)),
            "log_level": (_env_str("SFXCUE_LOG_LEVEL", "INFO") or "INFO").upper(),
        }
        for key, value in overrides.items():
            if key not in values:
                raise TypeError(f"Unknown config option: {key}")
            if value is not None:
                values[key] = value
        return cls(**values)
