from __future__ import annotations

import json
import logging
from pathlib import Path
from string import Template
from typing import Any, Dict, List, Optional

import requests

from sfxcue.config import SfxCueConfig

from .generator import CueGenerator
from .types import INTENSITIES, SoundEffectCue

logger = logging.getLogger(__name__)


def _load_prompt(name: str) -> str:
    """
    从包内 prompts/ 目录加载指定的 prompt 模板。
    """
    prompt_path = Path(__file__).resolve().parents[1] / "prompts" / name
    if not prompt_path.is_file():
        raise FileNotFoundError(f"Prompt file not found: {prompt_path}")
    return prompt_path.read_text(encoding="utf-8")


SOUND_EFFECTS_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "sound_effects": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "description": {
                        "type": "string",
                        "description": "A short description of the sound effect.",
                    },
                    "position": {
                        "type": "string",
                        "description": "A unique phrase or sentence where the sound effect should be added.",
                    },
                    "duration": {
                        "type": "number",
                        "description": "How long the sound effect should play in seconds.",
                    },
                    "intensity": {
                        "type": "string",
                        "enum": list(INTENSITIES),
                        "description": "Whether the sound should be played in the background or foreground.",
                    },
                },
                "required": ["description", "position", "duration", "intensity"],
                "additionalProperties": False,
            },
        },
    },
    "required": ["sound_effects"],
    "additionalProperties": False,
}


class LLMCueGenerator(CueGenerator):
    """
    使用 OpenAI Chat Completions 兼容接口生成音效提示。

    通过 json_schema 结构化输出约束返回格式：
      {"sound_effects": [{"description", "position", "duration", "intensity"}]}
    """

    def __init__(self, config: SfxCueConfig) -> None:
        if not config.llm_url or not config.llm_model:
            raise RuntimeError(
                "LLMCueGenerator requires SFXCUE_LLM_URL and SFXCUE_LLM_MODEL to be set."
            )
        self.config = config

    def _call_chat(
        self,
        system_prompt: str,
        user_prompt: str,
        response_format: Dict[str, Any] | None = None,
    ) -> Dict[str, Any]:
        headers = {
            "Content-Type": "application/json",
        }
        if self.config.llm_api_key:
            headers["Authorization"] = f"Bearer {self.config.llm_api_key}"

        body: Dict[str, Any] = {
            "model": self.config.llm_model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": self.config.llm_temperature,
        }
        if response_format is not None and self.config.response_format_key:
            body[self.config.response_format_key] = response_format

        logger.debug("LLM request body: %s", json.dumps(body, ensure_ascii=False)[:4000])

        response = requests.post(
            self.config.llm_url,
            headers=headers,
            data=json.dumps(body),
            timeout=self.config.request_timeout,
            proxies=self.config.proxies,
        )
        response.raise_for_status()

        try:
            data = response.json()
        except ValueError as json_err:
            snippet = response.text[:500]
            raise RuntimeError(
                f"LLM response is not valid JSON, first 500 chars: {snippet}"
            ) from json_err

        choices = data.get("choices")
        if not choices:
            raise RuntimeError(
                f"LLM response missing 'choices' field, got: {list(data.keys())}"
            )

        first = choices[0]
        content: str | None = None

        # OpenAI Chat: choices[0].message.content
        message = first.get("message")
        if isinstance(message, dict):
            content = message.get("content")

        # 某些实现可能直接在 text 字段返回
        if content is None and "text" in first:
            content = first.get("text")

        if not content:
            raise RuntimeError(
                f"LLM response missing 'content'/'text' in first choice: {first}"
            )

        logger.debug("LLM raw content: %s", content[:4000])

        try:
            return json.loads(content)
        except json.JSONDecodeError as parse_err:
            snippet = content[:500]
            raise RuntimeError(
                f"LLM returned non-JSON content (first 500 chars): {snippet}"
            ) from parse_err

    @staticmethod
    def _parse_cue(entry: Any) -> Optional[SoundEffectCue]:
        if not isinstance(entry, dict):
            return None
        position = str(entry.get("position") or "").strip()
        if not position:
            return None
        try:
            duration = float(entry.get("duration") or 0.0)
        except (TypeError, ValueError):
            duration = 0.0
        intensity = str(entry.get("intensity") or "").strip().lower()
        if intensity not in INTENSITIES:
            intensity = "foreground"
        return SoundEffectCue(
            description=str(entry.get("description") or "").strip(),
            position=position,
            duration=duration,
            intensity=intensity,  # type: ignore[arg-type]
        )

    def generate(self, transcription: str) -> List[SoundEffectCue]:
        if not transcription or not transcription.strip():
            raise ValueError("Transcription is required to generate sound effects.")

        system_prompt = _load_prompt("cue_system_prompt.md").strip()
        user_prompt = Template(_load_prompt("cue_user_prompt.md")).safe_substitute(
            min_cues=self.config.min_cues,
            transcription=transcription.strip(),
        )
        response_format = {
            "type": "json_schema",
            "json_schema": {
                "name": "generate_sound_effects",
                "strict": True,
                "schema": SOUND_EFFECTS_SCHEMA,
            },
        }

        logger.info("Requesting sound effect cues from %s", self.config.llm_model)
        result = self._call_chat(system_prompt, user_prompt, response_format=response_format)

        entries = result.get("sound_effects") if isinstance(result, dict) else None
        if not isinstance(entries, list):
            raise RuntimeError("LLM result missing 'sound_effects' list.")

        cues: List[SoundEffectCue] = []
        for entry in entries:
            cue = self._parse_cue(entry)
            if cue is None:
                logger.warning("Skipping sound effect entry without position: %r", entry)
                continue
            cues.append(cue)
        logger.info("Received %d sound effect cues", len(cues))
        return cues
