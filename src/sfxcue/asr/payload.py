from __future__ import annotations

from typing import Any, Dict, List

from .types import Transcript, Word


def transcript_from_payload(payload: Dict[str, Any]) -> Transcript:
    """
    解析 verbose_json 风格的转录结果：{"text": ..., "words": [{"word", "start", "end"}]}。

    每个词既可以使用 "word" 也可以使用 "text" 字段；缺少时间的词会被跳过。
    """
    words: List[Word] = []
    for entry in payload.get("words") or []:
        if not isinstance(entry, dict):
            continue
        text = entry.get("word")
        if text is None:
            text = entry.get("text")
        start = entry.get("start")
        end = entry.get("end")
        if text is None or start is None or end is None:
            continue
        try:
            words.append(Word(text=str(text), start=float(start), end=float(end)))
        except (TypeError, ValueError):
            continue

    text = payload.get("text")
    if not isinstance(text, str):
        text = " ".join(w.text.strip() for w in words)
    return Transcript(text=text, words=tuple(words))
