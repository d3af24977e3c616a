from __future__ import annotations

import unicodedata
from typing import List


def _keep_char(ch: str) -> bool:
    # 仅保留字母（L*）、数字（N*）与空白
    return ch.isspace() or unicodedata.category(ch)[0] in {"L", "N"}


def normalize(text: str) -> List[str]:
    """
    将任意文本规范化为 token 列表。

    - 小写；
    - NFKD 分解，使带重音的字符与基础字符可比；
    - 删除所有非字母/数字/空白字符（包括分解后残留的组合符号）；
    - 合并空白并按空白切分。

    文本不含任何字母数字时返回空列表。
    """
    if not text:
        return []
    decomposed = unicodedata.normalize("NFKD", text.lower())
    cleaned = "".join(ch for ch in decomposed if _keep_char(ch))
    return cleaned.split()


def normalize_word(text: str) -> str:
    """
    转录中单个词的规范化结果（0 或 1 个 token，空字符串表示占位）。
    """
    return " ".join(normalize(text))
