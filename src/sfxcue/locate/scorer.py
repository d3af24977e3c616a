from __future__ import annotations

from typing import Sequence

from rapidfuzz.distance import Levenshtein

OVERLAP_WEIGHT = 0.5
SEQUENCE_WEIGHT = 0.3
LENGTH_WEIGHT = 0.2


def levenshtein(a: str, b: str) -> int:
    """
    字符级编辑距离（插入/删除/替换代价均为 1）。
    """
    return Levenshtein.distance(a, b)


def word_overlap(target_tokens: Sequence[str], window_tokens: Sequence[str]) -> float:
    # 空占位 token 同样是集合成员，会计入分母
    target_set = set(target_tokens)
    window_set = set(window_tokens)
    if not target_set or not window_set:
        return 0.0
    return len(target_set & window_set) / max(len(target_set), len(window_set))


def sequence_similarity(a: str, b: str) -> float:
    # 1 - 距离 / 较长串长度；两串均为空时为 1.0
    return Levenshtein.normalized_similarity(a, b)


def length_ratio(a: str, b: str) -> float:
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 1.0
    return min(len(a), len(b)) / max_len


def score(
    target_text: str,
    window_text: str,
    target_tokens: Sequence[str],
    window_tokens: Sequence[str],
) -> float:
    """
    组合得分：词重叠 0.5 + 序列相似度 0.3 + 长度比 0.2，取值 [0, 1]。
    """
    return (
        OVERLAP_WEIGHT * word_overlap(target_tokens, window_tokens)
        + SEQUENCE_WEIGHT * sequence_similarity(target_text, window_text)
        + LENGTH_WEIGHT * length_ratio(target_text, window_text)
    )
