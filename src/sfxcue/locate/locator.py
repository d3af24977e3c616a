from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from sfxcue.asr import Word

from .normalizer import normalize, normalize_word
from .scorer import score

ACCEPT_THRESHOLD = 0.70
MIN_CONTEXT_WORDS = 3


@dataclass(frozen=True)
class NormalizedWord:
    """
    转录词与其规范化 token 的一一对应关系（token 可能为空占位）。
    """

    index: int
    word: Word
    token: str


@dataclass(frozen=True)
class MatchCandidate:
    window_start_index: int
    window_size: int
    score: float
    matched_text: str


@dataclass(frozen=True)
class LocateResult:
    """
    定位结果：timestamp 为 None 表示未匹配（这是正常分支，而不是错误）。
    """

    timestamp: Optional[float] = None
    candidate: Optional[MatchCandidate] = None
    trace: Tuple[MatchCandidate, ...] = ()

    @property
    def matched(self) -> bool:
        return self.timestamp is not None


def pair_words(words: Sequence[Word]) -> List[NormalizedWord]:
    return [
        NormalizedWord(index=i, word=w, token=normalize_word(w.text))
        for i, w in enumerate(words)
    ]


def window_sizes(phrase_len: int) -> List[int]:
    """
    由严到宽的窗口大小：完整长度、80%、60%、最小上下文 3 个词。

    只保留正数，且每个大小必须严格小于上一个保留的大小。
    """
    sizes: List[int] = []
    for size in (
        phrase_len,
        phrase_len * 8 // 10,
        phrase_len * 6 // 10,
        MIN_CONTEXT_WORDS,
    ):
        if size <= 0:
            continue
        if sizes and size >= sizes[-1]:
            continue
        sizes.append(size)
    return sizes


def locate(phrase: str, words: Sequence[Word], trace: bool = False) -> LocateResult:
    """
    在词级时间戳转录中查找与 phrase 最匹配的连续词窗口，返回其起始时间。

    先尝试与短语等长的窗口，仅在得分不足 ACCEPT_THRESHOLD 时才逐步缩小窗口；
    某个窗口大小一旦达到阈值即返回，不再尝试更小的窗口。
    同一窗口大小下得分相同时取索引最小者。
    """
    target_tokens = normalize(phrase)
    if not target_tokens or not words:
        return LocateResult()

    paired = pair_words(words)
    target_text = " ".join(target_tokens)
    evaluated: List[MatchCandidate] = []

    for size in window_sizes(len(target_tokens)):
        best: MatchCandidate | None = None
        for start in range(len(paired) - size + 1):
            window = paired[start : start + size]
            window_tokens = [p.token for p in window]
            window_text = " ".join(window_tokens)
            candidate = MatchCandidate(
                window_start_index=start,
                window_size=size,
                score=score(target_text, window_text, target_tokens, window_tokens),
                matched_text=" ".join(p.word.text for p in window),
            )
            if trace:
                evaluated.append(candidate)
            if best is None or candidate.score > best.score:
                best = candidate

        if best is not None and best.score >= ACCEPT_THRESHOLD:
            return LocateResult(
                timestamp=words[best.window_start_index].start,
                candidate=best,
                trace=tuple(evaluated),
            )

    return LocateResult(trace=tuple(evaluated))
