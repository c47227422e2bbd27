"""Fuzzy subsequence scoring for tree row labels.

Scores follow a simple additive model: consecutive matches earn a growing
run bonus, matches at word starts earn a fixed bonus, and skipped characters
cost a capped gap penalty. Unlike a greedy left-to-right scan, every possible
alignment is considered and the best one is returned.
"""

from __future__ import annotations

from dataclasses import dataclass

WORD_SEPARATORS = "/_- ."
RUN_BASE = 20
RUN_STEP = 4
RUN_CAP = 16
WORD_START_BONUS = 35
GAP_STEP = 2
GAP_CAP = 40
MATCH_BASE = 100


@dataclass(frozen=True)
class FuzzyMatch:
    score: int
    positions: tuple[int, ...]


def _word_start_bonus(folded: str, idx: int) -> int:
    if idx == 0 or folded[idx - 1] in WORD_SEPARATORS:
        return WORD_START_BONUS
    return 0


def _step_score(prev_idx: int, idx: int, run: int) -> tuple[int, int]:
    """Return ``(delta, new_run)`` for matching at ``idx`` after ``prev_idx``."""
    if idx == prev_idx + 1:
        run += 1
        return RUN_BASE + min(RUN_CAP, run * RUN_STEP), run
    gap = idx - prev_idx - 1
    return -min(GAP_CAP, gap * GAP_STEP), 0


def fuzzy_match(query: str, candidate: str) -> FuzzyMatch | None:
    """Match ``query`` as a case-insensitive subsequence of ``candidate``.

    Returns the best-scoring alignment with its matched character positions,
    or ``None`` when ``query`` is empty or not a subsequence. Scores are always
    at least 1.
    """
    if not query:
        return None
    needle = query.casefold()
    folded = candidate.casefold()
    if len(folded) != len(candidate):
        # casefold can change length (e.g. "ß"); positions must index the original
        folded = candidate.lower()
        if len(folded) != len(candidate):
            folded = candidate

    # Each layer maps (candidate_index, run) -> (score, back_key) for one query char.
    layers: list[dict[tuple[int, int], tuple[int, tuple[int, int] | None]]] = []
    previous: dict[tuple[int, int], tuple[int, tuple[int, int] | None]] = {(-1, 0): (0, None)}
    for char in needle:
        current: dict[tuple[int, int], tuple[int, tuple[int, int] | None]] = {}
        for (prev_idx, run), (score, _back) in previous.items():
            idx = folded.find(char, prev_idx + 1)
            while idx >= 0:
                delta, new_run = _step_score(prev_idx, idx, run)
                total = score + delta + _word_start_bonus(folded, idx)
                key = (idx, new_run)
                best = current.get(key)
                if best is None or total > best[0]:
                    current[key] = (total, (prev_idx, run))
                idx = folded.find(char, idx + 1)
        if not current:
            return None
        layers.append(current)
        previous = current

    end_key = max(previous, key=lambda key: (previous[key][0], -key[0]))
    raw_score = previous[end_key][0]

    positions: list[int] = []
    key = end_key
    for layer in reversed(layers):
        positions.append(key[0])
        key = layer[key][1]
    positions.reverse()

    score = raw_score - len(folded) // 5 + MATCH_BASE
    return FuzzyMatch(max(1, score), tuple(positions))


def fuzzy_score(query: str, candidate: str) -> int | None:
    match = fuzzy_match(query, candidate)
    return None if match is None else match.score
