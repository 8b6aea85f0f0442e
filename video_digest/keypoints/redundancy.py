from __future__ import annotations

from video_digest.models import ScoredSentence

DEFAULT_SIMILARITY_THRESHOLD = 0.6


def jaccard_similarity(left: str, right: str) -> float:
    """Jaccard overlap of lower-cased whitespace token sets."""

    left_words = set(left.lower().split())
    right_words = set(right.lower().split())
    union = left_words | right_words
    if not union:
        return 1.0
    return len(left_words & right_words) / len(union)


def filter_redundancy(
    ranked: list[ScoredSentence],
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
) -> list[ScoredSentence]:
    """Greedily keep ranked sentences that are not near-duplicates of anything already kept.

    Walks ``ranked`` once; a candidate is dropped when its similarity to any kept
    sentence exceeds ``threshold``. The first sentence is always kept.
    """

    kept: list[ScoredSentence] = []
    for candidate in ranked:
        if _is_redundant(candidate, kept, threshold=threshold):
            continue
        kept.append(candidate)
    return kept


def _is_redundant(candidate: ScoredSentence, kept: list[ScoredSentence], *, threshold: float) -> bool:
    return any(jaccard_similarity(candidate.text, existing.text) > threshold for existing in kept)
