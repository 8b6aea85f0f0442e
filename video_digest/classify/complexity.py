from __future__ import annotations

from video_digest.models import ContentComplexity


def analyze_complexity(transcript: str) -> ContentComplexity:
    """Derive a coarse complexity tier from word count and mean word length."""

    words = (transcript or "").split()
    word_count = len(words)
    if word_count == 0:
        return ContentComplexity.BEGINNER

    avg_word_length = sum(len(word) for word in words) / word_count

    if avg_word_length > 6 and word_count > 2000:
        return ContentComplexity.EXPERT
    if avg_word_length > 5 and word_count > 1000:
        return ContentComplexity.ADVANCED
    if avg_word_length > 4:
        return ContentComplexity.INTERMEDIATE
    return ContentComplexity.BEGINNER
