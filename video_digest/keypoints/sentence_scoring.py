from __future__ import annotations

import re

from video_digest.models import ContentType, ScoredSentence

GENERIC_KEYWORDS: tuple[str, ...] = ("important", "key", "significant", "main", "primary", "essential")

TYPE_KEYWORDS: dict[ContentType, tuple[str, ...]] = {
    ContentType.TUTORIAL: ("step", "first", "next", "then", "important", "key", "remember"),
    ContentType.EDUCATIONAL_LECTURE: ("concept", "theory", "principle", "important", "significant", "key"),
    ContentType.PRESENTATION: ("recommend", "suggest", "important", "key", "significant", "result"),
    ContentType.NEWS: ("reported", "announced", "confirmed", "according", "official", "breaking"),
    ContentType.DOCUMENTARY: ("history", "discovered", "years", "evidence", "story", "significant"),
    ContentType.INTERVIEW: ("believe", "experience", "think", "challenge", "important", "learned"),
}

QUESTION_WORD_PATTERN = re.compile(r"\b(?:what|how|why|when|where|which)\b")
DIGIT_PATTERN = re.compile(r"\d")
SENTENCE_TERMINATORS = re.compile(r"[.!?]+")
LINE_BREAKS = re.compile(r"[\r\n]+")
# Scores are rounded so sums of tenths and twentieths compare equal.
SCORE_PRECISION = 6


def split_sentences(text: str, min_length: int = 10) -> list[str]:
    """Split on runs of ``.``, ``!`` and ``?`` and drop fragments shorter than ``min_length``."""

    flattened = LINE_BREAKS.sub(" ", text or "")
    sentences = (fragment.strip() for fragment in SENTENCE_TERMINATORS.split(flattened))
    return [sentence for sentence in sentences if len(sentence) >= min_length]


def score_sentence(sentence: str, content_type: ContentType) -> float:
    """Heuristic importance in [0, 1] built from length band, keywords, digits and question words."""

    lowered = sentence.lower()
    length = len(sentence)

    if 50 <= length <= 150:
        score = 0.3
    elif 30 <= length <= 200:
        score = 0.2
    else:
        score = 0.1

    keywords = TYPE_KEYWORDS.get(content_type, GENERIC_KEYWORDS)
    score += sum(1 for keyword in keywords if keyword in lowered) * 0.1

    if DIGIT_PATTERN.search(lowered):
        score += 0.1

    score += len(QUESTION_WORD_PATTERN.findall(lowered)) * 0.05

    return min(round(score, SCORE_PRECISION), 1.0)


def score_sentences(sentences: list[str], content_type: ContentType) -> list[ScoredSentence]:
    return [ScoredSentence(text=sentence, score=score_sentence(sentence, content_type)) for sentence in sentences]


def rank_sentences(scored: list[ScoredSentence]) -> list[ScoredSentence]:
    # sorted() is stable, so equal scores keep transcript order.
    return sorted(scored, key=lambda sentence: -sentence.score)


def score_and_rank(transcript: str, content_type: ContentType, *, min_length: int = 10) -> list[ScoredSentence]:
    return rank_sentences(score_sentences(split_sentences(transcript, min_length=min_length), content_type))
