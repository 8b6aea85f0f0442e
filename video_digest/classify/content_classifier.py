from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from video_digest.classify.complexity import analyze_complexity
from video_digest.classify.topics import extract_topics
from video_digest.models import ContentClassification, ContentComplexity, ContentType, VideoSignals

logger = logging.getLogger(__name__)

FALLBACK_CONFIDENCE = 0.6
# Sums of tenths are rounded so equal evidence compares equal.
SCORE_PRECISION = 6


@dataclass(slots=True, frozen=True)
class TypeRule:
    """Weighted evidence that votes for one content type.

    Duration windows are inclusive ranges of whole minutes; ``None`` leaves a side open.
    """

    title_keywords: tuple[str, ...] = ()
    title_weight: float = 0.3
    transcript_phrases: tuple[str, ...] = ()
    transcript_weight: float = 0.1
    duration_minutes: tuple[int | None, int | None] | None = None
    duration_bonus: float = 0.0
    single_speaker_bonus: float = 0.0
    multi_speaker_bonus: float = 0.0
    slides_bonus: float = 0.0
    visual_vocabulary: tuple[str, ...] = ()
    visual_weight: float = 0.1
    short_transcript_words: int = 0
    short_transcript_bonus: float = 0.0


TYPE_RULES: dict[ContentType, TypeRule] = {
    ContentType.TUTORIAL: TypeRule(
        title_keywords=("tutorial", "how to", "guide", "step by step", "learn", "course"),
        transcript_phrases=(
            "first step", "next step", "now we", "let's", "you need to", "make sure", "don't forget",
        ),
        duration_minutes=(5, 30),
        duration_bonus=0.2,
    ),
    ContentType.EDUCATIONAL_LECTURE: TypeRule(
        title_keywords=("lecture", "lesson", "class", "course", "education", "academic"),
        transcript_phrases=(
            "research shows", "according to", "theory", "concept", "principle", "study", "analysis",
        ),
        duration_minutes=(21, None),
        duration_bonus=0.2,
        single_speaker_bonus=0.2,
    ),
    ContentType.PRESENTATION: TypeRule(
        title_keywords=("presentation", "meeting", "conference", "pitch", "proposal"),
        transcript_phrases=("agenda", "objectives", "strategy", "results", "recommendations"),
        slides_bonus=0.4,
        visual_vocabulary=("chart", "graph", "slide", "diagram", "table"),
    ),
    ContentType.ENTERTAINMENT: TypeRule(
        title_keywords=("funny", "comedy", "entertainment", "fun", "hilarious", "vlog"),
        transcript_phrases=("haha", "lol", "amazing", "incredible", "awesome", "wow"),
    ),
    ContentType.MUSIC_VIDEO: TypeRule(
        title_keywords=("song", "music", "audio", "track", "album", "artist", "band"),
        title_weight=0.4,
        duration_minutes=(2, 6),
        duration_bonus=0.2,
        short_transcript_words=50,
        short_transcript_bonus=0.3,
    ),
    ContentType.SPORTS: TypeRule(
        title_keywords=("game", "match", "sport", "team", "player", "score", "championship"),
        transcript_phrases=("goal", "point", "win", "lose", "play", "team", "coach", "referee"),
    ),
    ContentType.NEWS: TypeRule(
        title_keywords=("news", "report", "breaking", "update", "announcement", "press"),
        transcript_phrases=("according to", "sources say", "reported", "announced", "confirmed"),
        duration_minutes=(2, 15),
        duration_bonus=0.2,
    ),
    ContentType.DOCUMENTARY: TypeRule(
        title_keywords=("documentary", "story", "history", "investigation", "behind"),
        transcript_phrases=("once upon", "years ago", "the story", "meanwhile", "however"),
        duration_minutes=(31, None),
        duration_bonus=0.3,
    ),
    ContentType.INTERVIEW: TypeRule(
        title_keywords=("interview", "conversation", "talk", "discussion", "chat"),
        transcript_phrases=("tell us", "what do you think", "how do you", "can you explain"),
        multi_speaker_bonus=0.4,
    ),
    ContentType.WEBINAR: TypeRule(
        title_keywords=("webinar", "online", "virtual", "session", "workshop"),
        transcript_phrases=("questions", "chat", "participants", "attendees"),
        duration_minutes=(31, None),
        duration_bonus=0.2,
        slides_bonus=0.3,
    ),
    ContentType.PRODUCT_DEMO: TypeRule(
        title_keywords=("demo", "unboxing", "review", "product", "showcase", "launch"),
        transcript_phrases=("feature", "let me show you", "this device", "price", "available now"),
        duration_minutes=(2, 15),
        duration_bonus=0.1,
        visual_vocabulary=("product", "device", "phone", "laptop", "box"),
    ),
    ContentType.GAMING: TypeRule(
        title_keywords=("gameplay", "gaming", "playthrough", "walkthrough", "let's play", "speedrun"),
        transcript_phrases=("level", "boss", "respawn", "inventory", "multiplayer", "checkpoint"),
        visual_vocabulary=("controller", "hud", "console"),
    ),
    ContentType.VLOG: TypeRule(
        title_keywords=("vlog", "day in the life", "my day", "diary", "daily"),
        transcript_phrases=("hey guys", "today i", "subscribe", "follow me", "my day"),
        single_speaker_bonus=0.1,
    ),
}

# Ordered title checks used when rule scoring cannot run.
FALLBACK_TITLE_RULES: tuple[tuple[tuple[str, ...], ContentType], ...] = (
    (("tutorial", "how to", "guide"), ContentType.TUTORIAL),
    (("lecture", "lesson", "course"), ContentType.EDUCATIONAL_LECTURE),
    (("presentation", "meeting", "conference"), ContentType.PRESENTATION),
    (("music", "song"), ContentType.MUSIC_VIDEO),
    (("news", "report"), ContentType.NEWS),
    (("sport", "match"), ContentType.SPORTS),
    (("funny", "comedy"), ContentType.ENTERTAINMENT),
)


@dataclass(slots=True)
class TypeScore:
    """Clamped score for one content type plus the raw contribution of each evidence kind."""

    content_type: ContentType
    score: float
    contributions: dict[str, float] = field(default_factory=dict)


@dataclass(slots=True)
class ClassificationDetails:
    """Explainable output of rule scoring across every content type."""

    primary_type: ContentType
    scores: dict[ContentType, TypeScore]
    reason_tags: list[str]

    @property
    def best_score(self) -> float:
        if self.primary_type not in self.scores:
            return 0.0
        return self.scores[self.primary_type].score


def classify(
    title: str,
    transcript: str,
    visual_elements: Sequence[str],
    duration_ms: int,
    has_slides: bool,
    speaker_count: int,
    *,
    count_transcript_occurrences: bool = True,
) -> ContentClassification:
    """Classify a video and attach topics, complexity and confidence. Never raises."""

    try:
        details = score_content_types(
            title=title,
            transcript=transcript,
            visual_elements=visual_elements,
            duration_ms=duration_ms,
            has_slides=has_slides,
            speaker_count=speaker_count,
            count_transcript_occurrences=count_transcript_occurrences,
        )
        topics = extract_topics(title, transcript, visual_elements)
        classification = ContentClassification(
            primary_type=details.primary_type,
            confidence=classification_confidence(
                topic_count=len(topics),
                transcript_length=len(transcript),
                visual_element_count=len(visual_elements),
            ),
            topics=topics,
            complexity=analyze_complexity(transcript),
            estimated_duration_ms=max(0, int(duration_ms)),
        )
    except Exception as exc:
        logger.warning("Rule-based classification failed (%s); using title fallback.", exc)
        return fallback_classification(title, transcript, duration_ms)

    logger.debug(
        "Classified as %s (score %.2f, tags %s)",
        classification.primary_type.value,
        details.best_score,
        details.reason_tags,
    )
    return classification


def classify_signals(signals: VideoSignals, *, count_transcript_occurrences: bool = True) -> ContentClassification:
    return classify(
        title=signals.title,
        transcript=signals.transcript,
        visual_elements=signals.visual_elements,
        duration_ms=signals.duration_ms,
        has_slides=signals.has_slides,
        speaker_count=signals.speaker_count,
        count_transcript_occurrences=count_transcript_occurrences,
    )


def score_content_types(
    *,
    title: str,
    transcript: str,
    visual_elements: Sequence[str],
    duration_ms: int,
    has_slides: bool,
    speaker_count: int,
    count_transcript_occurrences: bool = True,
    max_reason_tags: int = 3,
) -> ClassificationDetails:
    """Score every content type independently and pick the best one.

    Types are visited in enum order and only a strictly higher score replaces the
    current best, so ties go to the type declared first. All-zero evidence yields UNKNOWN.
    """

    title_lower = title.lower()
    transcript_lower = transcript.lower()
    visuals_lower = [str(element).lower() for element in visual_elements]
    duration_minutes = max(0, int(duration_ms)) // 60000
    word_count = len(transcript_lower.split())

    scores: dict[ContentType, TypeScore] = {}
    best_type = ContentType.UNKNOWN
    best_score = 0.0

    for content_type in ContentType:
        rule = TYPE_RULES.get(content_type)
        if rule is None:
            continue

        type_score = _score_rule(
            content_type,
            rule,
            title=title_lower,
            transcript=transcript_lower,
            visuals=visuals_lower,
            duration_minutes=duration_minutes,
            word_count=word_count,
            has_slides=has_slides,
            speaker_count=speaker_count,
            count_transcript_occurrences=count_transcript_occurrences,
        )
        scores[content_type] = type_score

        if type_score.score > best_score:
            best_type = content_type
            best_score = type_score.score

    reason_tags = _reason_tags(scores.get(best_type), max_reason_tags=max_reason_tags)
    return ClassificationDetails(primary_type=best_type, scores=scores, reason_tags=reason_tags)


def classification_confidence(*, topic_count: int, transcript_length: int, visual_element_count: int) -> float:
    """Base 0.5 raised by topic, transcript-length and visual evidence; capped at 1.0."""

    confidence = 0.5
    confidence += min(topic_count * 0.1, 0.3)
    if transcript_length > 1000:
        confidence += 0.2
    confidence += min(visual_element_count * 0.05, 0.2)
    return _clamp(confidence)


def fallback_classification(title: object, transcript: object, duration_ms: object) -> ContentClassification:
    """Title-substring classification used when rule scoring fails."""

    title_text = str(title or "")
    transcript_text = str(transcript or "")
    title_lower = title_text.lower()

    content_type = ContentType.UNKNOWN
    for keywords, candidate in FALLBACK_TITLE_RULES:
        if any(keyword in title_lower for keyword in keywords):
            content_type = candidate
            break

    try:
        estimated_duration_ms = max(0, int(duration_ms))  # type: ignore[call-overload]
    except (TypeError, ValueError):
        estimated_duration_ms = 0

    return ContentClassification(
        primary_type=content_type,
        confidence=FALLBACK_CONFIDENCE,
        topics=extract_topics(title_text, transcript_text),
        complexity=ContentComplexity.INTERMEDIATE,
        estimated_duration_ms=estimated_duration_ms,
    )


def _score_rule(
    content_type: ContentType,
    rule: TypeRule,
    *,
    title: str,
    transcript: str,
    visuals: list[str],
    duration_minutes: int,
    word_count: int,
    has_slides: bool,
    speaker_count: int,
    count_transcript_occurrences: bool,
) -> TypeScore:
    contributions: dict[str, float] = {}

    title_hits = sum(1 for keyword in rule.title_keywords if keyword in title)
    contributions["title"] = title_hits * rule.title_weight

    if count_transcript_occurrences:
        transcript_hits = sum(transcript.count(phrase) for phrase in rule.transcript_phrases)
    else:
        transcript_hits = sum(1 for phrase in rule.transcript_phrases if phrase in transcript)
    contributions["transcript"] = transcript_hits * rule.transcript_weight

    if rule.duration_minutes is not None and _in_range(duration_minutes, rule.duration_minutes):
        contributions["duration"] = rule.duration_bonus

    if speaker_count == 1 and rule.single_speaker_bonus:
        contributions["single_speaker"] = rule.single_speaker_bonus
    if speaker_count > 1 and rule.multi_speaker_bonus:
        contributions["multi_speaker"] = rule.multi_speaker_bonus

    if has_slides and rule.slides_bonus:
        contributions["slides"] = rule.slides_bonus

    visual_hits = sum(
        1 for vocabulary in rule.visual_vocabulary if any(vocabulary in visual for visual in visuals)
    )
    contributions["visual"] = visual_hits * rule.visual_weight

    # An empty transcript is missing evidence, not a short one.
    if rule.short_transcript_bonus and 0 < word_count < rule.short_transcript_words:
        contributions["short_transcript"] = rule.short_transcript_bonus

    contributions = {key: value for key, value in contributions.items() if value > 0}
    return TypeScore(
        content_type=content_type,
        score=_clamp(round(sum(contributions.values()), SCORE_PRECISION)),
        contributions=contributions,
    )


def _in_range(value: int, bounds: tuple[int | None, int | None]) -> bool:
    lower, upper = bounds
    if lower is not None and value < lower:
        return False
    if upper is not None and value > upper:
        return False
    return True


def _reason_tags(type_score: TypeScore | None, *, max_reason_tags: int) -> list[str]:
    if type_score is None or max_reason_tags <= 0:
        return []
    ranked = sorted(type_score.contributions, key=lambda key: (-type_score.contributions[key], key))
    return [f"evidence:{key}" for key in ranked[:max_reason_tags]]


def _clamp(value: float, minimum: float = 0.0, maximum: float = 1.0) -> float:
    return max(minimum, min(maximum, value))
