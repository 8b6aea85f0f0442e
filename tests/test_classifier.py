from __future__ import annotations

import pytest

from video_digest.classify.content_classifier import (
    FALLBACK_CONFIDENCE,
    classification_confidence,
    classify,
    classify_signals,
    fallback_classification,
    score_content_types,
)
from video_digest.models import ContentComplexity, ContentType, VideoSignals

TIE_TRANSCRIPT = (
    "First step, drape the tie around your neck. Next step, cross the wide end over. "
    "Make sure the knot sits snug."
)


def test_tutorial_title_transcript_and_duration_all_contribute() -> None:
    details = score_content_types(
        title="How to Tie a Tie Tutorial",
        transcript=TIE_TRANSCRIPT,
        visual_elements=[],
        duration_ms=600_000,
        has_slides=False,
        speaker_count=1,
    )

    assert details.primary_type is ContentType.TUTORIAL
    assert set(details.scores[ContentType.TUTORIAL].contributions) == {"title", "transcript", "duration"}
    assert details.scores[ContentType.TUTORIAL].contributions["title"] == pytest.approx(0.6)
    assert details.scores[ContentType.TUTORIAL].contributions["transcript"] == pytest.approx(0.3)
    assert details.best_score == pytest.approx(1.0)
    assert details.reason_tags[0] == "evidence:title"


def test_classify_returns_tutorial_for_tie_scenario() -> None:
    result = classify(
        title="How to Tie a Tie Tutorial",
        transcript=TIE_TRANSCRIPT,
        visual_elements=[],
        duration_ms=600_000,
        has_slides=False,
        speaker_count=1,
    )

    assert result.primary_type is ContentType.TUTORIAL
    assert result.estimated_duration_ms == 600_000


def test_slides_meeting_is_presentation_or_webinar() -> None:
    result = classify(
        title="Quarterly Business Meeting",
        transcript="",
        visual_elements=[],
        duration_ms=2_400_000,
        has_slides=True,
        speaker_count=0,
    )

    assert result.primary_type in {ContentType.PRESENTATION, ContentType.WEBINAR}
    assert result.primary_type not in {ContentType.ENTERTAINMENT, ContentType.SPORTS, ContentType.MUSIC_VIDEO}
    assert result.topics == ["business"]


def test_multi_speaker_interview_beats_lecture() -> None:
    details = score_content_types(
        title="Conversation with an Expert",
        transcript="",
        visual_elements=[],
        duration_ms=0,
        has_slides=False,
        speaker_count=3,
    )

    interview = details.scores[ContentType.INTERVIEW].score
    lecture = details.scores[ContentType.EDUCATIONAL_LECTURE].score
    assert interview > lecture
    assert interview == pytest.approx(0.7)
    assert details.primary_type is ContentType.INTERVIEW


def test_uninformative_input_is_unknown_beginner() -> None:
    result = classify(title="", transcript="", visual_elements=[], duration_ms=0, has_slides=False, speaker_count=0)

    assert result.primary_type is ContentType.UNKNOWN
    assert result.complexity is ContentComplexity.BEGINNER
    assert result.topics == []
    assert result.confidence == pytest.approx(0.5)


def test_every_type_score_is_clamped() -> None:
    details = score_content_types(
        title="tutorial how to guide step by step learn course lecture lesson presentation meeting",
        transcript="next step " * 50 + "theory concept " * 50,
        visual_elements=["chart", "graph", "slide", "diagram", "table"],
        duration_ms=1_500_000,
        has_slides=True,
        speaker_count=1,
    )

    assert all(0.0 <= type_score.score <= 1.0 for type_score in details.scores.values())


def test_transcript_phrases_count_occurrences_unless_disabled() -> None:
    kwargs = dict(
        title="",
        transcript="next step next step next step",
        visual_elements=[],
        duration_ms=0,
        has_slides=False,
        speaker_count=0,
    )

    by_occurrence = score_content_types(**kwargs)
    by_presence = score_content_types(**kwargs, count_transcript_occurrences=False)

    assert by_occurrence.scores[ContentType.TUTORIAL].score == pytest.approx(0.3)
    assert by_presence.scores[ContentType.TUTORIAL].score == pytest.approx(0.1)


def test_ties_go_to_the_type_declared_first() -> None:
    # "next step" x3 gives TUTORIAL 0.3; the short transcript gives MUSIC_VIDEO 0.3 as well.
    details = score_content_types(
        title="",
        transcript="next step next step next step",
        visual_elements=[],
        duration_ms=0,
        has_slides=False,
        speaker_count=0,
    )

    assert details.scores[ContentType.MUSIC_VIDEO].score == pytest.approx(0.3)
    assert details.primary_type is ContentType.TUTORIAL


def test_summed_contributions_tie_exactly_with_a_single_contribution() -> None:
    # Lecture reaches 0.3 as 0.1 + 0.2; tutorial reaches it from the title alone.
    details = score_content_types(
        title="guide",
        transcript="theory",
        visual_elements=[],
        duration_ms=40 * 60_000,
        has_slides=False,
        speaker_count=0,
    )

    assert details.scores[ContentType.TUTORIAL].score == 0.3
    assert details.scores[ContentType.EDUCATIONAL_LECTURE].score == 0.3
    assert details.primary_type is ContentType.TUTORIAL


@pytest.mark.parametrize(
    ("title", "transcript", "visuals"),
    [
        ("", "", []),
        ("Tech news update", "software " * 400, ["chart", "screen", "person", "laptop", "phone"]),
        ("Cooking travel design", "recipe journey painting data python fitness " * 100, ["box"] * 40),
    ],
)
def test_confidence_is_bounded(title: str, transcript: str, visuals: list[str]) -> None:
    result = classify(title, transcript, visuals, 300_000, False, 1)

    assert 0.0 <= result.confidence <= 1.0


def test_confidence_grows_with_evidence_and_caps_at_one() -> None:
    low = classification_confidence(topic_count=0, transcript_length=0, visual_element_count=0)
    mid = classification_confidence(topic_count=2, transcript_length=1500, visual_element_count=1)
    high = classification_confidence(topic_count=10, transcript_length=5000, visual_element_count=50)

    assert low == pytest.approx(0.5)
    assert mid == pytest.approx(0.5 + 0.2 + 0.2 + 0.05)
    assert high == pytest.approx(1.0)
    assert low <= mid <= high


def test_classify_never_raises_on_malformed_input() -> None:
    result = classify(None, None, None, "not-a-number", False, 0)  # type: ignore[arg-type]

    assert result.primary_type is ContentType.UNKNOWN
    assert result.confidence == pytest.approx(FALLBACK_CONFIDENCE)
    assert result.complexity is ContentComplexity.INTERMEDIATE
    assert result.estimated_duration_ms == 0


@pytest.mark.parametrize(
    ("title", "expected"),
    [
        ("Python Tutorial", ContentType.TUTORIAL),
        ("Intro lesson 3", ContentType.EDUCATIONAL_LECTURE),
        ("Team meeting recap", ContentType.PRESENTATION),
        ("New song release", ContentType.MUSIC_VIDEO),
        ("Evening news", ContentType.NEWS),
        ("Cup match highlights", ContentType.SPORTS),
        ("Funny cats", ContentType.ENTERTAINMENT),
        ("Untitled clip", ContentType.UNKNOWN),
    ],
)
def test_fallback_classification_uses_title_chain(title: str, expected: ContentType) -> None:
    result = fallback_classification(title, "", 60_000)

    assert result.primary_type is expected
    assert result.confidence == pytest.approx(0.6)


def test_fallback_classification_collects_topics_from_text() -> None:
    result = fallback_classification("Python Tutorial", "we write software", 60_000)

    assert result.topics == ["technology", "programming"]


def test_classify_signals_uses_signal_fields() -> None:
    signals = VideoSignals(
        title="Conversation with an Expert",
        transcript="",
        duration_ms=0,
        speaker_count=3,
    )

    assert classify_signals(signals).primary_type is ContentType.INTERVIEW
