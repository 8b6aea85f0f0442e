from __future__ import annotations

import pytest

import video_digest.summary.generator as generator
from video_digest.config import SummarizationConfig
from video_digest.models import ContentType, SummaryStyle
from video_digest.summary import extractive
from video_digest.summary.generator import (
    format_summary,
    generate_summary,
    template_summary,
    truncate_at_sentence,
)

TEN_MINUTES = 600_000
SIX_SENTENCES = " ".join(f"Sentence number {idx} is right here." for idx in range(6))


def _config(**overrides) -> SummarizationConfig:
    return SummarizationConfig(**{"max_summary_length": 5000, **overrides})


def test_educational_summary_interpolates_topic_duration_and_concepts() -> None:
    summary = generate_summary(
        "Variables hold values. Functions group logic.",
        ContentType.TUTORIAL,
        ["technology", "programming"],
        [],
        TEN_MINUTES,
        _config(),
    )

    assert summary.startswith("This educational content on technology spans approximately 10 minutes")
    assert "The material covers key concept, key concept with clear explanations" in summary
    assert "understanding core concepts and practical application and skill development" in summary
    assert "\n\n" in summary


def test_focus_areas_take_precedence_over_topics() -> None:
    summary = generate_summary("", ContentType.EDUCATIONAL_LECTURE, ["science"], [], TEN_MINUTES, _config(focus_areas=["robotics"]))

    assert "educational content on robotics" in summary


def test_presentation_summary_mentions_up_to_three_visual_aids() -> None:
    with_visuals = generate_summary("", ContentType.WEBINAR, [], ["chart", "graph", "slide", "table"], TEN_MINUTES, _config())
    without_visuals = generate_summary("", ContentType.PRESENTATION, [], [], TEN_MINUTES, _config())

    assert "supported by visual aids including chart, graph, slide." in with_visuals
    assert "table" not in with_visuals.split("\n\n")[0]
    assert "delivered through clear verbal communication" in without_visuals


def test_news_summary_caps_extracted_facts_at_five() -> None:
    summary = generate_summary(SIX_SENTENCES, ContentType.DOCUMENTARY, [], [], TEN_MINUTES, _config())

    assert summary.startswith("This news content (10 minutes) covers current events")
    assert summary.count("significant fact") == 5


def test_entertainment_and_generic_dispatch() -> None:
    vlog = generate_summary("", ContentType.VLOG, [], [], TEN_MINUTES, _config())
    other = generate_summary("", ContentType.SPORTS, [], [], TEN_MINUTES, _config())

    assert vlog.startswith("This entertainment content (10 minutes)")
    assert "engaging storytelling, dynamic presentation, audience interaction" in vlog
    assert other.startswith("This content (10 minutes) explores the main subject")


def test_duration_minutes_use_integer_division() -> None:
    summary = generate_summary("", ContentType.UNKNOWN, [], [], 119_999, _config())

    assert summary.startswith("This content (1 minutes)")


def test_default_config_truncates_at_sentence_boundary() -> None:
    summary = generate_summary("", ContentType.TUTORIAL, ["technology"], [], TEN_MINUTES)

    assert len(summary) <= 500
    assert summary.endswith(".")
    assert summary.startswith("This educational content on technology")


def test_brief_style_keeps_first_two_sentences() -> None:
    summary = generate_summary("", ContentType.GAMING, ["design"], [], TEN_MINUTES, _config(summary_style=SummaryStyle.BRIEF))

    assert summary == (
        "This content (10 minutes) explores design through thoughtful analysis and clear presentation. "
        "The material addresses valuable insight with appropriate depth and clarity."
    )


def test_technical_style_adds_prefix() -> None:
    summary = generate_summary("", ContentType.PRESENTATION, [], [], TEN_MINUTES, _config(summary_style=SummaryStyle.TECHNICAL))

    assert summary.startswith("Technical Analysis: This presentation (10 minutes)")


def test_casual_style_applies_substitutions() -> None:
    summary = generate_summary("", ContentType.UNKNOWN, [], [], TEN_MINUTES, _config(summary_style=SummaryStyle.CASUAL))

    assert summary.startswith("This video (10 minutes) explores")
    assert "It addresses valuable insight" in summary
    assert "The material" not in summary


def test_format_summary_truncates_before_styling() -> None:
    config = SummarizationConfig(max_summary_length=10, summary_style=SummaryStyle.TECHNICAL)

    assert format_summary("One. Two. Three.", config) == "Technical Analysis: One. Two."


@pytest.mark.parametrize(
    ("text", "max_length", "expected"),
    [
        ("One. Two. Three.", 100, "One. Two. Three."),
        ("One. Two. Three.", 10, "One. Two."),
        ("One! Two? Three.", 9, "One! Two?"),
        ("abcdefghijklmnop", 10, "abcdefg..."),
        ("abcdefghijklmnop", 3, "abc"),
    ],
)
def test_truncate_at_sentence(text: str, max_length: int, expected: str) -> None:
    assert truncate_at_sentence(text, max_length) == expected


def test_render_failure_falls_back_to_template(monkeypatch) -> None:
    def _boom(*args, **kwargs):
        raise RuntimeError("formatting exploded")

    monkeypatch.setattr(generator, "format_summary", _boom)

    summary = generate_summary("", ContentType.TUTORIAL, ["technology"], [], TEN_MINUTES)

    assert summary == (
        "This tutorial (10 minutes) provides step-by-step guidance on technology "
        "with practical demonstrations and clear instructions."
    )


@pytest.mark.parametrize(
    ("content_type", "fragment"),
    [
        (ContentType.TUTORIAL, "This tutorial (3 minutes) provides step-by-step guidance on various topics"),
        (ContentType.EDUCATIONAL_LECTURE, "This educational lecture (3 minutes) covers various topics"),
        (ContentType.PRESENTATION, "This presentation (3 minutes) delivers professional insights on various topics"),
        (ContentType.NEWS, "This video content (3 minutes) explores various topics"),
    ],
)
def test_template_summary_per_type(content_type: ContentType, fragment: str) -> None:
    assert template_summary(content_type, [], 180_000).startswith(fragment)


def test_extractive_placeholders_repeat_count_times() -> None:
    assert extractive.extract_key_concepts(3) == ["key concept"] * 3
    assert extractive.extract_key_points(2) == ["important point"] * 2
    assert extractive.extract_key_facts(0) == []
    assert extractive.extract_key_insights(1) == ["valuable insight"]
    assert extractive.learning_objectives() == [
        "understanding core concepts",
        "practical application",
        "skill development",
    ]
