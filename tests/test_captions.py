from __future__ import annotations

import pytest

from video_digest.captions.generator import (
    CAPTION_TEMPLATES,
    GENERIC_TEMPLATES,
    caption_window_count,
    generate_captions,
    to_captions,
)
from video_digest.captions.timefmt import format_srt_timestamp, format_time_range, format_timestamp
from video_digest.models import ContentType, TranscriptSegment


def test_short_video_gets_exactly_one_caption() -> None:
    captions = generate_captions(5000, ContentType.TUTORIAL)

    assert len(captions) == 1
    assert (captions[0].start_ms, captions[0].end_ms) == (0, 5000)


def test_zero_duration_gets_one_empty_window() -> None:
    captions = generate_captions(0, ContentType.UNKNOWN)

    assert [(caption.start_ms, caption.end_ms) for caption in captions] == [(0, 0)]


@pytest.mark.parametrize("duration_ms", [0, 1, 14_999, 15_000, 15_001, 44_000, 600_000, 3_599_999])
def test_captions_partition_the_whole_duration(duration_ms: int) -> None:
    captions = generate_captions(duration_ms, ContentType.NEWS)

    assert sum(caption.end_ms - caption.start_ms for caption in captions) == duration_ms
    assert captions[0].start_ms == 0
    assert captions[-1].end_ms == duration_ms
    for previous, current in zip(captions, captions[1:]):
        assert current.start_ms == previous.end_ms
        assert previous.end_ms - previous.start_ms == 15_000


def test_last_window_is_clamped_to_duration() -> None:
    captions = generate_captions(44_000, ContentType.TUTORIAL)

    assert [(caption.start_ms, caption.end_ms) for caption in captions] == [
        (0, 15_000),
        (15_000, 30_000),
        (30_000, 44_000),
    ]


def test_templates_cycle_and_first_caption_names_topic() -> None:
    templates = CAPTION_TEMPLATES[ContentType.TUTORIAL]
    captions = generate_captions(15_000 * (len(templates) + 1), ContentType.TUTORIAL, main_topic="knots")

    assert captions[0].text == "Welcome to this tutorial on knots. Let's start with the fundamentals."
    assert captions[1].text == templates[1]
    assert captions[len(templates)].text == captions[0].text


def test_missing_topic_uses_default_phrase() -> None:
    captions = generate_captions(1000, ContentType.SPORTS)

    assert captions[0].text == "Welcome to today's coverage of this topic."


def test_types_without_dedicated_set_use_generic_templates() -> None:
    captions = generate_captions(30_000, ContentType.VLOG, main_topic="mornings")

    assert captions[0].text == "Welcome to this content about mornings."
    assert captions[1].text == GENERIC_TEMPLATES[1]


def test_every_template_set_has_at_least_twelve_entries() -> None:
    assert len(GENERIC_TEMPLATES) == 15
    assert all(len(templates) >= 12 for templates in CAPTION_TEMPLATES.values())
    assert all("{topic}" in templates[0] for templates in CAPTION_TEMPLATES.values())


def test_custom_segment_length() -> None:
    captions = generate_captions(25_000, ContentType.UNKNOWN, segment_ms=10_000)

    assert [(caption.start_ms, caption.end_ms) for caption in captions] == [
        (0, 10_000),
        (10_000, 20_000),
        (20_000, 25_000),
    ]


def test_caption_window_count_rejects_non_positive_segment() -> None:
    assert caption_window_count(30_001, 15_000) == 3
    with pytest.raises(ValueError, match="segment_ms"):
        caption_window_count(1000, 0)


def test_to_captions_maps_segments_in_start_order() -> None:
    segments = [
        TranscriptSegment(start_ms=4000, end_ms=6000, text="second", speaker_id=2),
        TranscriptSegment(start_ms=0, end_ms=4000, text="first", confidence=0.7),
    ]

    captions = to_captions(segments)

    assert [(caption.start_ms, caption.end_ms, caption.text) for caption in captions] == [
        (0, 4000, "first"),
        (4000, 6000, "second"),
    ]


def test_to_captions_of_nothing_is_empty() -> None:
    assert to_captions([]) == []


@pytest.mark.parametrize(
    ("milliseconds", "expected"),
    [(0, "00:00"), (59_999, "00:59"), (61_000, "01:01"), (3_600_000, "60:00"), (-5, "00:00")],
)
def test_format_timestamp(milliseconds: int, expected: str) -> None:
    assert format_timestamp(milliseconds) == expected


def test_format_time_range() -> None:
    assert format_time_range(15_000, 30_000) == "00:15 - 00:30"


@pytest.mark.parametrize(
    ("milliseconds", "expected"),
    [(0, "00:00:00,000"), (15_250, "00:00:15,250"), (3_723_004, "01:02:03,004")],
)
def test_format_srt_timestamp(milliseconds: int, expected: str) -> None:
    assert format_srt_timestamp(milliseconds) == expected
