from __future__ import annotations

import asyncio
import functools
import hashlib
import logging
from collections.abc import Sequence
from concurrent.futures import Executor, Future

from video_digest.captions.generator import DEFAULT_SEGMENT_MS, generate_captions, to_captions
from video_digest.classify.content_classifier import classify_signals
from video_digest.config import Settings
from video_digest.keypoints.formatter import extract_key_points
from video_digest.models import ContentType, TranscriptSegment, VideoSignals, VideoSummary
from video_digest.summary.generator import generate_summary

logger = logging.getLogger(__name__)

BASIC_KEY_POINTS: tuple[str, ...] = (
    "Video content has been analyzed",
    "Information extracted from source material",
    "Content organized for easy understanding",
    "Key insights identified and highlighted",
)


def summarize_video(
    signals: VideoSignals,
    settings: Settings | None = None,
    *,
    segments: Sequence[TranscriptSegment] | None = None,
    video_id: str | None = None,
) -> VideoSummary:
    """Run classify, key-point extraction, summary and captions for one video.

    Real ``segments`` are mapped one-to-one onto captions; without them captions are
    generated from content-type templates. Always returns a summary.
    """

    settings = settings or Settings()
    resolved_id = video_id or summary_id(signals)

    try:
        classification = classify_signals(
            signals,
            count_transcript_occurrences=settings.classifier.count_transcript_occurrences,
        )
        key_points = extract_key_points(
            signals.transcript,
            classification.primary_type,
            settings.keypoints.max_points,
            redundancy_threshold=settings.keypoints.redundancy_threshold,
            min_sentence_length=settings.keypoints.min_sentence_length,
        )
        summary_text = generate_summary(
            signals.transcript,
            classification.primary_type,
            classification.topics,
            signals.visual_elements,
            signals.duration_ms,
            settings.summary,
        )
        if segments:
            captions = to_captions(segments)
        else:
            captions = generate_captions(
                signals.duration_ms,
                classification.primary_type,
                segment_ms=settings.captions.segment_ms,
                main_topic=classification.topics[0] if classification.topics else None,
            )
    except Exception as exc:
        logger.warning("Summarization pipeline failed (%s); returning basic summary.", exc)
        return basic_summary(signals, video_id=resolved_id, segment_ms=settings.captions.segment_ms)

    logger.info(
        "Summarized %r as %s: %d key points, %d captions",
        signals.title,
        classification.primary_type.display_name,
        len(key_points),
        len(captions),
    )
    return VideoSummary(
        id=resolved_id,
        title=signals.title,
        summary_text=summary_text,
        key_points=key_points,
        captions=captions,
        duration_ms=signals.duration_ms,
        classification=classification,
    )


async def summarize_video_async(
    signals: VideoSignals,
    settings: Settings | None = None,
    *,
    segments: Sequence[TranscriptSegment] | None = None,
    video_id: str | None = None,
) -> VideoSummary:
    """Run ``summarize_video`` on the event loop's default executor."""

    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(
        None,
        functools.partial(summarize_video, signals, settings, segments=segments, video_id=video_id),
    )


def submit_summary(
    executor: Executor,
    signals: VideoSignals,
    settings: Settings | None = None,
    *,
    segments: Sequence[TranscriptSegment] | None = None,
    video_id: str | None = None,
) -> Future[VideoSummary]:
    return executor.submit(summarize_video, signals, settings, segments=segments, video_id=video_id)


def basic_summary(
    signals: VideoSignals,
    *,
    video_id: str | None = None,
    segment_ms: int = DEFAULT_SEGMENT_MS,
) -> VideoSummary:
    """Minimal valid summary used when every richer stage has failed."""

    title = signals.title or "untitled"
    return VideoSummary(
        id=video_id or summary_id(signals),
        title=signals.title,
        summary_text=(
            f"This video '{title}' contains content that has been processed for summarization. "
            "The video provides information and insights relevant to its subject matter."
        ),
        key_points=list(BASIC_KEY_POINTS),
        captions=generate_captions(signals.duration_ms, ContentType.UNKNOWN, segment_ms=segment_ms),
        duration_ms=signals.duration_ms,
    )


def summary_id(signals: VideoSignals) -> str:
    """Stable id derived from title and duration so repeated runs match."""

    digest = hashlib.sha256(f"{signals.title}|{signals.duration_ms}".encode("utf-8")).hexdigest()
    return f"summary_{digest[:12]}"
