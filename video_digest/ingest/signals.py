from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from video_digest.models import TranscriptionResult, TranscriptSegment, VideoSignals, VisualDetection

logger = logging.getLogger(__name__)

# snake_case field -> accepted camelCase alias
_SIGNAL_ALIASES = {
    "duration_ms": "durationMs",
    "visual_elements": "visualElements",
    "has_slides": "hasSlides",
    "speaker_count": "speakerCount",
}
_SEGMENT_ALIASES = {
    "start_ms": "startMs",
    "end_ms": "endMs",
    "speaker_id": "speakerId",
}


def build_signals(
    title: str | None,
    transcript: str | None,
    duration_ms: int,
    visual_elements: Iterable[Any] = (),
    has_slides: bool = False,
    speaker_count: int = 0,
) -> VideoSignals:
    """Normalize raw values into an immutable ``VideoSignals`` record."""

    return VideoSignals(
        title=title or "",
        transcript=transcript or "",
        duration_ms=max(int(duration_ms), 0),
        visual_elements=tuple(_clean_labels(visual_elements)),
        has_slides=bool(has_slides),
        speaker_count=max(int(speaker_count), 0),
    )


def signals_from_payload(payload: dict[str, Any]) -> VideoSignals:
    """Build signals from a JSON-style mapping with snake_case or camelCase keys."""

    if not isinstance(payload, dict):
        raise ValueError("Signals payload must be a JSON object.")

    try:
        visual_elements = _field(payload, "visual_elements", _SIGNAL_ALIASES, default=[]) or []
        if isinstance(visual_elements, str) or not isinstance(visual_elements, Iterable):
            raise ValueError("visual_elements must be a list of strings.")
        return build_signals(
            title=_optional_str(payload.get("title")),
            transcript=_optional_str(payload.get("transcript")),
            duration_ms=int(_field(payload, "duration_ms", _SIGNAL_ALIASES, default=0) or 0),
            visual_elements=visual_elements,
            has_slides=_as_bool(_field(payload, "has_slides", _SIGNAL_ALIASES, default=False)),
            speaker_count=int(_field(payload, "speaker_count", _SIGNAL_ALIASES, default=0) or 0),
        )
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid signals payload: {exc}") from exc


def segments_from_payload(rows: Iterable[Any]) -> list[TranscriptSegment]:
    """Parse timed transcript rows, dropping rows whose end does not follow their start."""

    segments: list[TranscriptSegment] = []
    for idx, row in enumerate(rows, start=1):
        if not isinstance(row, dict):
            raise ValueError(f"Segment row {idx} must be an object.")
        try:
            start_ms = int(_field(row, "start_ms", _SEGMENT_ALIASES))
            end_ms = int(_field(row, "end_ms", _SEGMENT_ALIASES))
            speaker_id = _field(row, "speaker_id", _SEGMENT_ALIASES, default=None)
            segment = TranscriptSegment(
                start_ms=start_ms,
                end_ms=end_ms,
                text=str(row.get("text", "")),
                confidence=float(row.get("confidence", 1.0)),
                speaker_id=int(speaker_id) if speaker_id is not None else None,
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"Segment row {idx} is invalid: {exc}") from exc

        if segment.end_ms <= segment.start_ms:
            logger.warning(
                "Dropping segment row %d: end_ms=%d does not follow start_ms=%d",
                idx,
                segment.end_ms,
                segment.start_ms,
            )
            continue
        segments.append(segment)

    return segments


def load_signals(path: str | Path) -> tuple[VideoSignals, list[TranscriptSegment]]:
    """Read a signals JSON file; the optional ``segments`` array carries real caption timing."""

    source_path = Path(path)
    if not source_path.exists():
        raise FileNotFoundError(f"Signals file not found: {source_path}")

    try:
        payload = json.loads(source_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Signals file is not valid JSON: {source_path}") from exc

    if not isinstance(payload, dict):
        raise ValueError("Signals file root must be a JSON object.")

    raw_segments = payload.get("segments") or []
    if not isinstance(raw_segments, list):
        raise ValueError("segments must be a JSON array.")

    signals = signals_from_payload(payload)
    segments = segments_from_payload(raw_segments)
    logger.debug("Loaded signals for %r with %d segments", signals.title, len(segments))
    return signals, segments


def signals_from_collaborators(
    title: str,
    duration_ms: int,
    transcription: TranscriptionResult,
    detection: VisualDetection,
) -> VideoSignals:
    """Merge transcriber and visual analyzer output into pipeline input."""

    speaker_ids = {segment.speaker_id for segment in transcription.segments if segment.speaker_id is not None}
    if speaker_ids:
        speaker_count = len(speaker_ids)
    elif transcription.segments:
        speaker_count = 1
    else:
        speaker_count = 0

    return build_signals(
        title=title,
        transcript=transcription.full_text,
        duration_ms=duration_ms,
        visual_elements=[*detection.objects, *detection.text],
        has_slides=detection.has_slides,
        speaker_count=speaker_count,
    )


_MISSING = object()


def _field(row: dict[str, Any], name: str, aliases: dict[str, str], default: Any = _MISSING) -> Any:
    if name in row:
        return row[name]
    alias = aliases.get(name)
    if alias and alias in row:
        return row[alias]
    if default is _MISSING:
        raise KeyError(name)
    return default


def _clean_labels(values: Iterable[Any]) -> list[str]:
    labels: list[str] = []
    for value in values:
        if value is None:
            continue
        label = str(value).strip()
        if label:
            labels.append(label)
    return labels


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)
