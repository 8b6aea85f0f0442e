from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any

from video_digest.captions.timefmt import format_srt_timestamp, format_time_range
from video_digest.models import (
    Caption,
    ContentClassification,
    ContentComplexity,
    ContentType,
    VideoSummary,
)


def export_summary(
    summary: VideoSummary,
    output_dir: str | Path,
    *,
    basename: str = "video_summary",
    include_timestamps: bool = True,
) -> dict[str, Path]:
    """Write the summary JSON contract, a caption CSV and an SRT subtitle file."""

    resolved_output_dir = Path(output_dir)
    resolved_output_dir.mkdir(parents=True, exist_ok=True)

    json_path = resolved_output_dir / f"{basename}.json"
    csv_path = resolved_output_dir / f"{basename}_captions.csv"
    srt_path = resolved_output_dir / f"{basename}.srt"

    json_path.write_text(json.dumps(summary_to_dict(summary), indent=2, ensure_ascii=False), encoding="utf-8")
    _write_captions_csv(summary.captions, csv_path, include_timestamps=include_timestamps)
    srt_path.write_text(render_srt(summary.captions), encoding="utf-8")

    return {
        "json": json_path,
        "csv": csv_path,
        "srt": srt_path,
    }


def summary_to_dict(summary: VideoSummary) -> dict[str, Any]:
    classification = summary.classification
    return {
        "id": summary.id,
        "title": summary.title,
        "summary_text": summary.summary_text,
        "key_points": list(summary.key_points),
        "captions": [
            {"start_ms": caption.start_ms, "end_ms": caption.end_ms, "text": caption.text}
            for caption in summary.captions
        ],
        "duration_ms": summary.duration_ms,
        "classification": _classification_to_dict(classification) if classification is not None else None,
    }


def render_srt(captions: list[Caption]) -> str:
    """Render captions as SubRip text with 1-based cue numbers."""

    blocks = []
    for idx, caption in enumerate(captions, start=1):
        blocks.append(
            f"{idx}\n"
            f"{format_srt_timestamp(caption.start_ms)} --> {format_srt_timestamp(caption.end_ms)}\n"
            f"{caption.text}\n"
        )
    return "\n".join(blocks)


def load_video_summary(path: str | Path) -> VideoSummary:
    """Load a summary from the exporter JSON contract."""

    source_path = Path(path)
    if not source_path.exists():
        raise FileNotFoundError(f"Summary file not found: {source_path}")

    try:
        payload = json.loads(source_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Summary file is not valid JSON: {source_path}") from exc
    if not isinstance(payload, dict):
        raise ValueError("Summary contract must be a JSON object.")

    try:
        captions = []
        for idx, row in enumerate(payload.get("captions", []), start=1):
            if not isinstance(row, dict):
                raise ValueError(f"Caption row {idx} must be an object.")
            captions.append(Caption(start_ms=int(row["start_ms"]), end_ms=int(row["end_ms"]), text=str(row["text"])))

        raw_classification = payload.get("classification")
        return VideoSummary(
            id=str(payload["id"]),
            title=str(payload["title"]),
            summary_text=str(payload["summary_text"]),
            key_points=[str(point) for point in payload.get("key_points", [])],
            captions=captions,
            duration_ms=int(payload["duration_ms"]),
            classification=_classification_from_dict(raw_classification) if raw_classification else None,
        )
    except (KeyError, TypeError) as exc:
        raise ValueError(f"Summary contract is missing or has invalid field: {exc}") from exc


def _classification_to_dict(classification: ContentClassification) -> dict[str, Any]:
    return {
        "primary_type": classification.primary_type.value,
        "confidence": round(classification.confidence, 4),
        "topics": list(classification.topics),
        "complexity": classification.complexity.value,
        "estimated_duration_ms": classification.estimated_duration_ms,
    }


def _classification_from_dict(row: dict[str, Any]) -> ContentClassification:
    return ContentClassification(
        primary_type=ContentType(row["primary_type"]),
        confidence=float(row["confidence"]),
        topics=[str(topic) for topic in row.get("topics", [])],
        complexity=ContentComplexity(row["complexity"]),
        estimated_duration_ms=int(row.get("estimated_duration_ms", 0)),
    )


def _write_captions_csv(captions: list[Caption], path: Path, *, include_timestamps: bool) -> None:
    fields = ["index", "start_ms", "end_ms"]
    if include_timestamps:
        fields.append("time_range")
    fields.append("text")

    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=fields)
        writer.writeheader()
        for idx, caption in enumerate(captions, start=1):
            row: dict[str, Any] = {
                "index": idx,
                "start_ms": caption.start_ms,
                "end_ms": caption.end_ms,
                "text": caption.text,
            }
            if include_timestamps:
                row["time_range"] = format_time_range(caption.start_ms, caption.end_ms)
            writer.writerow(row)
