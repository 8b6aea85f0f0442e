from __future__ import annotations

import json
import logging
from pathlib import Path
from time import perf_counter
from typing import Any, Callable, TypeVar

import typer

from video_digest.captions.generator import generate_captions
from video_digest.classify.content_classifier import classify_signals, score_content_types
from video_digest.config import Settings, load_settings
from video_digest.export.exporter import export_summary, summary_to_dict
from video_digest.ingest.collaborators import StubTranscriber, StubVisualAnalyzer
from video_digest.ingest.signals import load_signals, signals_from_collaborators
from video_digest.logging_config import configure_logging
from video_digest.models import ContentType
from video_digest.pipeline import summarize_video

app = typer.Typer(help="Rule-based video classification, summarization and captioning.")
config_app = typer.Typer(help="Configuration commands.")

app.add_typer(config_app, name="config")

logger = logging.getLogger(__name__)

T = TypeVar("T")

CONFIG_OPTION_HELP = "Path to YAML configuration file."


def _run_with_progress(step_index: int, total_steps: int, label: str, work: Callable[[], T]) -> T:
    typer.echo(f"[{step_index}/{total_steps}] {label}...", err=True)
    started_at = perf_counter()
    try:
        result = work()
    except Exception:
        elapsed = perf_counter() - started_at
        typer.echo(f"[{step_index}/{total_steps}] {label} failed after {elapsed:.1f}s", err=True)
        raise
    elapsed = perf_counter() - started_at
    typer.echo(f"[{step_index}/{total_steps}] {label} done in {elapsed:.1f}s", err=True)
    return result


def _bootstrap(config_path: Path) -> Settings:
    settings = load_settings(config_path)
    configure_logging(settings.logging)
    logger.debug("Loaded runtime settings from %s", config_path)
    return settings


def _fail(exc: Exception) -> typer.Exit:
    logger.error("Command failed: %s", exc)
    typer.echo(f"Error: {exc}", err=True)
    return typer.Exit(code=1)


@config_app.command("show")
def show_config(
    config_path: Path = typer.Option(
        Path("configs/default.yaml"),
        "--config",
        "-c",
        envvar="VIDEO_DIGEST_CONFIG",
        help=CONFIG_OPTION_HELP,
    )
) -> None:
    """Print resolved runtime configuration."""

    settings = _bootstrap(config_path)
    typer.echo(json.dumps(settings.model_dump(mode="json"), indent=2))


@app.command("classify")
def classify_command(
    signals_path: Path = typer.Argument(..., help="Path to a signals JSON file."),
    config_path: Path = typer.Option(
        Path("configs/default.yaml"),
        "--config",
        "-c",
        envvar="VIDEO_DIGEST_CONFIG",
        help=CONFIG_OPTION_HELP,
    ),
) -> None:
    """Classify a video and print the verdict with per-type rule scores."""

    settings = _bootstrap(config_path)
    try:
        signals, _ = load_signals(signals_path)
    except (FileNotFoundError, ValueError) as exc:
        raise _fail(exc) from exc

    count_occurrences = settings.classifier.count_transcript_occurrences
    classification = classify_signals(signals, count_transcript_occurrences=count_occurrences)
    details = score_content_types(
        title=signals.title,
        transcript=signals.transcript,
        visual_elements=signals.visual_elements,
        duration_ms=signals.duration_ms,
        has_slides=signals.has_slides,
        speaker_count=signals.speaker_count,
        count_transcript_occurrences=count_occurrences,
    )

    typer.echo(
        json.dumps(
            {
                "primary_type": classification.primary_type.value,
                "confidence": round(classification.confidence, 4),
                "topics": classification.topics,
                "complexity": classification.complexity.value,
                "reason_tags": details.reason_tags,
                "scores": {
                    content_type.value: round(type_score.score, 4)
                    for content_type, type_score in details.scores.items()
                },
            },
            indent=2,
        )
    )


@app.command("summarize")
def summarize_command(
    signals_path: Path = typer.Argument(..., help="Path to a signals JSON file."),
    config_path: Path = typer.Option(
        Path("configs/default.yaml"),
        "--config",
        "-c",
        envvar="VIDEO_DIGEST_CONFIG",
        help=CONFIG_OPTION_HELP,
    ),
) -> None:
    """Summarize a video and print the full summary contract as JSON."""

    settings = _bootstrap(config_path)
    try:
        signals, segments = load_signals(signals_path)
    except (FileNotFoundError, ValueError) as exc:
        raise _fail(exc) from exc

    summary = summarize_video(signals, settings, segments=segments)
    typer.echo(json.dumps(summary_to_dict(summary), indent=2, ensure_ascii=False))


@app.command("captions")
def captions_command(
    duration_ms: int = typer.Argument(..., min=0, help="Video duration in milliseconds."),
    content_type: ContentType = typer.Option(ContentType.UNKNOWN, "--content-type", help="Content type template set."),
    topic: str | None = typer.Option(None, help="Main topic interpolated into the opening caption."),
    config_path: Path = typer.Option(
        Path("configs/default.yaml"),
        "--config",
        "-c",
        envvar="VIDEO_DIGEST_CONFIG",
        help=CONFIG_OPTION_HELP,
    ),
) -> None:
    """Print template captions covering the whole duration."""

    settings = _bootstrap(config_path)
    captions = generate_captions(
        duration_ms,
        content_type,
        segment_ms=settings.captions.segment_ms,
        main_topic=topic,
    )
    typer.echo(
        json.dumps(
            [{"start_ms": caption.start_ms, "end_ms": caption.end_ms, "text": caption.text} for caption in captions],
            indent=2,
        )
    )


@app.command("run")
def run_pipeline(
    signals_path: Path = typer.Argument(..., help="Path to a signals JSON file."),
    output_dir: Path | None = typer.Option(
        None,
        "--output-dir",
        "-o",
        help="Directory for JSON/CSV/SRT outputs. Defaults to output.output_dir.",
    ),
    basename: str | None = typer.Option(None, help="Base filename for exported artifacts. Defaults to the summary id."),
    config_path: Path = typer.Option(
        Path("configs/default.yaml"),
        "--config",
        "-c",
        envvar="VIDEO_DIGEST_CONFIG",
        help=CONFIG_OPTION_HELP,
    ),
) -> None:
    """Load signals, summarize and export every artifact with staged progress."""

    settings = _bootstrap(config_path)
    resolved_output_dir = output_dir or settings.output.output_dir
    total_steps = 3

    try:
        signals, segments = _run_with_progress(1, total_steps, "Load signals", lambda: load_signals(signals_path))
        summary = _run_with_progress(
            2,
            total_steps,
            "Summarize video",
            lambda: summarize_video(signals, settings, segments=segments),
        )
        exported = _run_with_progress(
            3,
            total_steps,
            "Export outputs",
            lambda: export_summary(
                summary,
                resolved_output_dir,
                basename=basename or summary.id,
                include_timestamps=settings.summary.include_timestamps,
            ),
        )
    except (FileNotFoundError, RuntimeError, ValueError) as exc:
        raise _fail(exc) from exc

    classification = summary.classification
    typer.echo(
        json.dumps(
            {
                "status": "ok",
                "summary_id": summary.id,
                "title": summary.title,
                "content_type": classification.primary_type.value if classification else None,
                "key_point_count": len(summary.key_points),
                "caption_count": len(summary.captions),
                "outputs": {key: str(path) for key, path in exported.items()},
            },
            indent=2,
        )
    )


@app.command("simulate")
def simulate(
    title: str = typer.Argument(..., help="Video title."),
    duration_ms: int = typer.Argument(..., min=0, help="Video duration in milliseconds."),
    objects: list[str] = typer.Option(["person", "screen"], "--object", help="Canned visual object label (repeatable)."),
    slides: bool = typer.Option(False, help="Report slides from the visual analyzer."),
    config_path: Path = typer.Option(
        Path("configs/default.yaml"),
        "--config",
        "-c",
        envvar="VIDEO_DIGEST_CONFIG",
        help=CONFIG_OPTION_HELP,
    ),
) -> None:
    """Summarize a video built from the deterministic stub transcriber and visual analyzer."""

    settings = _bootstrap(config_path)
    transcription = StubTranscriber(duration_ms, segment_ms=settings.captions.segment_ms).transcribe(title)
    detection = StubVisualAnalyzer(objects=objects, has_slides=slides).detect_visual_elements([])
    signals = signals_from_collaborators(title, duration_ms, transcription, detection)

    summary = summarize_video(signals, settings, segments=transcription.segments)
    payload: dict[str, Any] = summary_to_dict(summary)
    payload["transcription"] = {
        "language": transcription.language,
        "confidence": transcription.confidence,
        "segment_count": len(transcription.segments),
    }
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    app()
