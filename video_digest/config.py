from __future__ import annotations

import json
import os
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from video_digest.models import SummaryStyle

DEFAULT_CONFIG_PATH = Path("configs/default.yaml")
ENV_PREFIX = "VIDEO_DIGEST_"


class ClassifierSettings(BaseModel):
    count_transcript_occurrences: bool = True


class KeyPointSettings(BaseModel):
    max_points: int = Field(default=8, ge=0)
    redundancy_threshold: float = Field(default=0.6, ge=0.0, le=1.0)
    min_sentence_length: int = Field(default=10, ge=0)


class SummarizationConfig(BaseModel):
    max_summary_length: int = Field(default=500, gt=0)
    summary_style: SummaryStyle = SummaryStyle.COMPREHENSIVE
    include_timestamps: bool = True
    focus_areas: list[str] = Field(default_factory=list)


class CaptionSettings(BaseModel):
    segment_ms: int = Field(default=15000, gt=0)


class OutputSettings(BaseModel):
    output_dir: Path = Path("data/outputs")


class LoggingSettings(BaseModel):
    level: str = "INFO"
    log_file: Path | None = None


class Settings(BaseModel):
    classifier: ClassifierSettings = Field(default_factory=ClassifierSettings)
    keypoints: KeyPointSettings = Field(default_factory=KeyPointSettings)
    summary: SummarizationConfig = Field(default_factory=SummarizationConfig)
    captions: CaptionSettings = Field(default_factory=CaptionSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load typed settings from YAML (if present) with environment-variable overrides.

    Overrides use ``VIDEO_DIGEST_<SECTION>__<KEY>``, e.g.
    ``VIDEO_DIGEST_KEYPOINTS__MAX_POINTS=5``.
    """

    resolved_path = Path(
        config_path
        or os.getenv(f"{ENV_PREFIX}CONFIG")
        or DEFAULT_CONFIG_PATH
    )
    raw_config: dict[str, Any] = {}
    if resolved_path.exists():
        loaded = yaml.safe_load(resolved_path.read_text(encoding="utf-8")) or {}
        if not isinstance(loaded, dict):
            raise ValueError(f"Configuration root must be a mapping: {resolved_path}")
        raw_config = loaded

    data = Settings.model_validate(raw_config).model_dump(mode="python")

    for key, raw_value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue

        suffix = key[len(ENV_PREFIX) :]
        if suffix == "CONFIG":
            continue

        path = [part.lower() for part in suffix.split("__")]
        _apply_override(data, path, raw_value)

    return Settings.model_validate(data)


def _apply_override(data: dict[str, Any], path: list[str], raw_value: str) -> None:
    current: Any = data
    for segment in path[:-1]:
        if not isinstance(current, dict) or segment not in current:
            return
        current = current[segment]

    if not isinstance(current, dict) or path[-1] not in current:
        return

    current[path[-1]] = _coerce_value(raw_value, current[path[-1]])


def _coerce_value(raw_value: str, existing_value: Any) -> Any:
    if isinstance(existing_value, bool):
        return raw_value.lower() in {"1", "true", "yes", "on"}
    if isinstance(existing_value, int):
        return int(raw_value)
    if isinstance(existing_value, float):
        return float(raw_value)
    if isinstance(existing_value, Enum):
        return raw_value.lower()
    if isinstance(existing_value, list):
        if raw_value.lstrip().startswith("["):
            return json.loads(raw_value)
        return [item.strip() for item in raw_value.split(",") if item.strip()]
    if isinstance(existing_value, Path):
        return Path(raw_value)
    return raw_value
