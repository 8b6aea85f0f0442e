from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ContentType(str, Enum):
    """Closed set of genres a video can be classified into."""

    TUTORIAL = "tutorial"
    EDUCATIONAL_LECTURE = "educational_lecture"
    PRESENTATION = "presentation"
    ENTERTAINMENT = "entertainment"
    MUSIC_VIDEO = "music_video"
    SPORTS = "sports"
    NEWS = "news"
    DOCUMENTARY = "documentary"
    INTERVIEW = "interview"
    WEBINAR = "webinar"
    PRODUCT_DEMO = "product_demo"
    GAMING = "gaming"
    VLOG = "vlog"
    UNKNOWN = "unknown"

    @property
    def display_name(self) -> str:
        return self.value.replace("_", " ")


class ContentComplexity(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"


class SummaryStyle(str, Enum):
    BRIEF = "brief"
    COMPREHENSIVE = "comprehensive"
    TECHNICAL = "technical"
    CASUAL = "casual"


@dataclass(slots=True, frozen=True)
class VideoSignals:
    """Pre-extracted facts about one video; the only input of the pipeline."""

    title: str
    transcript: str
    duration_ms: int
    visual_elements: tuple[str, ...] = ()
    has_slides: bool = False
    speaker_count: int = 0


@dataclass(slots=True)
class ContentClassification:
    """Classifier verdict consumed by the summary, key-point and caption stages."""

    primary_type: ContentType
    confidence: float
    topics: list[str]
    complexity: ContentComplexity
    estimated_duration_ms: int = 0


@dataclass(slots=True)
class ScoredSentence:
    text: str
    score: float


@dataclass(slots=True)
class TranscriptSegment:
    """Timed transcript text as delivered by a transcriber."""

    start_ms: int
    end_ms: int
    text: str
    confidence: float = 1.0
    speaker_id: int | None = None


@dataclass(slots=True)
class TranscriptionResult:
    full_text: str
    segments: list[TranscriptSegment]
    confidence: float
    language: str


@dataclass(slots=True)
class FrameObservation:
    """What a visual analyzer saw in a single sampled frame."""

    timestamp_ms: int
    objects: list[str] = field(default_factory=list)
    text_elements: list[str] = field(default_factory=list)
    motion_level: float = 0.0


@dataclass(slots=True)
class VisualDetection:
    objects: list[str]
    text: list[str]
    has_slides: bool


@dataclass(slots=True)
class Caption:
    start_ms: int
    end_ms: int
    text: str


@dataclass(slots=True)
class VideoSummary:
    """Stable output contract handed to the presentation layer and exporter."""

    id: str
    title: str
    summary_text: str
    key_points: list[str]
    captions: list[Caption]
    duration_ms: int
    classification: ContentClassification | None = None
