from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

from video_digest.captions.generator import DEFAULT_SEGMENT_MS, caption_window_count
from video_digest.models import FrameObservation, TranscriptionResult, TranscriptSegment, VisualDetection

SLIDE_TEXT_FRAME_RATIO = 0.6
SLIDE_STATIC_FRAME_RATIO = 0.7
STATIC_MOTION_LEVEL = 0.1

SIMULATED_TRANSCRIPT: tuple[str, ...] = (
    "Welcome to this presentation. Today we'll be discussing important concepts and their applications.",
    "Let me start by explaining the fundamental principles that form the foundation of our topic.",
    "As you can see from this example, the relationship between these elements is quite significant.",
    "This particular approach has proven to be very effective in real-world scenarios.",
    "Moving forward, we'll examine some practical implementations and their outcomes.",
    "The data clearly shows a strong correlation between these variables and the expected results.",
    "It's important to note that there are several factors that can influence these outcomes.",
    "Based on our analysis, we can draw some meaningful conclusions about this subject.",
    "Let me share some insights that have emerged from recent research in this field.",
    "These findings have important implications for how we approach similar challenges.",
    "In conclusion, the evidence supports our hypothesis and opens new avenues for exploration.",
    "Thank you for your attention. I hope this information has been valuable and informative.",
)


@runtime_checkable
class Transcriber(Protocol):
    """Speech-to-text backend. A model-backed implementation can be passed anywhere a stub is."""

    def transcribe(self, audio_path: str | Path) -> TranscriptionResult: ...


@runtime_checkable
class VisualAnalyzer(Protocol):
    """Object detection and OCR backend over sampled frames."""

    def detect_visual_elements(self, frames: Sequence[FrameObservation]) -> VisualDetection: ...


class StubTranscriber:
    """Deterministic transcriber that cycles fixed sentences over fixed-length segments."""

    def __init__(
        self,
        duration_ms: int,
        *,
        segment_ms: int = DEFAULT_SEGMENT_MS,
        confidence: float = 0.89,
        language: str = "en-US",
    ) -> None:
        if segment_ms <= 0:
            raise ValueError("segment_ms must be positive")
        self.duration_ms = max(int(duration_ms), 0)
        self.segment_ms = segment_ms
        self.confidence = confidence
        self.language = language

    def transcribe(self, audio_path: str | Path) -> TranscriptionResult:
        segments: list[TranscriptSegment] = []
        for index in range(caption_window_count(self.duration_ms, self.segment_ms)):
            start_ms = index * self.segment_ms
            end_ms = min((index + 1) * self.segment_ms, self.duration_ms)
            segments.append(
                TranscriptSegment(
                    start_ms=start_ms,
                    end_ms=end_ms,
                    text=SIMULATED_TRANSCRIPT[index % len(SIMULATED_TRANSCRIPT)],
                    confidence=self.confidence,
                    speaker_id=1,
                )
            )

        return TranscriptionResult(
            full_text=" ".join(segment.text for segment in segments),
            segments=segments,
            confidence=self.confidence,
            language=self.language,
        )


class StubVisualAnalyzer:
    """Returns canned detections, or aggregates per-frame observations when frames are given."""

    def __init__(
        self,
        objects: Sequence[str] = ("person", "screen"),
        text: Sequence[str] = (),
        has_slides: bool = False,
    ) -> None:
        self.objects = list(objects)
        self.text = list(text)
        self.has_slides = has_slides

    def detect_visual_elements(self, frames: Sequence[FrameObservation]) -> VisualDetection:
        if not frames:
            return VisualDetection(objects=list(self.objects), text=list(self.text), has_slides=self.has_slides)

        objects: list[str] = []
        for frame in frames:
            for label in frame.objects:
                if label not in objects:
                    objects.append(label)

        text = [element for frame in frames for element in frame.text_elements]
        return VisualDetection(objects=objects, text=text, has_slides=detect_slides(frames))


def detect_slides(frames: Sequence[FrameObservation]) -> bool:
    """Slides look like mostly static frames that mostly carry text."""

    if not frames:
        return False
    text_frames = sum(1 for frame in frames if frame.text_elements)
    static_frames = sum(1 for frame in frames if frame.motion_level < STATIC_MOTION_LEVEL)
    total = len(frames)
    return text_frames > total * SLIDE_TEXT_FRAME_RATIO and static_frames > total * SLIDE_STATIC_FRAME_RATIO
