from __future__ import annotations

import logging

from video_digest.keypoints.redundancy import DEFAULT_SIMILARITY_THRESHOLD, filter_redundancy
from video_digest.keypoints.sentence_scoring import score_and_rank
from video_digest.models import ContentType, ScoredSentence

logger = logging.getLogger(__name__)

DEFAULT_MAX_POINTS = 8
SNIPPET_LENGTH = 77
OVERFLOW_LABEL = "Additional insights"

# Position i of the selected sentences gets label i; later positions use OVERFLOW_LABEL.
POSITION_LABELS: dict[ContentType, tuple[str, ...]] = {
    ContentType.TUTORIAL: (
        "Prerequisites and setup",
        "Step-by-step process",
        "Key techniques demonstrated",
        "Common pitfalls to avoid",
        "Best practices highlighted",
        "Troubleshooting guidance",
        "Advanced tips provided",
    ),
    ContentType.EDUCATIONAL_LECTURE: (
        "Core concept introduced",
        "Theoretical foundation",
        "Key principles explained",
        "Real-world applications",
        "Supporting evidence",
        "Critical analysis",
        "Implications discussed",
    ),
    ContentType.PRESENTATION: (
        "Executive summary",
        "Key findings presented",
        "Strategic recommendations",
        "Data insights shared",
        "Implementation approach",
        "Risk considerations",
        "Expected outcomes",
    ),
    ContentType.NEWS: (
        "Breaking development",
        "Key facts reported",
        "Background context",
        "Stakeholder reactions",
        "Impact analysis",
        "Expert commentary",
        "Future implications",
    ),
    ContentType.DOCUMENTARY: (
        "Central narrative",
        "Historical context",
        "Key characters/subjects",
        "Significant events",
        "Investigative findings",
        "Expert perspectives",
        "Broader implications",
    ),
    ContentType.INTERVIEW: (
        "Main discussion topic",
        "Key insights shared",
        "Personal experiences",
        "Professional perspectives",
        "Challenges discussed",
        "Solutions proposed",
        "Future outlook",
    ),
}

GENERIC_TEMPLATE_POINTS: tuple[str, ...] = (
    "Introduction and context setting",
    "Main content overview and key themes",
    "Important information and insights presented",
    "Supporting examples and evidence provided",
    "Practical applications and use cases",
    "Critical observations and analysis",
    "Summary of main conclusions",
    "Actionable takeaways and recommendations",
)

TEMPLATE_POINTS: dict[ContentType, tuple[str, ...]] = {
    ContentType.TUTORIAL: (
        "Setup and prerequisites covered",
        "Step-by-step methodology explained",
        "Key techniques demonstrated",
        "Common challenges addressed",
        "Best practices highlighted",
        "Troubleshooting guidance provided",
        "Advanced tips shared",
        "Next steps outlined",
    ),
    ContentType.EDUCATIONAL_LECTURE: (
        "Fundamental concepts introduced",
        "Theoretical framework established",
        "Key principles explained",
        "Real-world applications discussed",
        "Supporting evidence presented",
        "Critical analysis provided",
        "Implications explored",
        "Learning objectives achieved",
    ),
    ContentType.PRESENTATION: (
        "Executive summary presented",
        "Key findings highlighted",
        "Strategic recommendations made",
        "Data insights shared",
        "Implementation approach outlined",
        "Risk factors considered",
        "Expected outcomes projected",
        "Action items identified",
    ),
    ContentType.NEWS: (
        "Main story introduced",
        "Key facts reported",
        "Background context provided",
        "Stakeholder reactions covered",
        "Impact on those affected assessed",
        "Expert commentary included",
        "Open questions noted",
        "Future developments anticipated",
    ),
    ContentType.DOCUMENTARY: (
        "Central narrative established",
        "Historical context explored",
        "Key subjects introduced",
        "Significant events traced",
        "Investigative findings revealed",
        "Expert perspectives featured",
        "Broader implications considered",
        "Closing reflections offered",
    ),
    ContentType.INTERVIEW: (
        "Guest and discussion topic introduced",
        "Key insights shared",
        "Personal experiences recounted",
        "Professional perspectives offered",
        "Challenges discussed",
        "Solutions proposed",
        "Advice for the audience given",
        "Future outlook described",
    ),
}


def snippet(text: str) -> str:
    """Truncate to the snippet length on a character boundary, adding an ellipsis when cut."""

    if len(text) > SNIPPET_LENGTH:
        return text[:SNIPPET_LENGTH] + "..."
    return text


def format_key_points(
    filtered: list[ScoredSentence],
    content_type: ContentType,
    max_points: int = DEFAULT_MAX_POINTS,
) -> list[str]:
    """Turn the top filtered sentences into labelled bullet strings."""

    top_sentences = filtered[: max(max_points, 0)]
    labels = POSITION_LABELS.get(content_type)

    if labels is None:
        return [f"Key point {index}: {snippet(sentence.text)}" for index, sentence in enumerate(top_sentences, start=1)]

    points: list[str] = []
    for index, sentence in enumerate(top_sentences):
        label = labels[index] if index < len(labels) else OVERFLOW_LABEL
        points.append(f"{label}: {snippet(sentence.text)}")
    return points


def template_key_points(content_type: ContentType, max_points: int = DEFAULT_MAX_POINTS) -> list[str]:
    """Static content-type bullet list used when no sentence survives extraction."""

    return list(TEMPLATE_POINTS.get(content_type, GENERIC_TEMPLATE_POINTS)[: max(max_points, 0)])


def extract_key_points(
    transcript: str,
    content_type: ContentType,
    max_points: int = DEFAULT_MAX_POINTS,
    *,
    redundancy_threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
    min_sentence_length: int = 10,
) -> list[str]:
    """Score, rank, de-duplicate and label transcript sentences; fall back to static points."""

    if max_points <= 0:
        return []

    try:
        ranked = score_and_rank(transcript, content_type, min_length=min_sentence_length)
        filtered = filter_redundancy(ranked, threshold=redundancy_threshold)
        points = format_key_points(filtered, content_type, max_points)
    except Exception as exc:
        logger.warning("Key-point extraction failed (%s); using template key points.", exc)
        return template_key_points(content_type, max_points)

    if not points:
        logger.debug("No transcript sentences survived filtering; using template key points.")
        return template_key_points(content_type, max_points)

    logger.debug("Extracted %d key points from %d ranked sentences", len(points), len(ranked))
    return points
