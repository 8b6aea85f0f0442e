from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence

from video_digest.config import SummarizationConfig
from video_digest.keypoints.sentence_scoring import split_sentences
from video_digest.models import ContentType, SummaryStyle
from video_digest.summary import extractive

logger = logging.getLogger(__name__)

SENTENCE_END = re.compile(r"[.!?](?=\s|$)")
SENTENCE_BREAK = re.compile(r"(?<=[.!?])\s+")
CASUAL_SUBSTITUTIONS: tuple[tuple[str, str], ...] = (
    ("This content", "This video"),
    ("The material", "It"),
    ("demonstrates", "shows"),
)
TECHNICAL_PREFIX = "Technical Analysis: "


def generate_summary(
    transcript: str,
    content_type: ContentType,
    topics: Sequence[str],
    key_visual_elements: Sequence[str],
    duration_ms: int,
    config: SummarizationConfig | None = None,
) -> str:
    """Build a multi-paragraph summary for the content type, then apply length and style knobs.

    Never raises: any failure while rendering falls back to ``template_summary``.
    """

    config = config or SummarizationConfig()
    main_topics = list(config.focus_areas) or list(topics)

    try:
        sentence_count = len(split_sentences(transcript, min_length=1))
        renderer = _RENDERERS.get(content_type, _generic_summary)
        summary = renderer(
            sentence_count=sentence_count,
            topics=main_topics,
            visual_elements=list(key_visual_elements),
            minutes=duration_ms // 60000,
        )
        formatted = format_summary(summary, config)
    except Exception as exc:
        logger.warning("Summary generation failed (%s); using template summary.", exc)
        return template_summary(content_type, main_topics, duration_ms)

    logger.debug("Generated %s summary (%d chars) for %s", config.summary_style, len(formatted), content_type)
    return formatted


def format_summary(text: str, config: SummarizationConfig) -> str:
    """Truncate to ``max_summary_length`` at a sentence boundary, then apply the style transform."""

    formatted = truncate_at_sentence(text, config.max_summary_length)

    if config.summary_style is SummaryStyle.BRIEF:
        sentences = SENTENCE_BREAK.split(formatted.strip())
        formatted = " ".join(sentences[:2])
        if formatted and formatted[-1] not in ".!?":
            formatted += "."
    elif config.summary_style is SummaryStyle.TECHNICAL:
        formatted = TECHNICAL_PREFIX + formatted
    elif config.summary_style is SummaryStyle.CASUAL:
        for source, replacement in CASUAL_SUBSTITUTIONS:
            formatted = formatted.replace(source, replacement)

    return formatted


def truncate_at_sentence(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text

    cut = 0
    for match in SENTENCE_END.finditer(text):
        if match.end() > max_length:
            break
        cut = match.end()

    if cut:
        return text[:cut]
    if max_length <= 3:
        return text[:max_length]
    return text[: max_length - 3].rstrip() + "..."


def template_summary(content_type: ContentType, topics: Sequence[str], duration_ms: int) -> str:
    """One-line summary used when the full generator cannot run."""

    minutes = max(int(duration_ms), 0) // 60000
    main_topic = topics[0] if topics else "various topics"

    if content_type is ContentType.TUTORIAL:
        return (
            f"This tutorial ({minutes} minutes) provides step-by-step guidance on {main_topic} "
            "with practical demonstrations and clear instructions."
        )
    if content_type is ContentType.EDUCATIONAL_LECTURE:
        return (
            f"This educational lecture ({minutes} minutes) covers {main_topic} "
            "with comprehensive explanations and academic depth."
        )
    if content_type is ContentType.PRESENTATION:
        return (
            f"This presentation ({minutes} minutes) delivers professional insights on {main_topic} "
            "with structured content and clear recommendations."
        )
    return (
        f"This video content ({minutes} minutes) explores {main_topic} "
        "through engaging presentation and valuable insights."
    )


def _placeholder_count(sentence_count: int, limit: int) -> int:
    return max(1, min(limit, sentence_count))


def _educational_summary(*, sentence_count: int, topics: list[str], visual_elements: list[str], minutes: int) -> str:
    main_topic = topics[0] if topics else "the subject matter"
    concepts = extractive.extract_key_concepts(_placeholder_count(sentence_count, 3))
    objectives = extractive.learning_objectives()
    return "\n\n".join(
        (
            f"This educational content on {main_topic} spans approximately {minutes} minutes "
            "and provides comprehensive instruction through structured learning.",
            f"The material covers {', '.join(concepts)} with clear explanations and practical examples. "
            f"The instructional approach emphasizes {' and '.join(objectives)}.",
            "Key learning outcomes include understanding fundamental principles, applying theoretical "
            "knowledge to practical scenarios, and developing skills for real-world implementation.",
            f"The content is well-structured for learners seeking to build expertise in {main_topic}, "
            "with appropriate pacing and depth for the target audience.",
        )
    )


def _presentation_summary(*, sentence_count: int, topics: list[str], visual_elements: list[str], minutes: int) -> str:
    points = extractive.extract_key_points(_placeholder_count(sentence_count, 4))
    if visual_elements:
        visual_context = f"supported by visual aids including {', '.join(visual_elements[:3])}"
    else:
        visual_context = "delivered through clear verbal communication"
    return "\n\n".join(
        (
            f"This presentation ({minutes} minutes) delivers professional content {visual_context}.",
            f"The speaker addresses {', '.join(points)} with data-driven insights and strategic recommendations.",
            "The presentation maintains a professional tone while making complex information accessible "
            "to the audience. Key takeaways include actionable insights and clear next steps for implementation.",
            "The structured approach and supporting materials enhance understanding and provide valuable "
            "resources for the target audience.",
        )
    )


def _entertainment_summary(*, sentence_count: int, topics: list[str], visual_elements: list[str], minutes: int) -> str:
    elements = extractive.entertainment_elements()
    return "\n\n".join(
        (
            f"This entertainment content ({minutes} minutes) delivers engaging material designed to "
            "captivate and delight viewers.",
            f"The content features {', '.join(elements)} with dynamic pacing that maintains audience "
            "interest throughout.",
            "Production quality and creative elements work together to create an enjoyable viewing "
            "experience. The content successfully balances entertainment value with meaningful engagement.",
            "Overall, this represents quality entertainment that achieves its goals of audience engagement "
            "and satisfaction.",
        )
    )


def _news_summary(*, sentence_count: int, topics: list[str], visual_elements: list[str], minutes: int) -> str:
    main_story = topics[0] if topics else "current events"
    facts = extractive.extract_key_facts(_placeholder_count(sentence_count, 5))
    return "\n\n".join(
        (
            f"This news content ({minutes} minutes) covers {main_story} with comprehensive reporting and analysis.",
            f"Key developments include {', '.join(facts)}. The reporting provides context and background "
            "information to help viewers understand the significance of these events.",
            "The coverage maintains journalistic standards while presenting information in an accessible "
            "format. Multiple perspectives and expert analysis contribute to a well-rounded understanding "
            "of the topic.",
            f"This report serves as a valuable source of information for those seeking to stay informed "
            f"about {main_story}.",
        )
    )


def _generic_summary(*, sentence_count: int, topics: list[str], visual_elements: list[str], minutes: int) -> str:
    main_theme = topics[0] if topics else "the main subject"
    insights = extractive.extract_key_insights(_placeholder_count(sentence_count, 3))
    return "\n\n".join(
        (
            f"This content ({minutes} minutes) explores {main_theme} through thoughtful analysis and clear presentation.",
            f"The material addresses {', '.join(insights)} with appropriate depth and clarity. The approach "
            "balances comprehensive coverage with accessibility for the intended audience.",
            "Key takeaways include practical insights and valuable information that viewers can apply in "
            "relevant contexts.",
            "Overall, this content effectively communicates its intended message and provides meaningful "
            "value to its audience.",
        )
    )


_Renderer = Callable[..., str]

_RENDERERS: dict[ContentType, _Renderer] = {
    ContentType.TUTORIAL: _educational_summary,
    ContentType.EDUCATIONAL_LECTURE: _educational_summary,
    ContentType.PRESENTATION: _presentation_summary,
    ContentType.WEBINAR: _presentation_summary,
    ContentType.ENTERTAINMENT: _entertainment_summary,
    ContentType.VLOG: _entertainment_summary,
    ContentType.NEWS: _news_summary,
    ContentType.DOCUMENTARY: _news_summary,
}
