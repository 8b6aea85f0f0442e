from __future__ import annotations

import logging
import math
from collections.abc import Iterable

from video_digest.models import Caption, ContentType, TranscriptSegment

logger = logging.getLogger(__name__)

DEFAULT_SEGMENT_MS = 15000
DEFAULT_TOPIC = "this topic"

TUTORIAL_TEMPLATES: tuple[str, ...] = (
    "Welcome to this tutorial on {topic}. Let's start with the fundamentals.",
    "First, let's review the prerequisites and setup requirements.",
    "Now I'll demonstrate the first step in our process.",
    "Pay attention to this technique, it's crucial for success.",
    "Here's a common mistake that beginners often make.",
    "Let's move on to the next phase of implementation.",
    "This step requires careful attention to detail.",
    "Notice how we build upon the previous concepts.",
    "Here's a professional tip that will save you time.",
    "Let's troubleshoot any potential issues at this stage.",
    "Great progress! Now let's tackle the advanced features.",
    "This final step brings everything together.",
    "Congratulations! You've completed the tutorial successfully.",
    "Remember to practice these skills to build proficiency.",
    "Thanks for following along. Keep learning and growing!",
)

LECTURE_TEMPLATES: tuple[str, ...] = (
    "Welcome to today's lesson on {topic}. Let's begin our exploration.",
    "To understand this concept, we must start with the basics.",
    "This principle has been extensively studied by researchers.",
    "Let me show you a real-world example of this in action.",
    "The historical development helps us understand the context.",
    "Current research reveals some fascinating insights.",
    "This data demonstrates the relationship clearly.",
    "Let's examine the implications of these findings.",
    "Critics have raised important questions about this theory.",
    "Recent developments have opened new research areas.",
    "The practical applications are quite extensive.",
    "This connects to our previous discussions.",
    "Let's review the key concepts we've covered.",
    "For your assignment, consider these applications.",
    "Thank you for your engagement. See you next class.",
)

PRESENTATION_TEMPLATES: tuple[str, ...] = (
    "Good morning everyone. Today's presentation focuses on {topic}.",
    "Let me outline our agenda and key objectives.",
    "Our research reveals some compelling market trends.",
    "These statistics highlight the urgency of action.",
    "Based on our analysis, I recommend this strategy.",
    "The implementation roadmap spans these key phases.",
    "We've identified potential risks and solutions.",
    "The projected ROI is quite promising.",
    "Here's how we compare to industry benchmarks.",
    "Stakeholder feedback has been overwhelmingly positive.",
    "The next steps require cross-functional collaboration.",
    "I'm confident this approach will deliver results.",
    "Let me summarize our key recommendations.",
    "I'm happy to address any questions you have.",
    "Thank you for your time and attention today.",
)

NEWS_TEMPLATES: tuple[str, ...] = (
    "Good evening. Our top story tonight concerns {topic}.",
    "Here is what we know so far.",
    "Officials confirmed the details earlier today.",
    "Our correspondent has more from the scene.",
    "Some background on how we got here.",
    "Reaction has been swift from those affected.",
    "Experts say the impact could be felt for some time.",
    "Here is a look at the numbers behind the story.",
    "Questions remain about what happens next.",
    "We reached out for comment and are awaiting a response.",
    "In other developments related to this story.",
    "We will continue to follow this story as it develops.",
    "That's the latest. Thank you for joining us.",
)

DOCUMENTARY_TEMPLATES: tuple[str, ...] = (
    "This is the story of {topic}.",
    "It begins many years ago, far from where we are today.",
    "Few people knew what was about to unfold.",
    "The records from that time tell a remarkable story.",
    "Those who were there still remember it clearly.",
    "Researchers have spent years piecing the evidence together.",
    "What they discovered changed the way we see it.",
    "Not everyone agrees on what it means.",
    "The consequences reached further than anyone expected.",
    "Today, the traces of that history are still visible.",
    "The questions it raised have not gone away.",
    "Perhaps the real story is still being written.",
    "And so the journey continues.",
)

INTERVIEW_TEMPLATES: tuple[str, ...] = (
    "Welcome. Today we're talking about {topic} with our guest.",
    "Thanks for having me, it's great to be here.",
    "Let's start with how you got started.",
    "That experience really shaped my perspective.",
    "What was the biggest challenge you faced along the way?",
    "Honestly, there were a lot of lessons learned.",
    "How do you approach that problem today?",
    "I think the key is staying curious.",
    "What advice would you give to someone just starting out?",
    "Don't be afraid to make mistakes and learn from them.",
    "Where do you see things heading next?",
    "Thank you for sharing your insights with us.",
    "It was a pleasure. Thanks for the conversation.",
)

SPORTS_TEMPLATES: tuple[str, ...] = (
    "Welcome to today's coverage of {topic}.",
    "The teams are taking the field now.",
    "An early chance, but the defense holds firm.",
    "Great pressure from the home side here.",
    "What a play! The crowd is on its feet.",
    "A tactical change as the coach makes a substitution.",
    "The momentum is starting to shift.",
    "Let's take another look at that replay.",
    "The score stays level heading into the break.",
    "A crucial moment as the final minutes approach.",
    "The clock is running down now.",
    "And that's the final whistle.",
    "What a performance. Thanks for watching.",
)

MUSIC_TEMPLATES: tuple[str, ...] = (
    "Now playing: {topic}.",
    "The intro builds slowly.",
    "The first verse sets the mood.",
    "The rhythm section comes in.",
    "Building toward the chorus.",
    "The chorus lifts the energy.",
    "The second verse develops the story.",
    "An instrumental break takes over.",
    "The bridge changes direction.",
    "The final chorus returns with full force.",
    "The melody fades into the outro.",
    "The last notes ring out.",
)

GENERIC_TEMPLATES: tuple[str, ...] = (
    "Welcome to this content about {topic}.",
    "Let me share some important insights with you.",
    "This information is particularly relevant today.",
    "Here's an interesting perspective to consider.",
    "The evidence supports this conclusion.",
    "This example illustrates the concept well.",
    "Many people find this approach helpful.",
    "The implications are quite significant.",
    "This connects to broader themes we see.",
    "Let me offer another viewpoint.",
    "The practical applications are numerous.",
    "This insight has proven valuable.",
    "Let's wrap up with the key takeaways.",
    "I hope you found this information useful.",
    "Thank you for your time and attention.",
)

CAPTION_TEMPLATES: dict[ContentType, tuple[str, ...]] = {
    ContentType.TUTORIAL: TUTORIAL_TEMPLATES,
    ContentType.EDUCATIONAL_LECTURE: LECTURE_TEMPLATES,
    ContentType.PRESENTATION: PRESENTATION_TEMPLATES,
    ContentType.WEBINAR: PRESENTATION_TEMPLATES,
    ContentType.NEWS: NEWS_TEMPLATES,
    ContentType.DOCUMENTARY: DOCUMENTARY_TEMPLATES,
    ContentType.INTERVIEW: INTERVIEW_TEMPLATES,
    ContentType.SPORTS: SPORTS_TEMPLATES,
    ContentType.MUSIC_VIDEO: MUSIC_TEMPLATES,
}


def to_captions(segments: Iterable[TranscriptSegment]) -> list[Caption]:
    """Map real transcript segments one-to-one onto captions, ordered by start time."""

    ordered = sorted(segments, key=lambda segment: segment.start_ms)
    return [Caption(start_ms=segment.start_ms, end_ms=segment.end_ms, text=segment.text) for segment in ordered]


def caption_templates(content_type: ContentType) -> tuple[str, ...]:
    return CAPTION_TEMPLATES.get(content_type, GENERIC_TEMPLATES)


def caption_window_count(duration_ms: int, segment_ms: int = DEFAULT_SEGMENT_MS) -> int:
    if segment_ms <= 0:
        raise ValueError("segment_ms must be positive")
    return max(1, math.ceil(max(duration_ms, 0) / segment_ms))


def generate_captions(
    duration_ms: int,
    content_type: ContentType,
    *,
    segment_ms: int = DEFAULT_SEGMENT_MS,
    main_topic: str | None = None,
) -> list[Caption]:
    """Cut ``[0, duration_ms)`` into fixed windows and fill them from the content-type template set.

    Windows are contiguous; the last one is clamped to the duration, and a
    duration shorter than one window yields exactly one caption covering it.
    """

    duration_ms = max(int(duration_ms), 0)
    templates = caption_templates(content_type)
    topic = main_topic or DEFAULT_TOPIC

    captions: list[Caption] = []
    for index in range(caption_window_count(duration_ms, segment_ms)):
        start_ms = index * segment_ms
        end_ms = min((index + 1) * segment_ms, duration_ms)
        text = templates[index % len(templates)].format(topic=topic)
        captions.append(Caption(start_ms=start_ms, end_ms=end_ms, text=text))

    logger.debug("Generated %d template captions for %s", len(captions), content_type)
    return captions
