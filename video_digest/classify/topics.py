from __future__ import annotations

from collections.abc import Iterable

# Output order follows this mapping, not where a trigger appears in the text.
TOPIC_BUCKETS: dict[str, tuple[str, ...]] = {
    "technology": ("tech", "software", "computer", "digital", "app", "code"),
    "business": ("business", "marketing", "sales", "strategy", "company"),
    "education": ("learn", "teach", "school", "university", "course", "study"),
    "health": ("health", "medical", "fitness", "wellness", "exercise", "workout"),
    "science": ("science", "research", "experiment", "theory", "data", "physics"),
    "entertainment": ("movie", "show", "game", "fun", "entertainment"),
    "programming": ("python", "java", "kotlin", "javascript", "programming", "developer"),
    "cooking": ("cooking", "recipe", "kitchen", "bake", "ingredient"),
    "travel": ("travel", "vacation", "destination", "journey", "tourism"),
    "design": ("design", "artist", "drawing", "painting", "creative"),
}


def extract_topics(
    title: str,
    transcript: str,
    visual_elements: Iterable[str] = (),
) -> list[str]:
    """Return topic labels whose trigger substrings occur in the combined lower-cased text."""

    text = " ".join([title or "", transcript or "", *visual_elements]).lower()
    if not text.strip():
        return []

    return [
        topic
        for topic, triggers in TOPIC_BUCKETS.items()
        if any(trigger in text for trigger in triggers)
    ]
