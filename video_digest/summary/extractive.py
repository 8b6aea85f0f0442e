from __future__ import annotations

# Placeholder extractors: each returns its fixed phrase ``count`` times so the
# summary templates stay well-formed without real extractive NLP behind them.

KEY_CONCEPT = "key concept"
KEY_POINT = "important point"
KEY_FACT = "significant fact"
KEY_INSIGHT = "valuable insight"

LEARNING_OBJECTIVES: tuple[str, ...] = (
    "understanding core concepts",
    "practical application",
    "skill development",
)
ENTERTAINMENT_ELEMENTS: tuple[str, ...] = (
    "engaging storytelling",
    "dynamic presentation",
    "audience interaction",
)


def extract_key_concepts(count: int) -> list[str]:
    return _repeat(KEY_CONCEPT, count)


def extract_key_points(count: int) -> list[str]:
    return _repeat(KEY_POINT, count)


def extract_key_facts(count: int) -> list[str]:
    return _repeat(KEY_FACT, count)


def extract_key_insights(count: int) -> list[str]:
    return _repeat(KEY_INSIGHT, count)


def learning_objectives() -> list[str]:
    return list(LEARNING_OBJECTIVES)


def entertainment_elements() -> list[str]:
    return list(ENTERTAINMENT_ELEMENTS)


def _repeat(phrase: str, count: int) -> list[str]:
    return [phrase] * max(count, 0)
