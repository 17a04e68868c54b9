"""Query relevance scoring and ranking for normalized tools.

The score is an additive heuristic clamped to 1.0, not a probability.
Every signal is a case-insensitive substring test against the query.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

from mcp_scout.models import Tool

_EXACT_NAME_WEIGHT = 1.0
_NAME_WEIGHT = 0.8
_DESCRIPTION_WEIGHT = 0.6
_KEYWORD_WEIGHT = 0.4
_CATEGORY_WEIGHT = 0.3
_MAX_SCORE = 1.0


def score_tool(tool: Tool, query: str) -> float:
    """Score how well *tool* matches *query*, in the range [0, 1].

    Name matching is exclusive (exact beats substring); the description,
    keyword, and category signals are independent of it and of each other.
    """
    needle = query.lower()
    name = tool.name.lower()
    score = 0.0

    if name == needle:
        score += _EXACT_NAME_WEIGHT
    elif needle in name:
        score += _NAME_WEIGHT

    if needle in tool.description.lower():
        score += _DESCRIPTION_WEIGHT

    if any(needle in keyword.lower() for keyword in tool.keywords):
        score += _KEYWORD_WEIGHT

    if needle in tool.category.lower():
        score += _CATEGORY_WEIGHT

    return min(score, _MAX_SCORE)


def rank_tools(tools: Iterable[Tool], query: str) -> list[Tool]:
    """Return scored copies of *tools* ordered by descending score.

    ``sorted`` is stable, so equal scores keep their input order.
    """
    scored = [replace(tool, match_score=score_tool(tool, query)) for tool in tools]
    return sorted(scored, key=lambda tool: tool.match_score, reverse=True)
