"""Tests for query relevance scoring (scoring.py)."""

from __future__ import annotations

from mcp_scout.models import Tool, ToolSource
from mcp_scout.scoring import rank_tools, score_tool


def _tool(
    name: str = "Other",
    description: str = "",
    category: str = "",
    keywords: frozenset[str] = frozenset(),
    native_id: str | None = None,
) -> Tool:
    native = native_id or name
    return Tool(
        id=f"Catalog:{native}",
        native_id=native,
        name=name,
        description=description,
        category=category,
        version="1.0.0",
        source=ToolSource.CATALOG,
        keywords=keywords,
    )


class TestScoreTool:
    def test_exact_name_match_is_maximum(self):
        assert score_tool(_tool(name="SQLite"), "sqlite") == 1.0

    def test_name_substring(self):
        assert score_tool(_tool(name="sqlite-explorer"), "sqlite") == 0.8

    def test_description_only(self):
        assert score_tool(_tool(description="Query a SQLite file"), "sqlite") == 0.6

    def test_keyword_only(self):
        assert score_tool(_tool(keywords=frozenset({"SQL-tools"})), "sql") == 0.4

    def test_category_only(self):
        assert score_tool(_tool(category="Database"), "data") == 0.3

    def test_description_and_keyword_add_up(self):
        tool = _tool(description="Postgres access", keywords=frozenset({"postgres"}))
        assert score_tool(tool, "postgres") == 0.6 + 0.4

    def test_keyword_and_category_add_up(self):
        tool = _tool(category="git", keywords=frozenset({"git"}))
        assert score_tool(tool, "git") == 0.4 + 0.3

    def test_score_is_clamped(self):
        tool = _tool(
            name="files",
            description="files everywhere",
            category="files",
            keywords=frozenset({"files"}),
        )
        assert score_tool(tool, "files") == 1.0

    def test_no_match_is_zero(self):
        assert score_tool(_tool(name="slack", description="chat"), "postgres") == 0.0

    def test_case_insensitive(self):
        assert score_tool(_tool(name="GitHub"), "GITHUB") == 1.0

    def test_deterministic(self):
        tool = _tool(name="filesystem-mcp", description="Read and write files")
        scores = {score_tool(tool, "filesystem") for _ in range(5)}
        assert scores == {0.8}


class TestRankTools:
    def test_sorted_by_descending_score(self):
        tools = [
            _tool(name="a", category="files"),
            _tool(name="files"),
            _tool(name="b", description="handles files"),
        ]
        ranked = rank_tools(tools, "files")
        assert [t.name for t in ranked] == ["files", "b", "a"]
        assert [t.match_score for t in ranked] == [1.0, 0.6, 0.3]

    def test_ties_keep_input_order(self):
        tools = [_tool(name=f"git-{i}", native_id=str(i)) for i in range(4)]
        ranked = rank_tools(tools, "git")
        assert [t.native_id for t in ranked] == ["0", "1", "2", "3"]

    def test_returns_new_objects(self):
        original = _tool(name="git")
        ranked = rank_tools([original], "git")
        assert original.match_score == 0.0
        assert ranked[0].match_score == 1.0

    def test_rescoring_replaces_previous_score(self):
        first = rank_tools([_tool(name="git")], "git")[0]
        second = rank_tools([first], "slack")[0]
        assert second.match_score == 0.0

    def test_empty(self):
        assert rank_tools([], "x") == []
