"""
Tests for CLI Output Formatters
===============================
Covers duration / timestamp rendering, item summaries and the item table.
"""

import pytest

from resurfacer.cli.formatters import (
    Colors,
    format_duration,
    format_item_table,
    format_timestamp,
    item_summary,
    item_to_json,
    truncate,
)
from resurfacer.core.review import ONE_DAY, SavedItem

HOUR = 60 * 60 * 1000


class TestColors:

    def test_green_color(self):
        result = Colors.green("ok")
        assert result.startswith("\033[92m")
        assert result.endswith("\033[0m")

    def test_yellow_color(self):
        assert "due" in Colors.yellow("due")


class TestDurations:

    @pytest.mark.parametrize("ms,expected", [
        (0, "due now"),
        (45_000, "45s"),
        (90 * 60 * 1000, "1h 30m"),
        (ONE_DAY, "1d"),
        (3 * ONE_DAY + 4 * HOUR, "3d 4h"),
        (-2 * HOUR, "overdue 2h"),
    ])
    def test_format_duration(self, ms, expected):
        assert format_duration(ms) == expected

    def test_format_timestamp(self):
        assert format_timestamp(0) == "1970-01-01 00:00:00"
        assert format_timestamp(None) == "never"


class TestItemRendering:

    def test_truncate(self):
        assert truncate("short") == "short"
        long = "x" * 100
        assert len(truncate(long, 20)) == 20
        assert truncate(long, 20).endswith("...")

    def test_summary_prefers_author_and_text(self):
        item = SavedItem(id="1", next_review=0, payload={"author": "@a", "text": "line\nbreak"})
        assert item_summary(item) == "@a: line break"

    def test_summary_falls_back_to_url(self):
        item = SavedItem(id="1", next_review=0, payload={"url": "https://example.com/1"})
        assert item_summary(item) == "https://example.com/1"

    def test_item_to_json(self):
        item = SavedItem(id="1", next_review=1_000)
        data = item_to_json(item, now=400)
        assert data["due"] is False
        assert data["msUntilDue"] == 600
        assert data["nextReview"] == 1_000

    def test_empty_table(self):
        assert format_item_table([], now=0) == "No saved items."

    def test_table_rows(self):
        items = [
            SavedItem(id="a", next_review=2 * ONE_DAY, review_count=2, payload={"text": "hello"}),
            SavedItem(id="b", next_review=0, payload={"text": "due one"}),
        ]
        table = format_item_table(items, now=ONE_DAY)
        assert "hello" in table
        assert "due one" in table
        assert "Reviews" in table
        assert "overdue 1d" in table
