"""Tests for TDEE result formatters."""

from __future__ import annotations

import io
import json

import pytest
from rich.console import Console

from preppy.export.formatters import format_result
from preppy.tracking.tdee_calc import calculate_dynamic_tdee


@pytest.fixture
def steady_result(steady_logs):
    return calculate_dynamic_tdee(*steady_logs)


class TestFormatResult:
    """Tests for format_result function."""

    def test_json(self, steady_result) -> None:
        data = json.loads(format_result(steady_result, "json"))

        assert data["dynamicTdee"] == 2500
        assert len(data["analysisWindows"]) == 3
        assert "timestamp" in data

    def test_markdown(self, steady_result) -> None:
        text = format_result(steady_result, "markdown")

        assert text.startswith("# Adaptive TDEE")
        assert "**TDEE:** 2500 kcal/day" in text
        assert "| 21 days | 2500 kcal | 0.3 |" in text

    def test_table_prints_to_console(self, steady_result) -> None:
        buffer = io.StringIO()
        console = Console(file=buffer, width=120)

        assert format_result(steady_result, "table", console=console) is None
        output = buffer.getvalue()
        assert "2500 kcal/day" in output
        assert "Analysis Windows" in output

    def test_unknown_format(self, steady_result) -> None:
        with pytest.raises(ValueError, match="Unknown output format"):
            format_result(steady_result, "xml")
