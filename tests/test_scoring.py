"""Tests for score scales and display formatting."""

from __future__ import annotations

import pytest

from psa.output.scoring import EXPORT_SCALE, UI_SCALE, format_fetch_time, score_status, status_label


class TestScoreStatus:
    @pytest.mark.parametrize(
        "score,expected",
        [(100, "good"), (85, "good"), (84, "needs-improvement"), (50, "needs-improvement"), (49, "poor"), (0, "poor")],
    )
    def test_ui_scale(self, score: int, expected: str) -> None:
        assert score_status(score, UI_SCALE) == expected

    def test_export_scale_is_stricter(self) -> None:
        assert score_status(87, UI_SCALE) == "good"
        assert score_status(87, EXPORT_SCALE) == "needs-improvement"
        assert score_status(90, EXPORT_SCALE) == "good"

    def test_default_score(self) -> None:
        assert score_status() == "poor"

    def test_labels(self) -> None:
        assert status_label(90) == "Good"
        assert status_label(60) == "Needs improvement"
        assert status_label(10) == "Poor"


class TestFormatFetchTime:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (0, "0 ms"),
            (250.4, "250 ms"),
            (999.4, "999 ms"),
            (1000, "1.00 s"),
            (1500, "1.50 s"),
            (2100.0, "2.10 s"),
            ("1234", "1.23 s"),
        ],
    )
    def test_numbers(self, value: float | str, expected: str) -> None:
        assert format_fetch_time(value) == expected

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty(self, value: str | None) -> None:
        assert format_fetch_time(value) == "—"

    def test_non_numeric_passes_through(self) -> None:
        assert format_fetch_time("2024-05-01T10:00:00.000Z") == "2024-05-01T10:00:00.000Z"

    def test_nan_passes_through(self) -> None:
        assert format_fetch_time("nan") == "nan"
