"""Tests for parsing yt-dlp progress lines into readings."""

from __future__ import annotations

import pytest

from slycer.core.progress_parser import parse_progress_line
from slycer.models.media import ProgressReading


def test_typical_progress_line() -> None:
    reading = parse_progress_line(
        "[download]  81.6% of   59.10MiB at    3.47MiB/s ETA 00:01"
    )

    assert reading == ProgressReading(permille=816, speed="3.47MiB/s", eta="00:01")


@pytest.mark.parametrize(
    ("line", "permille", "speed", "eta"),
    [
        ("[download]   0.0% of 10.00MiB at 1.00 MiB/s ETA 00:10", 0, "1.00 MiB/s", "00:10"),
        ("[download]   5.3% of ~ 3.2GiB at 950.12 KiB/s ETA 01:02:03", 53, "950.12 KiB/s", "01:02:03"),
        ("[download]  99.9% of 1.0MiB at 12 B/s ETA 00:00", 999, "12 B/s", "00:00"),
        ("[download] 100% of 59.10MiB in 00:00:17", 1000, None, None),
    ],
)
def test_well_formed_lines(line: str, permille: int, speed: str | None, eta: str | None) -> None:
    reading = parse_progress_line(line)

    assert reading is not None
    assert reading.permille == permille
    assert reading.speed == speed
    assert reading.eta == eta


@pytest.mark.parametrize(
    "line",
    [
        "[download] Destination: audio.mp3",
        "[youtube] abc123: Downloading webpage",
        "[ExtractAudio] Destination: out.mp3 (50% smaller)",
        "   [download]  12.0% of 1MiB",
        "",
        "[download]",
    ],
)
def test_non_progress_lines_yield_none(line: str) -> None:
    assert parse_progress_line(line) is None


def test_malformed_percentage_is_not_an_error() -> None:
    assert parse_progress_line("[download] abc% of 10MiB") is None
    assert parse_progress_line("[download] %") is None
    assert parse_progress_line("[download] -5.0% of 10MiB") is None


def test_percentage_above_hundred_is_clamped() -> None:
    reading = parse_progress_line("[download] 250.5% of 10MiB at 1MiB/s ETA 00:01")

    assert reading is not None
    assert reading.permille == 1000


def test_whole_number_percentage_defaults_fraction_to_zero() -> None:
    reading = parse_progress_line("[download]  42% of 10MiB")

    assert reading is not None
    assert reading.permille == 420


def test_only_first_fractional_digit_counts() -> None:
    reading = parse_progress_line("[download]  42.79% of 10MiB")

    assert reading is not None
    assert reading.permille == 427


def test_unknown_speed_discards_value_and_unit() -> None:
    reading = parse_progress_line(
        "[download]  10.0% of 5.00MiB at Unknown B/s ETA 00:20"
    )

    assert reading is not None
    assert reading.speed is None
    assert reading.eta == "00:20"


def test_unknown_eta() -> None:
    reading = parse_progress_line(
        "[download]  10.0% of 5.00MiB at 2.00 MiB/s ETA Unknown"
    )

    assert reading is not None
    assert reading.speed == "2.00 MiB/s"
    assert reading.eta is None


def test_unknown_speed_and_eta() -> None:
    reading = parse_progress_line(
        "[download]   1.2% of Unknown size at Unknown B/s ETA Unknown"
    )

    assert reading == ProgressReading(permille=12, speed=None, eta=None)


def test_speed_with_missing_unit_at_end_of_line() -> None:
    reading = parse_progress_line("[download]  10.0% of 5.00MiB at 2.00MiB/s")

    assert reading is not None
    assert reading.speed == "2.00MiB/s"
    assert reading.eta is None


def test_percent_text_formatting() -> None:
    assert ProgressReading(permille=816).percent_text == "81.6%"
    assert ProgressReading(permille=1000).percent_text == "100.0%"
    assert ProgressReading(permille=7).percent_text == "0.7%"
