"""Tests for output filename construction."""

from __future__ import annotations

from pathlib import Path

import pytest

from slycer.utils.path import (
    build_output_filename,
    compute_pad_width,
    make_title_prefix,
    read_url_file,
    sanitize_title,
)


@pytest.mark.parametrize(
    ("title", "expected"),
    [
        ("Intro", "Intro"),
        ("Part 1: The Beginning", "Part_1_The_Beginning"),
        ("  spaced   out  ", "spaced_out"),
        ("keep_under-score", "keep_under-score"),
        ("Café (Live) [2020]", "Caf_Live_2020"),
    ],
)
def test_sanitize_title(title: str, expected: str) -> None:
    assert sanitize_title(title) == expected


def test_sanitize_title_returns_none_when_nothing_is_left() -> None:
    assert sanitize_title("!!! ??? ...") is None
    assert sanitize_title("") is None
    assert sanitize_title("日本語") is None


@pytest.mark.parametrize(
    ("title", "expected"),
    [
        ("Artist Name - Album Title (Full Album)", "artist_name"),
        ("Lo-Fi Beats (1 Hour) [HD]", "lo-fi_beats"),
        ("Simple Title", "simple_title"),
        ("Bracketed [Official]", "bracketed"),
    ],
)
def test_make_title_prefix(title: str, expected: str) -> None:
    assert make_title_prefix({"title": title}) == expected


def test_make_title_prefix_truncates_and_trims_underscores() -> None:
    title = "a" * 39 + " b"

    prefix = make_title_prefix({"title": title})

    assert prefix == "a" * 39


def test_make_title_prefix_without_usable_title() -> None:
    assert make_title_prefix({}) is None
    assert make_title_prefix({"title": None}) is None
    assert make_title_prefix({"title": "(everything in parens)"}) is None


@pytest.mark.parametrize(
    ("numbers", "count", "expected"),
    [
        (False, 50, 0),
        (True, 1, 1),
        (True, 9, 1),
        (True, 10, 2),
        (True, 99, 2),
        (True, 100, 3),
        (True, 999, 3),
        (True, 1000, 4),
    ],
)
def test_compute_pad_width(numbers: bool, count: int, expected: int) -> None:
    assert compute_pad_width(numbers, count) == expected


def test_build_output_filename_plain() -> None:
    assert build_output_filename(0, 0, "Intro", "mp3") == "Intro.mp3"


def test_build_output_filename_with_all_parts() -> None:
    name = build_output_filename(
        4,
        2,
        "Outro",
        "opus",
        prefix="mix",
        title_prefix="artist_name",
        numbers=True,
    )

    assert name == "mix_artist_name_05_Outro.opus"


def test_build_output_filename_skips_number_when_disabled() -> None:
    assert build_output_filename(4, 2, "Outro", "mp3", numbers=False) == "Outro.mp3"


def test_read_url_file_skips_blanks_and_comments(tmp_path: Path) -> None:
    path = tmp_path / "urls.txt"
    path.write_text(
        "# my list\nhttps://a.example/1\n\n   \nhttps://a.example/2  \n  # indented\n",
        encoding="utf-8",
    )

    assert read_url_file(path) == ["https://a.example/1", "https://a.example/2"]
