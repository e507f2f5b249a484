"""Tests for shared prompt and settings validators."""

from pathlib import Path

import pytest

from ton_dump_processor.validators import (
    validate_input_dir,
    validate_threshold,
    validate_token,
    validate_top_n,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("5", True),
        (" 1 ", True),
        ("", "Threshold is required."),
        ("abc", "Threshold must be an integer."),
        ("-3", "Threshold must be an integer."),
        ("0", "Threshold must be at least 1."),
    ],
)
def test_validate_threshold(raw: str, expected: bool | str) -> None:
    """Threshold must be a positive integer."""
    assert validate_threshold(raw) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("10", True),
        ("  ", "Top N is required."),
        ("0", "Top N must be a positive integer."),
        ("x", "Top N must be a positive integer."),
    ],
)
def test_validate_top_n(raw: str, expected: bool | str) -> None:
    """Top-N must be a positive integer."""
    assert validate_top_n(raw) == expected


def test_validate_input_dir(tmp_path: Path) -> None:
    """Only existing directories are accepted."""
    file_path = tmp_path / "dump.txt"
    file_path.write_text("x", encoding="utf-8")
    assert validate_input_dir(str(tmp_path)) is True
    assert validate_input_dir("") == "Input directory is required."
    assert validate_input_dir(str(file_path)) == "Path must be a directory."
    assert validate_input_dir(str(tmp_path / "missing")) == "Path must be a directory."


def test_validate_token() -> None:
    """Token must be one non-empty word."""
    assert validate_token("TON") is True
    assert validate_token(" ") == "Token is required."
    assert validate_token("T ON") == "Token must be a single word."
