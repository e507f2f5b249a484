"""Shared input validators used by settings loading and UI prompts."""

from collections.abc import Callable
from pathlib import Path

PromptValidator = Callable[[str], bool | str]


def validate_threshold(raw: str) -> bool | str:
    """Validate positive integer reporting threshold."""
    if not (text := raw.strip()):
        return "Threshold is required."
    if not text.isdigit():
        return "Threshold must be an integer."
    if int(text) < 1:
        return "Threshold must be at least 1."
    return True


def validate_top_n(raw: str) -> bool | str:
    """Validate positive integer size of the top-addresses list."""
    if not (text := raw.strip()):
        return "Top N is required."
    if not text.isdigit() or int(text) < 1:
        return "Top N must be a positive integer."
    return True


def validate_input_dir(raw: str) -> bool | str:
    """Validate existing dump directory input."""
    if not (text := raw.strip()):
        return "Input directory is required."
    if not Path(text).expanduser().resolve().is_dir():
        return "Path must be a directory."
    return True


def validate_token(token: str) -> bool | str:
    """Validate non-empty token symbol without whitespace."""
    if not (text := token.strip()):
        return "Token is required."
    if any(char.isspace() for char in text):
        return "Token must be a single word."
    return True
