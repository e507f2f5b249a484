"""Shared pytest fixtures for settings isolation and dump-file builders."""

from pathlib import Path

import pytest

SAMPLE_DUMP = """\
12 Sep 2024
Sent TON   ADDR1   - 5 TON
13 Sep 2024
Received TON  ADDR1  + 3 TON
"""


@pytest.fixture(autouse=True)
def isolate_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Point settings file and directory overrides into per-test temporary paths."""
    monkeypatch.setenv("TON_DUMP_PROCESSOR_CONFIG", str(tmp_path / "config" / "config.yaml"))
    monkeypatch.delenv("TON_DUMP_PROCESSOR_INPUT_DIR", raising=False)
    monkeypatch.delenv("TON_DUMP_PROCESSOR_OUTPUT_DIR", raising=False)


def write_dump(directory: Path, wallet: str, text: str) -> Path:
    """Write one `TON_<wallet>.txt` dump file and return its path."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"TON_{wallet}.txt"
    path.write_text(text, encoding="utf-8")
    return path


def repeat_records(address: str, count: int, day: int = 1, month: str = "Jan") -> str:
    """Build dump text with `count` received-TON records from one address."""
    return "".join(
        f"{day + index} {month} 2024\nReceived TON  {address}  + 1 TON\n" for index in range(count)
    )
