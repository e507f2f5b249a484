"""Processor settings loaded from YAML with environment overrides."""

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

from ton_dump_processor.aggregation import DEFAULT_THRESHOLD
from ton_dump_processor.validators import validate_threshold, validate_token, validate_top_n


class ConfigError(ValueError):
    """Raised when a settings file holds unusable values."""


@dataclass(frozen=True, slots=True)
class ProcessorSettings:
    """Externally supplied knobs of one processing run."""

    input_dir: Path = Path("TON_Viewer_Dumps")
    output_dir: Path = Path("TON_Viewer_Reports")
    exclusions: frozenset[str] = field(default_factory=frozenset)
    threshold: int = DEFAULT_THRESHOLD
    top_n: int = 5
    native_token: str = "TON"

    _config_env_var_name = "TON_DUMP_PROCESSOR_CONFIG"
    _input_dir_env_var_name = "TON_DUMP_PROCESSOR_INPUT_DIR"
    _output_dir_env_var_name = "TON_DUMP_PROCESSOR_OUTPUT_DIR"

    @property
    def csv_dir(self) -> Path:
        """Return directory of per-wallet tabular exports."""
        return self.output_dir / "CSVs"

    @property
    def yaml_dir(self) -> Path:
        """Return directory of per-wallet structured exports."""
        return self.output_dir / "YAML"

    @property
    def reports_dir(self) -> Path:
        """Return directory of tax and address-frequency reports."""
        return self.output_dir / "Reports"

    @classmethod
    def config_path(cls) -> Path:
        """Return path to the settings file."""
        if path := os.environ.get(cls._config_env_var_name):
            return Path(path).expanduser()
        return Path.home() / ".ton-dump-processor" / "config.yaml"

    @classmethod
    def load(cls, path: Path | None = None) -> "ProcessorSettings":
        """Read settings file (if any) and apply directory env overrides."""
        path = path or cls.config_path()
        payload: dict[str, Any] = {}
        if path.is_file():
            payload = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        if not isinstance(payload, dict):
            raise ConfigError(f"Settings file {path} must hold a mapping.")
        settings = cls.from_dict(payload)
        if input_dir := os.environ.get(cls._input_dir_env_var_name):
            settings = replace(settings, input_dir=Path(input_dir).expanduser())
        if output_dir := os.environ.get(cls._output_dir_env_var_name):
            settings = replace(settings, output_dir=Path(output_dir).expanduser())
        return settings

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "ProcessorSettings":
        """Build validated settings from a plain mapping."""
        defaults = cls()
        for key, validate in (
            ("threshold", validate_threshold),
            ("top_n", validate_top_n),
            ("native_token", validate_token),
        ):
            if key in payload and (message := validate(str(payload[key]))) is not True:
                raise ConfigError(f"{key}: {message}")
        exclusions = payload.get("exclusions") or []
        if not isinstance(exclusions, list):
            raise ConfigError("exclusions: Must be a list of addresses.")
        return cls(
            input_dir=Path(payload.get("input_dir", defaults.input_dir)).expanduser(),
            output_dir=Path(payload.get("output_dir", defaults.output_dir)).expanduser(),
            exclusions=frozenset(str(address).strip() for address in exclusions),
            threshold=int(payload.get("threshold", defaults.threshold)),
            top_n=int(payload.get("top_n", defaults.top_n)),
            native_token=str(payload.get("native_token", defaults.native_token)).strip(),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize settings to a YAML-friendly mapping."""
        return {
            "input_dir": str(self.input_dir),
            "output_dir": str(self.output_dir),
            "exclusions": sorted(self.exclusions),
            "threshold": self.threshold,
            "top_n": self.top_n,
            "native_token": self.native_token,
        }

    def save(self, path: Path | None = None) -> Path:
        """Persist settings as YAML and return the written path."""
        path = path or self.config_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(yaml.safe_dump(self.to_dict(), sort_keys=False), encoding="utf-8")
        return path
