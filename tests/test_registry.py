"""Tests for reporter class registration."""

from pathlib import Path

import pytest

from ton_dump_processor.aggregation import RunAggregator
from ton_dump_processor.registry import ReporterRegistry
from ton_dump_processor.reporters import (
    AddressFrequencyReporter,
    JettonDetailReporter,
    NativeFlowReporter,
    Reporter,
    TaxSummaryReporter,
    WalletExportReporter,
)


class DummyReporter(Reporter):
    """Minimal reporter used to test registration."""

    @classmethod
    def name(cls) -> str:
        return "aaa dummy"

    @property
    def output_dir(self) -> Path:
        return self.settings.output_dir

    def generate(self, aggregator: RunAggregator) -> list[Path]:
        return []


def test_builtin_reporters_are_registered_sorted_by_name() -> None:
    """Importing the reporters package registers every built-in emitter."""
    assert ReporterRegistry.ls() == [
        AddressFrequencyReporter,
        JettonDetailReporter,
        NativeFlowReporter,
        TaxSummaryReporter,
        WalletExportReporter,
    ]


def test_register_is_idempotent_and_sorts_case_insensitively(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Registering twice keeps one entry; sort ignores case."""
    monkeypatch.setattr(
        ReporterRegistry,
        "_reporter_class_defs",
        list(getattr(ReporterRegistry, "_reporter_class_defs")),
    )
    assert ReporterRegistry.register(DummyReporter) is DummyReporter
    ReporterRegistry.register(DummyReporter)
    registered = ReporterRegistry.ls()
    assert registered.count(DummyReporter) == 1
    assert registered[0] is DummyReporter
