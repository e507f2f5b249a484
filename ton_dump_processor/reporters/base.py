"""Abstract base class for all report emitters."""

from abc import ABC, abstractmethod
from pathlib import Path

from ton_dump_processor.aggregation import RunAggregator
from ton_dump_processor.settings import ProcessorSettings


class Reporter(ABC):
    """Abstract base class for all report emitters."""

    def __init__(self, settings: ProcessorSettings) -> None:
        """Store run settings shared by every artifact."""
        self.settings = settings

    @classmethod
    @abstractmethod
    def name(cls) -> str:
        """Return reporter name shown in run summaries."""

    @property
    @abstractmethod
    def output_dir(self) -> Path:
        """Return directory the reporter writes into."""

    @abstractmethod
    def generate(self, aggregator: RunAggregator) -> list[Path]:
        """Write artifacts for aggregated run data and return their paths."""

    def _prepare_output_dir(self) -> Path:
        """Create output directory if missing and return it."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        return self.output_dir
