"""Sequential processing of a directory of wallet dumps into reports."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path

from ton_dump_processor.aggregation import RunAggregator
from ton_dump_processor.config import ProcessingLogs
from ton_dump_processor.reconcile import Reconciliation, reconcile, write_reconciliation_log
from ton_dump_processor.registry import ReporterRegistry
from ton_dump_processor.reporters import Reporter
from ton_dump_processor.segmenter import segment_lines
from ton_dump_processor.settings import ProcessorSettings

ProgressCallback = Callable[[int, int, Path], None]


class DuplicateWalletError(ValueError):
    """Raised when two dump files resolve to the same wallet identifier."""


_FILE_PROCESS_EXCEPTIONS = (
    DuplicateWalletError,
    OSError,
    UnicodeError,
)


@dataclass(frozen=True, slots=True)
class FileError:
    """Dump file that could not be processed."""

    source: str
    path: Path
    message: str


@dataclass
class RunResult:
    """Outcome of one processing run."""

    aggregator: RunAggregator
    processed_paths: list[Path] = field(default_factory=list)
    errors: list[FileError] = field(default_factory=list)
    reconciliations: list[Reconciliation] = field(default_factory=list)
    report_paths: list[Path] = field(default_factory=list)

    @property
    def processed_files(self) -> int:
        """Return number of dump files parsed successfully."""
        return len(self.processed_paths)

    @property
    def failed_files(self) -> int:
        """Return number of dump files that raised while reading."""
        return len(self.errors)


def wallet_id(path: Path) -> str:
    """Return wallet identifier of a dump file (`TON_<wallet>.txt` -> `<wallet>`)."""
    return path.stem.removeprefix("TON_")


class DumpProcessor:
    """Parse every dump of the input directory and emit all registered reports."""

    def __init__(self, settings: ProcessorSettings, logs: ProcessingLogs | None = None) -> None:
        """Store run settings and the shared log sink."""
        self.settings = settings
        self.logs = logs if logs is not None else ProcessingLogs()

    def build_reporters(self) -> list[Reporter]:
        """Instantiate every registered report emitter for this run."""
        return [class_def(self.settings) for class_def in ReporterRegistry.ls()]

    def list_dump_files(self) -> list[Path]:
        """Return dump files of the input directory in listing order."""
        return sorted(self.settings.input_dir.glob("*.txt"))

    def process_file(
        self,
        path: Path,
        aggregator: RunAggregator,
        today: date | None = None,
    ) -> tuple[RunAggregator, Reconciliation]:
        """Segment one dump file and fold its records into the aggregator."""
        source = wallet_id(path)
        if source in aggregator.sources:
            raise DuplicateWalletError(f"Wallet {source!r} already read from another dump.")
        lines = path.read_text(encoding="utf-8").splitlines()
        records = segment_lines(lines, source, self.logs, today)
        aggregator.add_source(source)
        aggregator.extend(records)
        reconciliation = reconcile(source, lines, records, self.settings.native_token)
        if not reconciliation.matches:
            self.logs.update(
                source,
                today or date.today(),
                "reconcile",
                self.settings.native_token,
                changes=[
                    {
                        "name": "Total",
                        "before": f"{reconciliation.raw_total:.2f}",
                        "after": f"{reconciliation.parsed_total:.2f}",
                    }
                ],
            )
        return aggregator, reconciliation

    def run(
        self,
        today: date | None = None,
        progress: ProgressCallback | None = None,
    ) -> RunResult:
        """Process all dumps, then write reports, reconciliation and summary logs.

        `progress` is called with `(index, total, path)` before each dump is read.
        """
        aggregator = RunAggregator(self.settings.exclusions)
        result = RunResult(aggregator)
        paths = self.list_dump_files()
        for index, path in enumerate(paths, start=1):
            if progress is not None:
                progress(index, len(paths), path)
            try:
                aggregator, reconciliation = self.process_file(path, aggregator, today)
            except _FILE_PROCESS_EXCEPTIONS as error:
                file_error = FileError(wallet_id(path), path, str(error))
                result.errors.append(file_error)
                self.logs.update(
                    file_error.source,
                    today or date.today(),
                    "failed",
                    path.name,
                    changes=[{"name": "Error", "before": path.name, "after": file_error.message}],
                )
                continue
            result.processed_paths.append(path)
            result.reconciliations.append(reconciliation)

        for reporter in self.build_reporters():
            result.report_paths.extend(reporter.generate(aggregator))
        result.report_paths.append(
            write_reconciliation_log(
                result.reconciliations,
                self.settings.output_dir / "reconciliation.log",
                self.settings.native_token,
            )
        )
        result.report_paths.append(write_run_summary(result, self.settings.output_dir))
        return result


def write_run_summary(result: RunResult, output_dir: Path) -> Path:
    """Write processed/failed totals and per-file errors to `summary.log`."""
    lines = [
        "Summary Report:",
        f"Processed at: {datetime.now().isoformat(timespec='seconds')}",
        f"Total Files Processed: {result.processed_files}",
        f"Total Files Failed: {result.failed_files}",
        f"Total Transactions: {len(result.aggregator.records)}",
    ]
    if result.errors:
        lines.append("Errors:")
        lines += [f"- Failed to process {error.source}: {error.message}" for error in result.errors]
    else:
        lines.append("Status: All files processed successfully.")
    path = output_dir / "summary.log"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path
