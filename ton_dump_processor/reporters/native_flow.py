"""Per-wallet native-token inflow and outflow log."""

from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path

from ton_dump_processor.aggregation import RunAggregator
from ton_dump_processor.registry import ReporterRegistry
from ton_dump_processor.reporters.base import Reporter

SAMPLE_SIZE = 5


@dataclass(frozen=True, slots=True)
class NativeFlow:
    """Native amounts received and sent by one wallet."""

    source: str
    inflow: Decimal = Decimal(0)
    outflow: Decimal = Decimal(0)
    samples: tuple[str, ...] = ()

    @property
    def net(self) -> Decimal:
        """Return inflow minus outflow."""
        return self.inflow - self.outflow


def build_native_flows(
    aggregator: RunAggregator,
    native_token: str,
    sample_size: int = SAMPLE_SIZE,
) -> list[NativeFlow]:
    """Sum native inflow and outflow per wallet, keeping the first few entries."""
    flows = []
    for source in aggregator.sources:
        inflow = outflow = Decimal(0)
        samples: list[str] = []
        for record in aggregator.records_for(source):
            for value in record.values:
                if value.token.casefold() != native_token.casefold():
                    continue
                if value.amount < 0:
                    outflow -= value.amount
                else:
                    inflow += value.amount
                if len(samples) < sample_size:
                    sign = "-" if value.amount < 0 else "+"
                    samples.append(
                        f"{record.date.isoformat()} {record.action} "
                        f"{sign} {abs(value.amount):.6f} {native_token}"
                    )
        flows.append(NativeFlow(source, inflow, outflow, tuple(samples)))
    return flows


def render_native_flows(flows: list[NativeFlow], native_token: str) -> str:
    lines: list[str] = []
    for flow in flows:
        lines += [
            f"Wallet: {flow.source}",
            f"  IN: {flow.inflow:.6f} {native_token}",
            f"  OUT: {flow.outflow:.6f} {native_token}",
            "  Sample Transactions:",
            *(f"    {sample}" for sample in flow.samples),
            "",
        ]
    total_in = sum((flow.inflow for flow in flows), Decimal(0))
    total_out = sum((flow.outflow for flow in flows), Decimal(0))
    lines += [
        "=== Total Summary Across All Wallets ===",
        f"  Total IN: {total_in:.6f} {native_token}",
        f"  Total OUT: {total_out:.6f} {native_token}",
        f"  Net: {total_in - total_out:.6f} {native_token}",
    ]
    return "\n".join(lines) + "\n"


@ReporterRegistry.register
class NativeFlowReporter(Reporter):
    """Write `<native>_in_out_summary.log` with per-wallet native totals."""

    @classmethod
    def name(cls) -> str:
        return "Native Flows"

    @property
    def output_dir(self) -> Path:
        return self.settings.reports_dir

    def generate(self, aggregator: RunAggregator) -> list[Path]:
        native = self.settings.native_token
        path = self._prepare_output_dir() / f"{native}_in_out_summary.log"
        flows = build_native_flows(aggregator, native)
        path.write_text(render_native_flows(flows, native), encoding="utf-8")
        return [path]
