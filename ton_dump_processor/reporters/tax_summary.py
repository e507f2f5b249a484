"""Yearly and combined textual tax summaries."""

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from pathlib import Path

import pandas as pd

from ton_dump_processor.aggregation import RunAggregator
from ton_dump_processor.config import TransactionRecord
from ton_dump_processor.registry import ReporterRegistry
from ton_dump_processor.reporters.base import Reporter

RULE_WIDTH = 80
SECTION_RULE_WIDTH = 40


def _fmt(amount: Decimal) -> str:
    return format(amount, "f")


@dataclass(frozen=True, slots=True)
class TaxSummary:
    """Transaction statistics and token movements of one reporting scope."""

    transaction_count: int = 0
    action_counts: dict[str, int] = field(default_factory=dict)
    native_sent: Decimal = Decimal(0)
    native_received: Decimal = Decimal(0)
    token_balances: dict[str, Decimal] = field(default_factory=dict)

    @property
    def native_net(self) -> Decimal:
        """Return received minus sent native amount."""
        return self.native_received - self.native_sent

    @classmethod
    def from_records(
        cls,
        records: Iterable[TransactionRecord],
        native_token: str,
    ) -> "TaxSummary":
        """Summarize records, splitting native movements from other token balances."""
        action_counts: Counter[str] = Counter()
        sent = received = Decimal(0)
        balances: dict[str, Decimal] = {}
        count = 0
        for record in records:
            count += 1
            action_counts[str(record.action)] += 1
            for value in record.values:
                if value.token.casefold() == native_token.casefold():
                    if value.amount < 0:
                        sent += -value.amount
                    else:
                        received += value.amount
                else:
                    balances[value.token] = balances.get(value.token, Decimal(0)) + value.amount
        return cls(
            transaction_count=count,
            action_counts=dict(action_counts),
            native_sent=sent,
            native_received=received,
            token_balances=balances,
        )

    def to_text(
        self,
        title: str,
        native_token: str,
        generated_on: date,
        wallet_count: int | None = None,
    ) -> str:
        """Render report text with fixed section headers."""
        lines = [title, f"Generated on: {generated_on.isoformat()}", "=" * RULE_WIDTH, ""]
        lines += ["1. Transaction Statistics", "-" * SECTION_RULE_WIDTH]
        if wallet_count is not None:
            lines.append(f"Total wallets processed: {wallet_count}")
        lines += [f"Total transactions: {self.transaction_count}", "", "Transaction types:"]
        lines += [f"{action.capitalize()}: {count}" for action, count in self.action_counts.items()]
        lines += ["", f"2. {native_token} Movements", "-" * SECTION_RULE_WIDTH]
        lines += [
            f"Sent: {_fmt(self.native_sent)}",
            f"Received: {_fmt(self.native_received)}",
            f"Net: {_fmt(self.native_net)}",
        ]
        lines += ["", "3. Jetton Holdings", "-" * SECTION_RULE_WIDTH]
        lines += [f"{token}: {_fmt(balance)}" for token, balance in self.token_balances.items()]
        return "\n".join(lines) + "\n"

    def to_dict(self, native_token: str) -> dict[str, str]:
        """Serialize summary to display-row labels and values."""
        return {
            "Transactions": str(self.transaction_count),
            **{
                f"Type: {action.capitalize()}": str(count)
                for action, count in self.action_counts.items()
            },
            f"{native_token} Sent": _fmt(self.native_sent),
            f"{native_token} Received": _fmt(self.native_received),
            f"{native_token} Net": _fmt(self.native_net),
            **{f"Jetton: {token}": _fmt(bal) for token, bal in self.token_balances.items()},
        }


def summarize(aggregator: RunAggregator, native_token: str) -> dict[str, TaxSummary]:
    """Return one summary per year plus a `Combined` summary over all records."""
    summaries = {
        str(year): TaxSummary.from_records(
            (record for record in aggregator.records if record.year == year),
            native_token,
        )
        for year in aggregator.years
    }
    summaries["Combined"] = TaxSummary.from_records(aggregator.records, native_token)
    return summaries


def summaries_to_dataframe(summaries: dict[str, TaxSummary], native_token: str) -> pd.DataFrame:
    """Convert summaries to a table with one column per scope."""
    df = pd.DataFrame.from_dict(
        {scope: summary.to_dict(native_token) for scope, summary in summaries.items()},
        orient="index",
    ).T
    return df.fillna("0")


@ReporterRegistry.register
class TaxSummaryReporter(Reporter):
    """Write `TON_Tax_Report_<year>.txt` files and the combined report."""

    @classmethod
    def name(cls) -> str:
        return "Tax Summaries"

    @property
    def output_dir(self) -> Path:
        return self.settings.reports_dir

    def generate(self, aggregator: RunAggregator) -> list[Path]:
        """Write one report per calendar year and one combined report."""
        reports_dir = self._prepare_output_dir()
        native = self.settings.native_token
        today = date.today()
        paths: list[Path] = []
        for scope, summary in summarize(aggregator, native).items():
            if scope == "Combined":
                path = reports_dir / f"Combined_{native}_Tax_Report.txt"
                text = summary.to_text(
                    f"Combined {native} Wallet Tax Report",
                    native,
                    today,
                    wallet_count=len(aggregator.sources),
                )
            else:
                path = reports_dir / f"{native}_Tax_Report_{scope}.txt"
                text = summary.to_text(f"{native} Wallet Tax Report {scope}", native, today)
            path.write_text(text, encoding="utf-8")
            paths.append(path)
        return paths
