"""Address-frequency report emitted as YAML records, CSV rows and a text digest."""

from collections import Counter
from pathlib import Path
from typing import Any

import pandas as pd
import yaml

from ton_dump_processor.aggregation import RunAggregator
from ton_dump_processor.classifier import classify_address
from ton_dump_processor.config import AddressStat
from ton_dump_processor.registry import ReporterRegistry
from ton_dump_processor.reporters.base import Reporter

ADDRESS_COLUMNS = ["address", "tx_count", "first_seen", "last_seen", "category"]


def build_address_rows(stats: list[AddressStat]) -> list[dict[str, Any]]:
    """Build one row per qualifying address, keeping the given order."""
    return [
        {
            "address": stat.address,
            "tx_count": stat.count,
            "first_seen": stat.first_seen.isoformat() if stat.first_seen else "",
            "last_seen": stat.last_seen.isoformat() if stat.last_seen else "",
            "category": classify_address(stat.address),
        }
        for stat in stats
    ]


def render_digest(
    rows: list[dict[str, Any]],
    threshold: int,
    top_n: int,
    native_token: str,
) -> str:
    """Render human-readable digest: totals, top-N, categories and date range."""
    top_rows = sorted(rows, key=lambda row: -row["tx_count"])[:top_n]
    categories = Counter(row["category"] for row in rows)
    first_dates = [row["first_seen"] for row in rows if row["first_seen"]]
    last_dates = [row["last_seen"] for row in rows if row["last_seen"]]
    lines = [
        f"── {native_token} Address Activity Summary ──",
        f"Total distinct addresses (>={threshold} txs, exclusions removed): {len(rows)}",
        f"Total transactions represented: {sum(row['tx_count'] for row in rows)}",
        "",
        f"── Top {top_n} active addresses ──",
        *(
            f"  • {row['address']} - {row['tx_count']} txs ({row['category']})"
            for row in top_rows
        ),
        "",
        "── Category distribution ──",
        *(f"  • {category}: {count}" for category, count in categories.items()),
        "",
        "── Global date range ──",
        f"Earliest transaction: {min(first_dates, default='-')}",
        f"Latest transaction: {max(last_dates, default='-')}",
    ]
    return "\n".join(lines) + "\n"


@ReporterRegistry.register
class AddressFrequencyReporter(Reporter):
    """Write `report.yaml`, `report.csv` and `summary.txt` from one qualified set."""

    @classmethod
    def name(cls) -> str:
        return "Address Frequency"

    @property
    def output_dir(self) -> Path:
        return self.settings.reports_dir

    def generate(self, aggregator: RunAggregator) -> list[Path]:
        """Write the three synchronized forms of the qualified address rows."""
        reports_dir = self._prepare_output_dir()
        rows = build_address_rows(aggregator.qualified(self.settings.threshold))

        yaml_path = reports_dir / "report.yaml"
        yaml_path.write_text(
            yaml.safe_dump(rows, sort_keys=False, allow_unicode=True),
            encoding="utf-8",
        )
        csv_path = reports_dir / "report.csv"
        pd.DataFrame(rows, columns=ADDRESS_COLUMNS).to_csv(csv_path, index=False)
        summary_path = reports_dir / "summary.txt"
        summary_path.write_text(
            render_digest(
                rows,
                self.settings.threshold,
                self.settings.top_n,
                self.settings.native_token,
            ),
            encoding="utf-8",
        )
        return [yaml_path, csv_path, summary_path]
