"""Dated export of every non-native jetton movement."""

from pathlib import Path
from typing import Any

import pandas as pd
import yaml

from ton_dump_processor.aggregation import RunAggregator
from ton_dump_processor.registry import ReporterRegistry
from ton_dump_processor.reporters.base import Reporter

JETTON_COLUMNS = ["wallet", "date", "jetton", "amount", "action", "counterparty"]


def build_jetton_rows(aggregator: RunAggregator, native_token: str) -> list[dict[str, Any]]:
    """Build one row per non-zero, non-native value in record order."""
    return [
        {
            "wallet": record.source,
            "date": record.date.isoformat(),
            "jetton": value.token.upper(),
            "amount": format(value.amount, "f"),
            "action": str(record.action),
            "counterparty": record.counterparty,
        }
        for record in aggregator.records
        for value in record.values
        if value.token.casefold() != native_token.casefold() and value.amount != 0
    ]


@ReporterRegistry.register
class JettonDetailReporter(Reporter):
    """Write `non_<native>_jetton_detailed.yaml` and its CSV twin."""

    @classmethod
    def name(cls) -> str:
        return "Jetton Details"

    @property
    def output_dir(self) -> Path:
        return self.settings.reports_dir

    def generate(self, aggregator: RunAggregator) -> list[Path]:
        """Export jetton entries with their dates, wallets and signed amounts."""
        reports_dir = self._prepare_output_dir()
        stem = f"non_{self.settings.native_token}_jetton_detailed"
        rows = build_jetton_rows(aggregator, self.settings.native_token)
        yaml_path = reports_dir / f"{stem}.yaml"
        yaml_path.write_text(
            yaml.safe_dump(rows, sort_keys=False, allow_unicode=True),
            encoding="utf-8",
        )
        csv_path = reports_dir / f"{stem}.csv"
        pd.DataFrame(rows, columns=JETTON_COLUMNS).to_csv(csv_path, index=False)
        return [yaml_path, csv_path]
