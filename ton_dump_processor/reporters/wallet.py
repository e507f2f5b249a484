"""Per-wallet tabular and structured transaction exports."""

from pathlib import Path

import pandas as pd
import yaml

from ton_dump_processor.aggregation import RunAggregator
from ton_dump_processor.config import TransactionRecord
from ton_dump_processor.registry import ReporterRegistry
from ton_dump_processor.reporters.base import Reporter
from ton_dump_processor.values import render_values

WALLET_COLUMNS = ["date", "wallet", "action", "counterparty", "memo", "values"]


def build_wallet_dataframe(source: str, records: list[TransactionRecord]) -> pd.DataFrame:
    """Build one export row per record with its rendered net values."""
    rows = [
        {
            "date": record.date.isoformat(),
            "wallet": source,
            "action": str(record.action),
            "counterparty": record.counterparty,
            "memo": record.memo or "",
            "values": render_values(record.values),
        }
        for record in records
    ]
    return pd.DataFrame(rows, columns=WALLET_COLUMNS)


@ReporterRegistry.register
class WalletExportReporter(Reporter):
    """Write `<wallet>.csv` and `<wallet>.yaml` for every processed wallet."""

    @classmethod
    def name(cls) -> str:
        return "Wallet Exports"

    @property
    def output_dir(self) -> Path:
        return self.settings.csv_dir

    def generate(self, aggregator: RunAggregator) -> list[Path]:
        """Export each wallet's records in encounter order."""
        csv_dir = self._prepare_output_dir()
        yaml_dir = self.settings.yaml_dir
        yaml_dir.mkdir(parents=True, exist_ok=True)
        paths: list[Path] = []
        for source in aggregator.sources:
            records = aggregator.records_for(source)
            csv_path = csv_dir / f"{source}.csv"
            build_wallet_dataframe(source, records).to_csv(csv_path, index=False)
            yaml_path = yaml_dir / f"{source}.yaml"
            payload = {
                "wallet": source,
                "transaction_count": len(records),
                "transactions": [record.to_dict() for record in records],
            }
            yaml_path.write_text(
                yaml.safe_dump(payload, sort_keys=False, allow_unicode=True),
                encoding="utf-8",
            )
            paths.extend([csv_path, yaml_path])
        return paths
