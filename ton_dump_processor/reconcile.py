"""Cross-check of native-token totals between raw dump lines and parsed records."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from ton_dump_processor.config import TransactionRecord
from ton_dump_processor.segmenter import is_failed_line
from ton_dump_processor.values import extract_value

TOLERANCE = Decimal("0.001")


@dataclass(frozen=True, slots=True)
class Reconciliation:
    """Native-token totals of one wallet computed two ways."""

    source: str
    raw_total: Decimal
    parsed_total: Decimal

    @property
    def difference(self) -> Decimal:
        """Return absolute gap between raw and parsed totals."""
        return abs(self.raw_total - self.parsed_total)

    @property
    def matches(self) -> bool:
        """Return whether totals agree within tolerance."""
        return self.difference < TOLERANCE


def raw_native_total(lines: Iterable[str], native_token: str) -> Decimal:
    """Sum every signed native amount found in non-failed raw lines."""
    total = Decimal(0)
    for line in lines:
        if is_failed_line(line):
            continue
        value = extract_value(line)
        if value is not None and value.token.casefold() == native_token.casefold():
            total += value.amount
    return total


def parsed_native_total(records: Iterable[TransactionRecord], native_token: str) -> Decimal:
    """Sum native amounts attached to parsed records."""
    return sum(
        (
            value.amount
            for record in records
            for value in record.values
            if value.token.casefold() == native_token.casefold()
        ),
        Decimal(0),
    )


def reconcile(
    source: str,
    lines: list[str],
    records: list[TransactionRecord],
    native_token: str,
) -> Reconciliation:
    """Compare raw and parsed native totals of one wallet."""
    return Reconciliation(
        source=source,
        raw_total=raw_native_total(lines, native_token),
        parsed_total=parsed_native_total(records, native_token),
    )


def write_reconciliation_log(
    reconciliations: list[Reconciliation],
    path: Path,
    native_token: str,
) -> Path:
    """Write MATCH/MISMATCH lines per wallet and the total parsed native amount."""
    rule = "-" * 50
    lines = [f"Comparison Log - {datetime.now().isoformat(timespec='seconds')}", rule]
    for item in reconciliations:
        lines += [
            f"{'MATCH' if item.matches else 'MISMATCH'}: {item.source}",
            f"    Raw Value: {item.raw_total:.2f}",
            f"    Parsed Value: {item.parsed_total:.2f}",
        ]
        if not item.matches:
            lines.append(f"    Difference: {item.difference:.2f}")
        lines.append(rule)
    mismatches = [item for item in reconciliations if not item.matches]
    total = sum((item.parsed_total for item in reconciliations), Decimal(0))
    lines += ["SUMMARY", rule, f"Total Net {native_token}: {total:.2f}"]
    lines.append(f"Mismatches: {len(mismatches)}")
    lines += [f"  {item.source} - Diff: {item.difference:.2f}" for item in mismatches]
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path
