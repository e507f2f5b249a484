"""Run-scoped accumulators for token balances and counterparty statistics."""

from collections import Counter
from collections.abc import Iterable
from decimal import Decimal

from ton_dump_processor.config import (
    PLACEHOLDER_COUNTERPARTY,
    AddressStat,
    TransactionRecord,
)

DEFAULT_THRESHOLD = 5


class RunAggregator:
    """Accumulate every record closed during one processing run."""

    def __init__(self, exclusions: Iterable[str] = ()) -> None:
        """Store excluded (self-owned) addresses and start with empty aggregates."""
        self.exclusions = frozenset(exclusions)
        self.sources: list[str] = []
        self.records: list[TransactionRecord] = []
        self.token_balances: dict[str, Decimal] = {}
        self.address_stats: dict[str, AddressStat] = {}
        self.action_counts: Counter[str] = Counter()

    @property
    def years(self) -> list[int]:
        """Return sorted calendar years present in processed records."""
        return sorted({record.year for record in self.records})

    def add_source(self, source: str) -> None:
        """Register one processed wallet, even when it yielded no records."""
        if source not in self.sources:
            self.sources.append(source)

    def add(self, record: TransactionRecord) -> None:
        """Fold one closed record into balances, action counts and address stats."""
        self.add_source(record.source)
        self.records.append(record)
        self.action_counts[str(record.action)] += 1
        for value in record.values:
            self.token_balances[value.token] = (
                self.token_balances.get(value.token, Decimal(0)) + value.amount
            )
        address = record.counterparty
        if address == PLACEHOLDER_COUNTERPARTY or address in self.exclusions:
            return
        if address not in self.address_stats:
            self.address_stats[address] = AddressStat(address)
        self.address_stats[address].observe(record.date)

    def extend(self, records: Iterable[TransactionRecord]) -> "RunAggregator":
        """Fold records in order and return the aggregator for chaining."""
        for record in records:
            self.add(record)
        return self

    def records_for(self, source: str) -> list[TransactionRecord]:
        """Return records of one wallet in encounter order."""
        return [record for record in self.records if record.source == source]

    def qualified(self, threshold: int = DEFAULT_THRESHOLD) -> list[AddressStat]:
        """Return stats of addresses seen at least `threshold` times, in insertion order."""
        return [stat for stat in self.address_stats.values() if stat.count >= threshold]

    def reset(self) -> None:
        """Drop all accumulated state while keeping exclusions."""
        self.sources.clear()
        self.records.clear()
        self.token_balances.clear()
        self.address_stats.clear()
        self.action_counts.clear()
