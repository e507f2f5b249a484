"""Tests for run-scoped aggregation of closed records."""

from datetime import date
from decimal import Decimal
from unittest import TestCase

from ton_dump_processor.aggregation import DEFAULT_THRESHOLD, RunAggregator
from ton_dump_processor.config import ActionKind, AddressStat, TokenValue, TransactionRecord


def _record(
    counterparty: str = "ADDR1",
    day: int = 1,
    source: str = "w1",
    *values: TokenValue,
) -> TransactionRecord:
    return TransactionRecord(
        date=date(2024, 9, day),
        source=source,
        action=ActionKind.SENT,
        counterparty=counterparty,
        values=values,
    )


class TestRunAggregator(TestCase):
    """Test balances, address statistics and qualification."""

    def test_balances_and_address_stats_follow_records(self) -> None:
        """Sent then received TON nets the balance and widens the seen range."""
        aggregator = RunAggregator().extend(
            [
                _record("ADDR1", 12, "w1", TokenValue("TON", Decimal("-5"))),
                _record("ADDR1", 13, "w1", TokenValue("TON", Decimal("3"))),
            ]
        )
        self.assertEqual(aggregator.token_balances, {"TON": Decimal("-2")})
        self.assertEqual(
            aggregator.address_stats["ADDR1"],
            AddressStat("ADDR1", 2, date(2024, 9, 12), date(2024, 9, 13)),
        )
        self.assertEqual(aggregator.action_counts, {"sent": 2})

    def test_out_of_order_dates_keep_min_and_max(self) -> None:
        """First and last seen do not depend on encounter order."""
        aggregator = RunAggregator().extend(
            [_record(day=20), _record(day=5), _record(day=10)]
        )
        stat = aggregator.address_stats["ADDR1"]
        self.assertEqual((stat.first_seen, stat.last_seen), (date(2024, 9, 5), date(2024, 9, 20)))

    def test_placeholder_and_excluded_addresses_are_not_counted(self) -> None:
        """Records still count toward totals but not toward address stats."""
        aggregator = RunAggregator(exclusions={"MINE"}).extend(
            [
                _record("-", 1, "w1", TokenValue("TON", Decimal("1"))),
                _record("MINE", 2, "w1", TokenValue("TON", Decimal("1"))),
                _record("OTHER", 3),
            ]
        )
        self.assertEqual(list(aggregator.address_stats), ["OTHER"])
        self.assertEqual(len(aggregator.records), 3)
        self.assertEqual(aggregator.token_balances, {"TON": Decimal("2")})

    def test_stats_accumulate_across_wallets(self) -> None:
        """Counts of the same address from different wallets add up."""
        aggregator = RunAggregator().extend(
            [_record("SHARED", day, "w1") for day in (1, 2, 3)]
            + [_record("SHARED", day, "w2") for day in (4, 5, 6)]
        )
        self.assertEqual(aggregator.address_stats["SHARED"].count, 6)
        self.assertEqual(aggregator.sources, ["w1", "w2"])
        self.assertEqual(len(aggregator.records_for("w2")), 3)

    def test_qualified_applies_threshold_in_insertion_order(self) -> None:
        """Addresses below the threshold are dropped; order is first insertion."""
        records = [_record("B", 1)] * 5 + [_record("A", 1)] * 6 + [_record("C", 1)] * 4
        aggregator = RunAggregator().extend(records)
        self.assertEqual(DEFAULT_THRESHOLD, 5)
        self.assertEqual([stat.address for stat in aggregator.qualified()], ["B", "A"])
        self.assertEqual([stat.address for stat in aggregator.qualified(1)], ["B", "A", "C"])
        self.assertEqual(aggregator.qualified(7), [])

    def test_years_and_add_source_without_records(self) -> None:
        """Wallets yielding no records are still tracked as sources."""
        aggregator = RunAggregator()
        aggregator.add_source("empty")
        aggregator.add_source("empty")
        aggregator.add(
            TransactionRecord(date=date(2023, 1, 1), source="w1", values=())
        )
        aggregator.add(_record())
        self.assertEqual(aggregator.sources, ["empty", "w1"])
        self.assertEqual(aggregator.years, [2023, 2024])
        self.assertEqual(aggregator.records_for("empty"), [])

    def test_reset_drops_state_but_keeps_exclusions(self) -> None:
        """Reset starts a fresh run with the same exclusions."""
        aggregator = RunAggregator(exclusions=["MINE"]).extend([_record()])
        aggregator.reset()
        self.assertEqual(aggregator.records, [])
        self.assertEqual(aggregator.sources, [])
        self.assertEqual(aggregator.token_balances, {})
        self.assertEqual(aggregator.address_stats, {})
        self.assertEqual(sum(aggregator.action_counts.values()), 0)
        self.assertEqual(aggregator.exclusions, frozenset({"MINE"}))

    def test_aggregation_is_deterministic(self) -> None:
        """Same records in the same order give identical aggregates."""
        records = [_record(f"A{index % 3}", index + 1) for index in range(9)]
        first = RunAggregator().extend(records)
        second = RunAggregator().extend(records)
        self.assertEqual(first.address_stats, second.address_stats)
        self.assertEqual(first.token_balances, second.token_balances)
