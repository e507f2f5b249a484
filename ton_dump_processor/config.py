"""Core dump data models shared by the segmenter, aggregator and reporters."""

from bisect import bisect_right
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import StrEnum
from typing import Any, TypedDict

PLACEHOLDER_COUNTERPARTY = "-"


class ActionKind(StrEnum):
    """Normalized action vocabulary of one dump transaction."""

    SENT = "sent"
    RECEIVED = "received"
    SWAP = "swap"
    STAKE = "stake"
    WITHDRAW = "withdraw"
    NFT_TRANSFER = "nft-transfer"
    CONTRACT_CALL = "contract-call"
    UNKNOWN = "unknown"


class LogChange(TypedDict):
    """One before/after change rendered under a log header."""

    name: str
    before: str
    after: str


@dataclass(frozen=True, slots=True)
class TokenValue:
    """Signed amount of one token."""

    token: str
    amount: Decimal

    def to_dict(self) -> dict[str, str]:
        """Serialize value with a plain decimal string amount."""
        return {"token": self.token, "amount": format(self.amount, "f")}


@dataclass(frozen=True, slots=True)
class TransactionRecord:
    """One closed transaction parsed from a wallet dump."""

    date: date
    source: str
    action: ActionKind = ActionKind.UNKNOWN
    counterparty: str = PLACEHOLDER_COUNTERPARTY
    memo: str | None = None
    values: tuple[TokenValue, ...] = ()
    date_estimated: bool = False

    @property
    def year(self) -> int:
        """Return calendar year of the transaction."""
        return self.date.year

    def to_dict(self) -> dict[str, Any]:
        """Serialize record for structured per-wallet exports."""
        return {
            "date": self.date.isoformat(),
            "action": str(self.action),
            "counterparty": self.counterparty,
            "memo": self.memo,
            "values": [value.to_dict() for value in self.values],
            "date_estimated": self.date_estimated,
        }


@dataclass(slots=True)
class AddressStat:
    """Occurrence statistics of one counterparty address."""

    address: str
    count: int = 0
    first_seen: date | None = None
    last_seen: date | None = None

    def observe(self, seen: date) -> None:
        """Count one occurrence and widen the seen-date range."""
        self.count += 1
        if self.first_seen is None or seen < self.first_seen:
            self.first_seen = seen
        if self.last_seen is None or seen > self.last_seen:
            self.last_seen = seen


class ProcessingLogs(list[str]):
    """Date-ordered sink of formatted processing log entries."""

    def __init__(self) -> None:
        """Initialize empty sink with its parallel date index."""
        super().__init__()
        self._dates: list[date] = []

    def add(self, log_date: date, message: str) -> None:
        """Insert message after every entry logged on the same or an earlier date."""
        index = bisect_right(self._dates, log_date)
        self._dates.insert(index, log_date)
        self.insert(index, message)

    def update(
        self,
        source: str,
        log_date: date,
        action: str,
        detail: str,
        changes: list[LogChange],
    ) -> None:
        """Format and insert one log entry with its change bullets."""
        header = (
            f"[\x1b[36m{source}\x1b[0m] "
            f"[\x1b[95m{log_date.strftime('%m/%d/%Y')}\x1b[0m] "
            f"[\x1b[33m{action} {detail}\x1b[0m]"
        )
        changes_text = "\n".join(
            (
                f" \x1b[36m•\x1b[0m {change['name']}: "
                f"\x1b[31m{change['before']}\x1b[0m -> "
                f"\x1b[32m{change['after']}\x1b[0m"
            )
            for change in changes
        )
        self.add(log_date, f"{header}\n{changes_text}" if changes_text else header)

    def clear(self) -> None:
        """Drop every entry."""
        super().clear()
        self._dates.clear()
