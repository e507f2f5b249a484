"""Line-driven state machine grouping dump lines into transaction records."""

import re
from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import date
from enum import StrEnum
from typing import NamedTuple

from ton_dump_processor.config import (
    PLACEHOLDER_COUNTERPARTY,
    ActionKind,
    ProcessingLogs,
    TokenValue,
    TransactionRecord,
)
from ton_dump_processor.dates import DATE_HEADER_PATTERN, resolve_date
from ton_dump_processor.values import VALUE_PATTERN, extract_value

ACTION_PREFIXES: tuple[tuple[str, ActionKind], ...] = (
    ("Sent TON", ActionKind.SENT),
    ("Received TON", ActionKind.RECEIVED),
    ("Send token", ActionKind.SENT),
    ("Received token", ActionKind.RECEIVED),
    ("Called contract", ActionKind.CONTRACT_CALL),
    ("Swap tokens", ActionKind.SWAP),
    ("Burn token", ActionKind.CONTRACT_CALL),
    ("Mint token", ActionKind.CONTRACT_CALL),
    ("Deposit stake", ActionKind.STAKE),
    ("Stake withdraw", ActionKind.WITHDRAW),
    ("Withdrawal request", ActionKind.WITHDRAW),
    ("Send NFT", ActionKind.NFT_TRANSFER),
    ("Received NFT", ActionKind.NFT_TRANSFER),
)

_SEGMENT_GAP = re.compile(r"\s{2,}")


class SegmenterState(StrEnum):
    """Whether a transaction record is currently being accumulated."""

    AWAITING = "awaiting"
    OPEN = "open"


@dataclass(frozen=True, slots=True)
class RecordDraft:
    """Transaction record still accumulating detail lines."""

    source: str
    date: date
    date_estimated: bool = False
    action: ActionKind | None = None
    counterparty: str | None = None
    memo: str | None = None
    values: tuple[TokenValue, ...] = ()

    def close(self) -> TransactionRecord:
        """Freeze draft into a record, defaulting missing action and counterparty."""
        return TransactionRecord(
            date=self.date,
            source=self.source,
            action=self.action or ActionKind.UNKNOWN,
            counterparty=self.counterparty or PLACEHOLDER_COUNTERPARTY,
            memo=self.memo,
            values=self.values,
            date_estimated=self.date_estimated,
        )


class LineStep(NamedTuple):
    """Result of feeding one line into the segmenter."""

    state: SegmenterState
    draft: RecordDraft | None
    emitted: TransactionRecord | None = None


def is_failed_line(line: str) -> bool:
    """Return whether line reports a failed operation."""
    return "Failed" in line or "failed" in line


def match_action(line: str) -> tuple[str, ActionKind] | None:
    """Return first `(prefix, kind)` entry whose prefix starts the line."""
    for prefix, kind in ACTION_PREFIXES:
        if line.startswith(prefix):
            return prefix, kind
    return None


def split_details(rest: str) -> tuple[str | None, str | None]:
    """Split text after the action verb into counterparty and memo.

    Segments are separated by runs of two or more spaces. The first segment is
    the counterparty unless it is a bare signed amount; every other segment,
    amounts included, is joined into the memo.
    """
    segments = [part.strip() for part in _SEGMENT_GAP.split(rest) if part.strip()]
    if not segments:
        return None, None
    if VALUE_PATTERN.fullmatch(segments[0]):
        return None, " | ".join(segments)
    return segments[0], " | ".join(segments[1:]) or None


def reduce_line(
    state: SegmenterState,
    draft: RecordDraft | None,
    line: str,
    source: str,
    today: date | None = None,
) -> LineStep:
    """Advance the segmenter by one raw line."""
    text = line.strip()
    if not text or is_failed_line(text):
        return LineStep(state, draft)

    if header := DATE_HEADER_PATTERN.match(text):
        resolved = resolve_date(header.group(0), today)
        emitted = draft.close() if state is SegmenterState.OPEN and draft is not None else None
        opened = RecordDraft(source=source, date=resolved.date, date_estimated=resolved.estimated)
        return LineStep(SegmenterState.OPEN, opened, emitted)

    if state is not SegmenterState.OPEN or draft is None:
        return LineStep(state, draft)
    if (matched := match_action(text)) is None:
        return LineStep(state, draft)

    prefix, kind = matched
    counterparty, memo = split_details(text[len(prefix) :])
    value = extract_value(text)
    updated = replace(
        draft,
        action=draft.action or kind,
        counterparty=draft.counterparty or counterparty,
        memo=draft.memo or memo,
        values=draft.values if value is None else (*draft.values, value),
    )
    return LineStep(state, updated)


def finish(state: SegmenterState, draft: RecordDraft | None) -> TransactionRecord | None:
    """Close the record left open at end of input."""
    if state is SegmenterState.OPEN and draft is not None:
        return draft.close()
    return None


def segment_lines(
    lines: Iterable[str],
    source: str,
    logs: ProcessingLogs | None = None,
    today: date | None = None,
) -> list[TransactionRecord]:
    """Group dump lines of one wallet into transaction records."""
    records: list[TransactionRecord] = []
    state, draft = SegmenterState.AWAITING, None
    for line in lines:
        state, draft, emitted = reduce_line(state, draft, line, source, today)
        if emitted is not None:
            records.append(emitted)
    if (last := finish(state, draft)) is not None:
        records.append(last)

    if logs is not None:
        for record in records:
            if record.date_estimated:
                logs.update(
                    source,
                    record.date,
                    "estimated",
                    "date",
                    changes=[{"name": "Date", "before": "unparseable", "after": "today"}],
                )
    return records
