"""Heuristic counterparty categories."""

import re

DEFAULT_CATEGORY = "other"

CATEGORY_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"dedust", re.IGNORECASE), "dex_dedust"),
    (re.compile(r"ston\.?fi", re.IGNORECASE), "dex_stonfi"),
    (re.compile(r"official[-_]nft\.ton|getgems", re.IGNORECASE), "nft_marketplace"),
    (re.compile(r"sphynxmeme\.ton", re.IGNORECASE), "nft_collection"),
    (re.compile(r"^UQ[A-Z]{2}"), "user_wallet"),
)


def classify_address(address: str) -> str:
    """Return category of the first matching pattern, or `other`."""
    for pattern, category in CATEGORY_PATTERNS:
        if pattern.search(address):
            return category
    return DEFAULT_CATEGORY
