"""
Header aggregation for table mode.

Counts how often each column path occurs across all flattened records and
orders the resulting columns.
"""
import logging
from dataclasses import dataclass
from typing import Dict, List

from .flattener import FlatEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Header:
    name: str
    count: int


def count_headers(records: List[List[FlatEntry]]) -> List[Header]:
    """
    Count every occurrence of each column path, in first-seen order.

    A path repeated within one record counts once per occurrence.
    """
    counts: Dict[str, int] = {}
    for entries in records:
        for entry in entries:
            counts[entry.path] = counts.get(entry.path, 0) + 1
    return [Header(name, count) for name, count in counts.items()]


def aggregate_headers(records: List[List[FlatEntry]], sort_by_frequency: bool = True) -> List[Header]:
    """
    Build the ordered header list for a table.

    Args:
        records: Flattened entries of every top-level record
        sort_by_frequency: Order by descending count, ties in first-seen order

    Returns:
        One Header per distinct path observed in at least one record
    """
    headers = count_headers(records)
    if sort_by_frequency:
        # sorted() is stable, so equal counts keep first-seen order
        headers = sorted(headers, key=lambda header: header.count, reverse=True)

    logger.debug(f"Aggregated {len(headers)} headers from {len(records)} records")
    return headers
