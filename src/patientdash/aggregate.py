"""Count records per category and rank the categories."""

from __future__ import annotations

from collections import Counter
from typing import Dict, Iterable, List, Tuple

import pandas as pd

from .models import Record

DEFAULT_FIELD = "disease"


def count_categories(records: Iterable[Record], field: str = DEFAULT_FIELD) -> Dict[str, int]:
    """Count occurrences of each value of ``field``.

    Keys keep the order in which values were first seen.  Records without
    the field are counted under ``"undefined"``.
    """
    counts: Counter = Counter()
    for record in records:
        counts[record.category(field)] += 1
    return dict(counts)


def sort_counts(counts: Dict[str, int]) -> List[Tuple[str, int]]:
    """Return ``(label, count)`` pairs by count descending.

    ``sorted`` is stable, so equal counts keep first-seen order.
    """
    return sorted(counts.items(), key=lambda kv: kv[1], reverse=True)


def aggregate(records: Iterable[Record], field: str = DEFAULT_FIELD) -> List[Tuple[str, int]]:
    return sort_counts(count_categories(records, field))


def counts_frame(pairs: List[Tuple[str, int]]) -> pd.DataFrame:
    """Tabular view of ranked pairs, for display."""
    return pd.DataFrame(pairs, columns=["category", "count"]).astype({"category": str, "count": int})
