from __future__ import annotations

from collections import Counter
from typing import Any, Dict, Sequence

from .layout import min_occurrences
from .models import Sheet, Variation


def compute_frequencies(sheet: Sheet) -> Dict[Any, int]:
    counts: Counter = Counter(slot.value for slot in sheet.flat())
    return dict(counts)


def check_positions(sheet: Sheet) -> bool:
    for y, row in enumerate(sheet.slots):
        for x, slot in enumerate(row):
            if slot.position != (x, y):
                return False
    return True


def coverage_report(sheet: Sheet, variations: Sequence[Variation]) -> Dict[str, object]:
    """Summarize how evenly a sheet draws from its catalog.

    Counts are per catalog entry, so an entry whose value is repeated in the
    catalog shares the tally of that value.
    """
    freqs = compute_frequencies(sheet)
    catalog_size = len(variations)
    expected = min_occurrences(sheet.length, catalog_size) if catalog_size else 0
    per_entry = [freqs.get(v.value, 0) for v in variations]
    return {
        "length": sheet.length,
        "catalog_size": catalog_size,
        "min_expected": expected,
        "frequencies": freqs,
        "max_minus_min": (max(freqs.values()) - min(freqs.values())) if freqs else 0,
        "ok_coverage": all(count >= expected for count in per_entry),
        "ok_positions": check_positions(sheet),
        "punched": sum(1 for slot in sheet.flat() if slot.punched),
        "bingo": sum(1 for slot in sheet.flat() if slot.bingo),
    }
