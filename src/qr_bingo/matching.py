"""Resolve scanned payloads to slots and punch them."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, List, Optional

if TYPE_CHECKING:
    from .models import Payload, Sheet, Slot

logger = logging.getLogger(__name__)


def values_equal(a: Any, b: Any) -> bool:
    """Strict equality: no str/int coercion and booleans never match numbers."""
    return isinstance(a, bool) == isinstance(b, bool) and a == b


def find_hit(sheet: Sheet, payload: Payload) -> Optional[Slot]:
    for slot in sheet.flat():
        if values_equal(slot.value, payload.value):
            return slot
    return None


def punch_matching_value(sheet: Sheet, value: Any) -> List[Slot]:
    """Punch every slot on the sheet whose value equals ``value``.

    Duplicated values are punched together, not only the scanned cell.
    Returns the slots that changed state; punching a value that is already
    punched, or no longer on the sheet, changes nothing.
    """
    changed: List[Slot] = []
    for slot in sheet.flat():
        if not values_equal(slot.value, value) or slot.punched:
            continue
        slot.punched = True
        changed.append(slot)
    logger.debug("Punched %d slot(s) for value %r", len(changed), value)
    return changed
