"""Sheet lifecycle over an injected store."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ..models import Payload, Sheet, Slot
from ..store import SheetStore
from .generator import GenerationParams, SheetGenerator

logger = logging.getLogger(__name__)


@dataclass
class ScanOutcome:
    """What one scan did to the live sheet."""

    sheet: Sheet
    hit: Optional[Slot]
    punched: List[Slot] = field(default_factory=list)
    bingo: List[Slot] = field(default_factory=list)

    @property
    def matched(self) -> bool:
        return self.hit is not None

    @property
    def is_bingo(self) -> bool:
        return len(self.bingo) != 0


class BingoSession:
    """Owns the live sheet: generates it, punches it and saves it back."""

    def __init__(self, store: SheetStore, generator: Optional[SheetGenerator] = None):
        self.store = store
        self.generator = generator or SheetGenerator()

    def current(self) -> Optional[Sheet]:
        return self.store.find()

    def require(self) -> Sheet:
        sheet = self.store.find()
        if sheet is None:
            raise LookupError("No bingo sheet has been generated yet")
        return sheet

    def start(self, params: GenerationParams, *, force: bool = False) -> Sheet:
        """Generate and save a new sheet.

        An existing sheet is only replaced when ``force`` is set.
        """
        if not force and self.store.find() is not None:
            raise FileExistsError("A bingo sheet already exists")
        sheet = self.generator.generate(params)
        return self.store.save(sheet)

    def scan(self, payload: Payload) -> ScanOutcome:
        sheet = self.require()
        hit = sheet.hit(payload)
        if hit is None:
            logger.info("No slot matches scanned value %r", payload.value)
            return ScanOutcome(sheet=sheet, hit=None)
        punched = sheet.punch(hit)
        bingo = sheet.get_bingo()
        sheet = self.store.save(sheet)
        logger.info(
            "Scanned %r at (%d,%d): %d newly punched, bingo=%s",
            hit.value,
            hit.position.x,
            hit.position.y,
            len(punched),
            bool(bingo),
        )
        return ScanOutcome(sheet=sheet, hit=hit, punched=punched, bingo=bingo)
