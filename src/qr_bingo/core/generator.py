"""Sheet generation from a variation catalog."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..layout import grid_position, shuffled_with_length
from ..models import Position, Sheet, Slot, Variation
from ..rng import RandomSource, create_rng

logger = logging.getLogger(__name__)


@dataclass
class GenerationParams:
    """Parameters for sheet generation."""

    width: int
    height: int
    variations: List[Variation]


class SheetGenerator:
    """Builds sheets with balanced random placement of variations."""

    def __init__(self, rng: Optional[RandomSource] = None):
        self.rng = rng or create_rng("py_random")

    def generate(self, params: GenerationParams) -> Sheet:
        """Build a new sheet. Never touches any stored sheet."""
        if params.width <= 0 or params.height <= 0:
            raise ValueError(
                f"width and height must be positive, got {params.width}x{params.height}"
            )
        if not params.variations:
            raise ValueError("Cannot generate a sheet from an empty variation catalog")

        length = params.width * params.height
        drawn = shuffled_with_length(params.variations, length, self.rng)
        slots = self._place(drawn, params.width, params.height)

        logger.info(
            "Generated %dx%d sheet from %d variation(s) (rng=%s)",
            params.width,
            params.height,
            len(params.variations),
            self.rng.engine,
        )
        return Sheet(width=params.width, height=params.height, slots=slots)

    def _place(self, drawn: Sequence[Variation], width: int, height: int) -> List[List[Slot]]:
        slots: List[List[Slot]] = [[] for _ in range(height)]
        for index, variation in enumerate(drawn):
            x, y = grid_position(index, width)
            slots[y].append(Slot.from_variation(variation, Position(x, y)))
        return slots
