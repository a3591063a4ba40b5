"""Sheet and slot data model."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterator, List, NamedTuple, Optional, Union

from . import detection, matching

SlotValue = Union[str, int, float]


class Position(NamedTuple):
    x: int
    y: int


@dataclass(frozen=True)
class Variation:
    """One prize in the catalog a sheet is drawn from."""

    value: SlotValue
    label: str = ""
    description: str = ""
    image_url: str = ""


@dataclass(frozen=True)
class Payload:
    """Decoded content of a scanned QR code."""

    value: SlotValue


@dataclass
class Slot:
    value: SlotValue
    position: Position
    label: str = ""
    description: str = ""
    image_url: str = ""
    punched: bool = False
    bingo: bool = False

    @classmethod
    def from_variation(cls, variation: Variation, position: Position) -> Slot:
        return cls(
            value=variation.value,
            position=position,
            label=variation.label,
            description=variation.description,
            image_url=variation.image_url,
        )


@dataclass
class Sheet:
    """A ``height`` x ``width`` grid of slots.

    ``slots[y][x].position == (x, y)`` is checked on construction and the
    grid shape never changes afterwards; only the slot flags mutate.
    """

    width: int
    height: int
    slots: List[List[Slot]]
    initialized: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Sheet dimensions must be positive, got {self.width}x{self.height}")
        if len(self.slots) != self.height:
            raise ValueError(f"Expected {self.height} rows, got {len(self.slots)}")
        seen = set()
        for y, row in enumerate(self.slots):
            if len(row) != self.width:
                raise ValueError(f"Row {y} has {len(row)} slots, expected {self.width}")
            for x, slot in enumerate(row):
                if slot.position != (x, y):
                    raise ValueError(f"Slot at ({x},{y}) reports position {tuple(slot.position)}")
                if id(slot) in seen:
                    raise ValueError(f"Slot at ({x},{y}) is shared with another cell")
                seen.add(id(slot))

    @property
    def length(self) -> int:
        return self.width * self.height

    def flat(self) -> Iterator[Slot]:
        """Iterate slots in row-major order."""
        for row in self.slots:
            yield from row

    def slot_at(self, x: int, y: int) -> Slot:
        return self.slots[y][x]

    def hit(self, payload: Payload) -> Optional[Slot]:
        """Return the first slot matching the payload value, or None."""
        return matching.find_hit(self, payload)

    def punch(self, hit: Slot) -> List[Slot]:
        """Punch every slot sharing the hit's value; returns the newly punched ones."""
        return matching.punch_matching_value(self, hit.value)

    def is_bingo(self) -> bool:
        return len(self.get_bingo()) != 0

    def get_bingo(self) -> List[Slot]:
        return detection.collect_bingo(self)

    def get_horizontal_bingo(self) -> List[Slot]:
        return detection.horizontal_bingo(self.slots)

    def get_vertical_bingo(self) -> List[Slot]:
        return detection.vertical_bingo(self.slots)

    def get_diagonal_bingo(self) -> List[Slot]:
        return detection.diagonal_bingo(self.slots)
