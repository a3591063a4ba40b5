from __future__ import annotations

from typing import Callable, Iterable, List, Sequence, Tuple

import pytest

from qr_bingo.models import Position, Sheet, Slot, Variation


def _make_sheet(values: Sequence[Sequence[object]]) -> Sheet:
    slots: List[List[Slot]] = []
    for y, row in enumerate(values):
        slots.append([Slot(value=v, position=Position(x, y)) for x, v in enumerate(row)])
    return Sheet(width=len(values[0]), height=len(values), slots=slots)


def _punch_cells(sheet: Sheet, cells: Iterable[Tuple[int, int]]) -> None:
    for x, y in cells:
        sheet.slots[y][x].punched = True


@pytest.fixture
def make_sheet() -> Callable[[Sequence[Sequence[object]]], Sheet]:
    """Build a sheet straight from a value grid (rows top to bottom)."""
    return _make_sheet


@pytest.fixture
def punch_cells() -> Callable[[Sheet, Iterable[Tuple[int, int]]], None]:
    return _punch_cells


@pytest.fixture
def grid3() -> Sheet:
    return _make_sheet([[1, 2, 3], [4, 5, 6], [7, 8, 9]])


@pytest.fixture
def catalog() -> List[Variation]:
    return [Variation(value=f"P{i}", label=f"Prize {i}") for i in range(5)]
