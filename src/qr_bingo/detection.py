"""Line completion checks over a slot grid."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Sequence

if TYPE_CHECKING:
    from .models import Sheet, Slot

logger = logging.getLogger(__name__)


def _complete(line: Sequence[Slot]) -> bool:
    return all(slot.punched for slot in line)


def horizontal_bingo(grid: Sequence[Sequence[Slot]]) -> List[Slot]:
    """First fully punched row, scanning from the top."""
    for row in grid:
        if _complete(row):
            return list(row)
    return []


def vertical_bingo(grid: Sequence[Sequence[Slot]]) -> List[Slot]:
    """First fully punched column, scanning from the left."""
    if not grid:
        return []
    for col in range(len(grid[0])):
        column = [row[col] for row in grid]
        if _complete(column):
            return column
    return []


def diagonal_bingo(grid: Sequence[Sequence[Slot]]) -> List[Slot]:
    """Fully punched diagonals of a square grid.

    The main diagonal comes first, then the anti-diagonal. When both are
    complete on an odd-sized grid the centre slot appears twice. Non-square
    grids have no diagonals and always return an empty list.
    """
    size = len(grid)
    if size == 0 or any(len(row) != size for row in grid):
        return []
    bingo: List[Slot] = []
    backslash = [grid[i][i] for i in range(size)]
    if _complete(backslash):
        bingo.extend(backslash)
    slash = [grid[i][size - 1 - i] for i in range(size)]
    if _complete(slash):
        bingo.extend(slash)
    return bingo


def collect_bingo(sheet: Sheet) -> List[Slot]:
    """Concatenate horizontal, vertical and diagonal results and flag them.

    Flags only move from False to True, so repeated calls are safe.
    """
    bingo: List[Slot] = []
    bingo.extend(horizontal_bingo(sheet.slots))
    bingo.extend(vertical_bingo(sheet.slots))
    bingo.extend(diagonal_bingo(sheet.slots))
    for slot in bingo:
        sheet.slots[slot.position.y][slot.position.x].bingo = True
    if bingo:
        logger.info("Bingo with %d slot(s)", len(bingo))
    return bingo
