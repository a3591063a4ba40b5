from __future__ import annotations

import itertools

from hypothesis import given, strategies as st


def test_fresh_sheet_has_no_bingo(grid3):
    assert grid3.get_bingo() == []
    assert grid3.is_bingo() is False
    assert not any(slot.bingo for slot in grid3.flat())


def test_horizontal_returns_first_complete_row(grid3, punch_cells):
    punch_cells(grid3, [(0, 1), (1, 1), (2, 1)])
    row = grid3.get_horizontal_bingo()
    assert [s.position for s in row] == [(0, 1), (1, 1), (2, 1)]
    assert grid3.get_vertical_bingo() == []
    assert grid3.get_diagonal_bingo() == []


def test_horizontal_tie_break_is_lowest_row(grid3, punch_cells):
    punch_cells(grid3, [(x, y) for y in (0, 2) for x in range(3)])
    assert [s.value for s in grid3.get_horizontal_bingo()] == [1, 2, 3]


def test_vertical_returns_first_complete_column(grid3, punch_cells):
    punch_cells(grid3, [(2, 0), (2, 1), (2, 2), (1, 0), (1, 1), (1, 2)])
    col = grid3.get_vertical_bingo()
    assert [s.position for s in col] == [(1, 0), (1, 1), (1, 2)]
    assert grid3.get_horizontal_bingo() == []


def test_main_diagonal_only(grid3, punch_cells):
    punch_cells(grid3, [(0, 0), (1, 1), (2, 2)])
    diag = grid3.get_diagonal_bingo()
    assert [s.value for s in diag] == [1, 5, 9]


def test_anti_diagonal_only(grid3, punch_cells):
    punch_cells(grid3, [(2, 0), (1, 1), (0, 2)])
    assert [s.value for s in grid3.get_diagonal_bingo()] == [3, 5, 7]


def test_both_diagonals_repeat_centre(grid3, punch_cells):
    punch_cells(grid3, [(0, 0), (1, 1), (2, 2), (2, 0), (0, 2)])
    assert [s.value for s in grid3.get_diagonal_bingo()] == [1, 5, 9, 3, 5, 7]


@given(cells=st.sets(st.tuples(st.integers(0, 3), st.integers(0, 2))))
def test_non_square_never_has_diagonals(cells):
    from qr_bingo.models import Position, Sheet, Slot

    slots = [[Slot(value=y * 4 + x, position=Position(x, y)) for x in range(4)] for y in range(3)]
    sheet = Sheet(width=4, height=3, slots=slots)
    for x, y in cells:
        sheet.slots[y][x].punched = True
    assert sheet.get_diagonal_bingo() == []


def test_non_square_full_sheet_still_finds_rows_and_columns(make_sheet, punch_cells):
    sheet = make_sheet([[1, 2, 3, 4], [5, 6, 7, 8], [9, 10, 11, 12]])
    punch_cells(sheet, itertools.product(range(4), range(3)))
    assert [s.value for s in sheet.get_horizontal_bingo()] == [1, 2, 3, 4]
    assert [s.value for s in sheet.get_vertical_bingo()] == [1, 5, 9]
    assert sheet.get_diagonal_bingo() == []


def test_get_bingo_concatenates_and_marks(grid3, punch_cells):
    punch_cells(grid3, [(0, 0), (1, 0), (2, 0), (0, 1), (0, 2)])
    bingo = grid3.get_bingo()
    assert [s.value for s in bingo] == [1, 2, 3, 1, 4, 7]
    flagged = {s.value for s in grid3.flat() if s.bingo}
    assert flagged == {1, 2, 3, 4, 7}


def test_bingo_flags_are_sticky(grid3, punch_cells):
    punch_cells(grid3, [(0, 0), (1, 1), (2, 2)])
    assert grid3.is_bingo() is True
    assert grid3.is_bingo() is True
    assert {s.value for s in grid3.flat() if s.bingo} == {1, 5, 9}


def test_single_cell_sheet(make_sheet):
    sheet = make_sheet([["only"]])
    sheet.slots[0][0].punched = True
    assert [s.value for s in sheet.get_bingo()] == ["only", "only", "only", "only"]
