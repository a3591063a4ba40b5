from __future__ import annotations

import pytest

from qr_bingo.core import BingoSession, GenerationParams, SheetGenerator
from qr_bingo.models import Payload, Variation
from qr_bingo.rng import create_rng
from qr_bingo.store import MemorySheetStore


@pytest.fixture
def session() -> BingoSession:
    return BingoSession(MemorySheetStore(), SheetGenerator(create_rng("py_random", 5)))


def _params(n: int = 9, width: int = 3, height: int = 3) -> GenerationParams:
    return GenerationParams(width=width, height=height, variations=[Variation(value=i) for i in range(n)])


def test_start_saves_the_sheet(session):
    assert session.current() is None
    sheet = session.start(_params())
    assert [s.value for s in session.current().flat()] == [s.value for s in sheet.flat()]


def test_start_refuses_to_overwrite_without_force(session):
    session.start(_params())
    with pytest.raises(FileExistsError):
        session.start(_params())
    replaced = session.start(_params(n=3), force=True)
    assert {s.value for s in replaced.flat()} == {0, 1, 2}


def test_scan_without_sheet_raises(session):
    with pytest.raises(LookupError):
        session.scan(Payload(value=1))


def test_scan_unknown_value_is_ignored(session):
    session.start(_params())
    outcome = session.scan(Payload(value="nope"))
    assert outcome.matched is False
    assert not any(s.punched for s in session.current().flat())


def test_scan_persists_punch(session):
    sheet = session.start(_params())
    value = sheet.slots[2][1].value
    outcome = session.scan(Payload(value=value))
    assert outcome.matched
    assert [s.position for s in outcome.punched] == [(1, 2)]
    assert session.current().slots[2][1].punched is True


def test_scanning_a_row_wins_and_flags_persist(session):
    sheet = session.start(_params())
    outcome = None
    for slot in sheet.slots[0]:
        outcome = session.scan(Payload(value=slot.value))
    assert outcome.is_bingo
    stored = session.current()
    assert all(s.bingo for s in stored.slots[0])
    assert not any(s.bingo for s in stored.slots[1])


def test_duplicates_punched_together_through_scan():
    session = BingoSession(MemorySheetStore(), SheetGenerator(create_rng("py_random", 1)))
    session.start(_params(n=2, width=2, height=2))
    outcome = session.scan(Payload(value=0))
    assert len(outcome.punched) == 2
    assert sum(s.punched for s in session.current().flat()) == 2
