from tilematch.events.bus import EVENT_TILE_CLICK, EVENT_TOKEN_SELECTED
from tilematch.systems.session import SwapOutcome
from tests.helpers import layout_grid, make_session, stable_rows


def test_tile_click_selects_token():
    bus, world, session = make_session(5)
    selected = {}
    bus.subscribe(EVENT_TOKEN_SELECTED, lambda s, **k: selected.update(k))
    bus.emit(EVENT_TILE_CLICK, row=1, col=2)
    assert session.selected == (1, 2)
    assert selected['row'] == 1 and selected['col'] == 2
    assert selected['token_id'] == session.grid.token_at(1, 2).token_id


def test_tile_click_without_coordinates_ignored():
    bus, world, session = make_session(5)
    bus.emit(EVENT_TILE_CLICK, row=1)
    assert session.selected is None


def test_reselecting_same_cell_keeps_selection():
    bus, world, session = make_session(5)
    layout_grid(session.grid, stable_rows(5))
    assert session.select_token(3, 3).outcome == SwapOutcome.SELECTED
    assert session.select_token(3, 3).outcome == SwapOutcome.SELECTED
    assert session.selected == (3, 3)


def test_second_click_always_clears_selection():
    bus, world, session = make_session(5)
    layout_grid(session.grid, stable_rows(5))
    session.select_token(0, 0)
    bus.emit(EVENT_TILE_CLICK, row=4, col=4)
    assert session.selected is None
    bus.emit(EVENT_TILE_CLICK, row=4, col=4)
    assert session.selected == (4, 4)
