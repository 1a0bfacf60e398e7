from tilematch.components.grid import Grid
from tilematch.systems.board_ops import (
    apply_gravity_moves,
    compute_gravity_moves,
    is_adjacent,
    refill_holes,
    remove_cells,
    swap_tokens,
)
from tests.helpers import ScriptedChoice, layout_grid, snapshot, stable_rows


def test_gravity_compacts_column_preserving_order():
    grid = Grid(4)
    layout_grid(grid, [
        ['A', 'B', 'C', 'D'],
        ['B', None, 'D', 'A'],
        [None, 'D', None, 'B'],
        ['C', 'A', 'B', None],
    ])
    a_top = grid.token_at(0, 0)
    b_mid = grid.token_at(1, 0)
    moves = compute_gravity_moves(grid)
    apply_gravity_moves(grid, moves)
    assert grid.colors() == [
        [None, None, None, None],
        ['A', 'B', 'C', 'D'],
        ['B', 'D', 'D', 'A'],
        ['C', 'A', 'B', 'B'],
    ]
    assert (b_mid.row, b_mid.col) == (2, 0)
    assert (a_top.row, a_top.col) == (1, 0)
    col0 = [(m.source, m.target) for m in moves if m.source[1] == 0]
    assert col0 == [((1, 0), (2, 0)), ((0, 0), (1, 0))]


def test_gravity_without_holes_plans_nothing():
    grid = Grid(3)
    layout_grid(grid, stable_rows(3, 'ABC'))
    assert compute_gravity_moves(grid) == []


def test_refill_spawns_above_the_board():
    grid = Grid(3, rng=ScriptedChoice(['A', 'B', 'C']))
    layout_grid(grid, [
        [None, None, 'A'],
        [None, 'B', 'C'],
        ['A', 'C', 'B'],
    ])
    spawned = refill_holes(grid, ['A', 'B', 'C'])
    assert [(s.target, s.spawn_row, s.color) for s in spawned] == [
        ((0, 0), -2, 'A'),
        ((1, 0), -1, 'B'),
        ((0, 1), -1, 'C'),
    ]
    assert grid.is_full()


def test_remove_cells_returns_removed_tokens():
    grid = Grid(3)
    layout_grid(grid, stable_rows(3, 'ABC'))
    before = grid.token_at(0, 0)
    removed = remove_cells(grid, [(0, 0), (0, 0), (1, 1)])
    assert removed[0] is before
    assert len(removed) == 2
    assert sorted(grid.holes()) == [(0, 0), (1, 1)]


def test_swap_twice_restores_grid():
    grid = Grid(4)
    layout_grid(grid, stable_rows(4, 'ABCD'))
    before = snapshot(grid)
    moves = swap_tokens(grid, (1, 1), (1, 2))
    assert [(m.source, m.target) for m in moves] == [((1, 1), (1, 2)), ((1, 2), (1, 1))]
    assert snapshot(grid) != before
    swap_tokens(grid, (1, 1), (1, 2))
    assert snapshot(grid) == before


def test_adjacency_is_manhattan_distance_one():
    assert is_adjacent((0, 0), (0, 1))
    assert is_adjacent((3, 2), (2, 2))
    assert not is_adjacent((0, 0), (1, 1))
    assert not is_adjacent((0, 0), (0, 2))
    assert not is_adjacent((2, 2), (2, 2))
