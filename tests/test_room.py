from levelgen.grid import CellState, Grid
from levelgen.room import Room


def test_center_and_edges():
    room = Room(2, 3, 6, 5)
    assert room.center == (5, 5)
    assert room.x2 == 7
    assert room.y2 == 7
    assert room.area == 30
    assert len(list(room.cells())) == 30


def test_touching_rooms_do_not_intersect():
    a = Room(0, 0, 3, 3)
    assert not a.intersects(Room(3, 0, 3, 3))
    assert a.intersects(Room(2, 2, 3, 3))


def test_padding_grows_both_rooms():
    a = Room(0, 0, 3, 3)
    one_gap = Room(4, 0, 3, 3)
    two_gap = Room(5, 0, 3, 3)
    assert not a.intersects(one_gap)
    assert a.intersects(one_gap, padding=1)
    assert not a.intersects(two_gap, padding=1)
    assert a.intersects(two_gap, padding=2)
    assert one_gap.intersects(a, padding=1)


def test_contains_point_is_half_open():
    room = Room(1, 1, 3, 2)
    assert room.contains_point(1, 1)
    assert room.contains_point(3, 2)
    assert not room.contains_point(4, 1)
    assert not room.contains_point(1, 3)


def test_carve_writes_floor():
    grid = Grid(8, 8)
    room = Room(2, 2, 3, 4)
    room.carve(grid)
    assert grid.floor_count() == 12
    assert all(grid.get_cell(x, y) is CellState.FLOOR for x, y in room.cells())


def test_rooms_compare_by_identity():
    assert Room(1, 1, 2, 2) != Room(1, 1, 2, 2)
