import numpy as np
import pytest

from levelgen.grid import CellState, Grid, Marker, MarkerKind


def test_new_grid_is_all_wall():
    grid = Grid(8, 5)
    assert grid.cells.shape == (5, 8)
    assert grid.cells.dtype == np.uint8
    assert np.all(grid.cells == CellState.WALL)
    assert grid.floor_count() == 0
    assert len(grid.markers) == 0


@pytest.mark.parametrize("width,height", [(0, 5), (5, 0), (-1, 3)])
def test_invalid_dimensions(width, height):
    with pytest.raises(ValueError):
        Grid(width, height)


def test_out_of_bounds_reads_are_wall():
    grid = Grid(4, 4)
    grid.fill_rect(0, 0, 4, 4, CellState.FLOOR)
    for x, y in [(-1, 0), (0, -1), (4, 0), (0, 4), (100, 100)]:
        assert grid.get_cell(x, y) is CellState.WALL
        assert not grid.is_floor(x, y)


def test_out_of_bounds_writes_are_ignored():
    grid = Grid(4, 4)
    before = grid.cells.copy()
    grid.set_cell(-1, 2, CellState.FLOOR)
    grid.set_cell(4, 4, CellState.FLOOR)
    assert np.array_equal(grid.cells, before)


def test_reads_are_idempotent():
    grid = Grid(6, 6)
    grid.set_cell(2, 3, CellState.FLOOR)
    assert grid.get_cell(2, 3) == grid.get_cell(2, 3) == CellState.FLOOR
    assert grid.get_cell(3, 2) is CellState.WALL


def test_set_cell_accepts_plain_ints():
    grid = Grid(3, 3)
    grid.set_cell(1, 1, 0)
    assert grid.get_cell(1, 1) is CellState.FLOOR


def test_marker_on_wall_is_rejected():
    grid = Grid(5, 5)
    assert grid.set_marker(2, 2, Marker.waypoint()) is False
    assert grid.marker_at(2, 2) is None


def test_marker_dropped_when_cell_walled():
    grid = Grid(5, 5)
    grid.set_cell(2, 2, CellState.FLOOR)
    assert grid.set_marker(2, 2, Marker.prop("barrel"))
    assert grid.marker_at(2, 2).kind is MarkerKind.PROP
    grid.set_cell(2, 2, CellState.WALL)
    assert grid.marker_at(2, 2) is None


def test_fill_rect_wall_drops_markers_inside():
    grid = Grid(6, 6)
    grid.fill_rect(1, 1, 4, 4, CellState.FLOOR)
    grid.set_marker(1, 1, Marker.waypoint())
    grid.set_marker(4, 4, Marker.waypoint())
    grid.fill_rect(0, 0, 3, 3, CellState.WALL)
    assert grid.marker_at(1, 1) is None
    assert grid.marker_at(4, 4) == Marker.waypoint()


def test_fill_rect_is_clipped():
    grid = Grid(5, 5)
    grid.fill_rect(-3, 3, 20, 10, CellState.FLOOR)
    assert grid.floor_count() == 10
    assert np.all(grid.cells[3:, :] == CellState.FLOOR)
    assert np.all(grid.cells[:3, :] == CellState.WALL)


def test_markers_view_is_read_only():
    grid = Grid(3, 3)
    with pytest.raises(TypeError):
        grid.markers[(1, 1)] = Marker.waypoint()


def test_is_area_floor():
    grid = Grid(10, 10)
    grid.fill_rect(2, 2, 4, 4, CellState.FLOOR)
    assert grid.is_area_floor(2, 2, 4, 4)
    assert not grid.is_area_floor(2, 2, 5, 4)
    assert not grid.is_area_floor(8, 8, 4, 4)
    grid.set_cell(3, 3, CellState.WALL)
    assert not grid.is_area_floor(2, 2, 4, 4)


def test_floor_positions_row_major():
    grid = Grid(4, 4)
    grid.set_cell(2, 1, CellState.FLOOR)
    grid.set_cell(1, 2, CellState.FLOOR)
    grid.set_cell(0, 1, CellState.FLOOR)
    assert grid.floor_positions() == [(0, 1), (2, 1), (1, 2)]


def test_count_markers_and_clear():
    grid = Grid(4, 4)
    grid.fill_rect(0, 0, 4, 4, CellState.FLOOR)
    grid.set_marker(0, 0, Marker.waypoint())
    grid.set_marker(1, 0, Marker.prop(10))
    grid.set_marker(2, 0, Marker.prop(11))
    assert grid.count_markers(MarkerKind.WAYPOINT) == 1
    assert grid.count_markers(MarkerKind.PROP) == 2
    assert grid.clear_marker(1, 0) == Marker.prop(10)
    assert grid.clear_marker(1, 0) is None
    assert grid.count_markers(MarkerKind.PROP) == 1


def test_to_ascii():
    grid = Grid(4, 3)
    grid.fill_rect(1, 1, 2, 1, CellState.FLOOR)
    grid.set_marker(2, 1, Marker.waypoint())
    assert grid.to_ascii() == "####\n#.w#\n####"
