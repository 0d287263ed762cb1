# levelgen/grid.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum, auto
from types import MappingProxyType
from typing import Final, Hashable, List, Mapping, Optional, Tuple

import numpy as np
import structlog

log = structlog.get_logger()


class CellState(IntEnum):
    FLOOR = 0
    WALL = 1


class MarkerKind(Enum):
    WAYPOINT = auto()
    PROP = auto()


@dataclass(frozen=True)
class Marker:
    """Point annotation on a Floor cell, consumed by the rendering side."""

    kind: MarkerKind
    prop_kind: Optional[Hashable] = None

    @classmethod
    def waypoint(cls) -> "Marker":
        return cls(MarkerKind.WAYPOINT)

    @classmethod
    def prop(cls, prop_kind: Hashable) -> "Marker":
        return cls(MarkerKind.PROP, prop_kind)

    @property
    def is_waypoint(self) -> bool:
        return self.kind is MarkerKind.WAYPOINT


ASCII_WALL: Final[str] = "#"
ASCII_FLOOR: Final[str] = "."
ASCII_WAYPOINT: Final[str] = "w"
ASCII_PROP: Final[str] = "p"


class Grid:
    def __init__(self, width: int, height: int):
        """
        Allocates an all-Wall grid with an empty marker layer.
        """
        if width <= 0 or height <= 0:
            log.error("Invalid grid dimensions", width=width, height=height)
            raise ValueError("Grid width and height must be positive integers.")
        self._width = width
        self._height = height
        # Indexed [y, x], C order like the rest of the numpy-backed maps
        self.cells: np.ndarray = np.full(
            (height, width), fill_value=CellState.WALL, dtype=np.uint8, order="C"
        )
        self._markers: dict[Tuple[int, int], Marker] = {}
        log.debug("Grid allocated", shape=(height, width))

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def markers(self) -> Mapping[Tuple[int, int], Marker]:
        return MappingProxyType(self._markers)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    # ------------------------------------------------------------------
    # cell layer
    # ------------------------------------------------------------------
    def get_cell(self, x: int, y: int) -> CellState:
        """Cell state at (x, y); anything outside the grid reads as Wall."""
        if not self.in_bounds(x, y):
            return CellState.WALL
        return CellState(int(self.cells[y, x]))

    def is_floor(self, x: int, y: int) -> bool:
        return self.get_cell(x, y) is CellState.FLOOR

    def set_cell(self, x: int, y: int, state: CellState) -> None:
        # Out-of-bounds writes are dropped
        if not self.in_bounds(x, y):
            return
        state = CellState(state)
        self.cells[y, x] = state
        if state == CellState.WALL:
            self._markers.pop((x, y), None)

    def fill_rect(self, x: int, y: int, w: int, h: int, state: CellState) -> None:
        """Writes ``state`` over a rectangle, clipped to the grid."""
        x_start, x_end = max(0, x), min(self._width, x + w)
        y_start, y_end = max(0, y), min(self._height, y + h)
        if x_start >= x_end or y_start >= y_end:
            return
        state = CellState(state)
        self.cells[y_start:y_end, x_start:x_end] = state
        if state == CellState.WALL:
            for key in [
                k
                for k in self._markers
                if x_start <= k[0] < x_end and y_start <= k[1] < y_end
            ]:
                del self._markers[key]

    def is_area_floor(self, x: int, y: int, w: int, h: int) -> bool:
        """True when the whole rectangle is inside the grid and Floor."""
        if w <= 0 or h <= 0:
            return False
        if not (self.in_bounds(x, y) and self.in_bounds(x + w - 1, y + h - 1)):
            return False
        return bool(np.all(self.cells[y : y + h, x : x + w] == CellState.FLOOR))

    def floor_count(self) -> int:
        return int(np.count_nonzero(self.cells == CellState.FLOOR))

    def floor_positions(self) -> List[Tuple[int, int]]:
        """Floor cells as (x, y) in row-major order."""
        return [(int(x), int(y)) for y, x in np.argwhere(self.cells == CellState.FLOOR)]

    # ------------------------------------------------------------------
    # marker layer
    # ------------------------------------------------------------------
    def set_marker(self, x: int, y: int, marker: Marker) -> bool:
        """Stores ``marker`` if (x, y) is Floor. Returns whether it was stored."""
        if not self.is_floor(x, y):
            return False
        self._markers[(x, y)] = marker
        return True

    def marker_at(self, x: int, y: int) -> Optional[Marker]:
        return self._markers.get((x, y))

    def clear_marker(self, x: int, y: int) -> Optional[Marker]:
        return self._markers.pop((x, y), None)

    def count_markers(self, kind: MarkerKind) -> int:
        return sum(1 for m in self._markers.values() if m.kind is kind)

    # ------------------------------------------------------------------
    # debugging
    # ------------------------------------------------------------------
    def to_ascii(self) -> str:
        rows = []
        for y in range(self._height):
            row = []
            for x in range(self._width):
                marker = self._markers.get((x, y))
                if marker is not None:
                    row.append(ASCII_WAYPOINT if marker.is_waypoint else ASCII_PROP)
                elif self.cells[y, x] == CellState.FLOOR:
                    row.append(ASCII_FLOOR)
                else:
                    row.append(ASCII_WALL)
            rows.append("".join(row))
        return "\n".join(rows)

    def __repr__(self) -> str:
        return f"Grid(width={self._width}, height={self._height})"
