# levelgen/room.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple

import structlog

from levelgen.grid import CellState, Grid

log = structlog.get_logger()


@dataclass(eq=False)
class Room:
    """A rectangular room registered during generation.

    ``x``/``y`` is the top-left cell; the footprint is half-open
    (``x <= cx < x + width``). Rooms are bookkeeping only: once carved they are
    not kept in sync with the grid.
    """

    x: int
    y: int
    width: int
    height: int
    connected: bool = False

    @property
    def x2(self) -> int:
        """Rightmost column (inclusive)."""
        return self.x + self.width - 1

    @property
    def y2(self) -> int:
        """Bottom row (inclusive)."""
        return self.y + self.height - 1

    @property
    def center(self) -> Tuple[int, int]:
        return self.x + self.width // 2, self.y + self.height // 2

    @property
    def area(self) -> int:
        return self.width * self.height

    def cells(self) -> Iterator[Tuple[int, int]]:
        for iy in range(self.y, self.y + self.height):
            for ix in range(self.x, self.x + self.width):
                yield ix, iy

    def intersects(self, other: "Room", padding: int = 0) -> bool:
        """True if both rectangles, grown by ``padding`` on every side, overlap."""
        return (
            self.x - padding < other.x + other.width + padding
            and other.x - padding < self.x + self.width + padding
            and self.y - padding < other.y + other.height + padding
            and other.y - padding < self.y + self.height + padding
        )

    def contains_point(self, x: int, y: int) -> bool:
        return self.x <= x < self.x + self.width and self.y <= y < self.y + self.height

    def carve(self, grid: Grid) -> None:
        """Carves the footprint as Floor, clipped to the grid."""
        grid.fill_rect(self.x, self.y, self.width, self.height, CellState.FLOOR)
        log.debug("Carved room", room=self.as_tuple())

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return self.x, self.y, self.width, self.height
