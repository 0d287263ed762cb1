# levelgen/regions.py
"""Connected Floor regions and their registration as rooms."""

from collections import deque
from typing import Final, List, Tuple

import numpy as np
import structlog

from levelgen.config import GenerationConfig
from levelgen.grid import CellState, Grid
from levelgen.room import Room

log = structlog.get_logger()

MIN_REGION_CELLS: Final[int] = 20

Region = List[Tuple[int, int]]


def find_floor_regions(grid: Grid) -> List[Region]:
    """4-connected Floor regions of the grid interior, in row-major discovery order."""
    visited = np.zeros((grid.height, grid.width), dtype=bool)
    floor = grid.cells == CellState.FLOOR
    regions: List[Region] = []
    for y in range(1, grid.height - 1):
        for x in range(1, grid.width - 1):
            if not floor[y, x] or visited[y, x]:
                continue
            region: Region = []
            queue = deque([(x, y)])
            visited[y, x] = True
            while queue:
                cx, cy = queue.popleft()
                region.append((cx, cy))
                for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
                    nx, ny = cx + dx, cy + dy
                    if (
                        0 <= nx < grid.width
                        and 0 <= ny < grid.height
                        and floor[ny, nx]
                        and not visited[ny, nx]
                    ):
                        visited[ny, nx] = True
                        queue.append((nx, ny))
            regions.append(region)
    return regions


def region_bounds(region: Region) -> Room:
    xs = [p[0] for p in region]
    ys = [p[1] for p in region]
    min_x, min_y = min(xs), min(ys)
    return Room(min_x, min_y, max(xs) - min_x + 1, max(ys) - min_y + 1)


def extract_rooms(
    grid: Grid, config: GenerationConfig, min_cells: int = MIN_REGION_CELLS
) -> List[Room]:
    """Registers the bounding box of each large enough region as a room.

    Regions below ``min_cells`` are ignored, as are regions whose bounding box
    is narrower than the configured minimum room size. The grid is untouched.
    """
    rooms: List[Room] = []
    small = narrow = 0
    for region in find_floor_regions(grid):
        if len(region) < min_cells:
            small += 1
            continue
        room = region_bounds(region)
        if room.width < config.room_min_width or room.height < config.room_min_height:
            narrow += 1
            log.debug("Region too narrow for a room", bounds=room.as_tuple(), cells=len(region))
            continue
        rooms.append(room)
    log.debug("Extracted rooms from regions", rooms=len(rooms), small=small, narrow=narrow)
    return rooms
