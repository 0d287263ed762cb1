# levelgen/strategies/cellular.py
from typing import Final, List, Tuple

import numpy as np
import structlog

from game_rng import GameRNG
from levelgen.config import Algorithm, GenerationConfig
from levelgen.grid import CellState, Grid
from levelgen.regions import extract_rooms
from levelgen.room import Room
from levelgen.strategies.base import GenerationStrategy

log = structlog.get_logger()

INITIAL_WALL_PROBABILITY: Final[float] = 0.45
SMOOTHING_PASSES: Final[int] = 5
# Floor turns to Wall at this many wall neighbours or more
FLOOR_TO_WALL_NEIGHBOURS: Final[int] = 5
# Wall turns to Floor at this many wall neighbours or fewer
WALL_TO_FLOOR_NEIGHBOURS: Final[int] = 3

_NEIGHBOUR_OFFSETS: Final = tuple(
    (dx, dy) for dy in (-1, 0, 1) for dx in (-1, 0, 1) if (dx, dy) != (0, 0)
)


def count_wall_neighbours(cells: np.ndarray) -> np.ndarray:
    """Wall count among the 8 neighbours of every interior cell.

    Returns an array of shape ``(height - 2, width - 2)``.
    """
    walls = (cells == CellState.WALL).astype(np.uint8)
    h, w = walls.shape
    counts = np.zeros((h - 2, w - 2), dtype=np.uint8)
    for dx, dy in _NEIGHBOUR_OFFSETS:
        counts += walls[1 + dy : h - 1 + dy, 1 + dx : w - 1 + dx]
    return counts


def smooth(cells: np.ndarray) -> np.ndarray:
    """One majority-rule pass. Reads only ``cells`` and returns a new array."""
    result = cells.copy()
    h, w = cells.shape
    if h < 3 or w < 3:
        return result
    counts = count_wall_neighbours(cells)
    interior = cells[1 : h - 1, 1 : w - 1]
    new_interior = interior.copy()
    new_interior[(interior == CellState.FLOOR) & (counts >= FLOOR_TO_WALL_NEIGHBOURS)] = CellState.WALL
    new_interior[(interior == CellState.WALL) & (counts <= WALL_TO_FLOOR_NEIGHBOURS)] = CellState.FLOOR
    result[1 : h - 1, 1 : w - 1] = new_interior
    return result


class CellularAutomataStrategy(GenerationStrategy):
    """Random fill, majority smoothing, then rooms from the surviving caves."""

    algorithm = Algorithm.CELLULAR

    def generate(self, config: GenerationConfig, rng: GameRNG) -> Tuple[Grid, List[Room]]:
        grid = Grid(config.width, config.height)
        for y in range(1, config.height - 1):
            for x in range(1, config.width - 1):
                if rng.get_float() >= INITIAL_WALL_PROBABILITY:
                    grid.cells[y, x] = CellState.FLOOR
        initial_floor = grid.floor_count()

        for _ in range(SMOOTHING_PASSES):
            grid.cells = smooth(grid.cells)

        rooms = extract_rooms(grid, config)
        self.stats = {
            "initial_floor": initial_floor,
            "smoothed_floor": grid.floor_count(),
            "passes": SMOOTHING_PASSES,
        }
        log.info("Cellular automata finished", rooms=len(rooms), **self.stats)
        return grid, rooms
