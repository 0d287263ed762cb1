# levelgen/strategies/drunkard.py
from typing import Final, List, Tuple

import structlog

from game_rng import GameRNG
from levelgen.config import Algorithm, GenerationConfig
from levelgen.grid import CellState, Grid
from levelgen.regions import extract_rooms
from levelgen.room import Room
from levelgen.strategies.base import GenerationStrategy

log = structlog.get_logger()

TARGET_FLOOR_RATIO: Final[float] = 0.3
STEP_CEILING_FACTOR: Final[int] = 10
ROOM_CHANCE_PER_STEP: Final[float] = 0.02
ROOM_PADDING: Final[int] = 1

# up, right, down, left
DIRECTIONS: Final = ((0, -1), (1, 0), (0, 1), (-1, 0))


def _carve_counting(grid: Grid, room: Room) -> int:
    """Carves ``room`` and returns how many Wall cells became Floor."""
    region = grid.cells[room.y : room.y + room.height, room.x : room.x + room.width]
    newly_carved = int((region == CellState.WALL).sum())
    room.carve(grid)
    return newly_carved


class DrunkardsWalkStrategy(GenerationStrategy):
    """A random walker digs from the centre until enough of the map is open."""

    algorithm = Algorithm.DRUNKARD

    def _room_near(
        self, x: int, y: int, config: GenerationConfig, rng: GameRNG
    ) -> Room:
        room_w, room_h = self.random_room_size(config, rng)
        room_x = max(1, min(config.width - room_w - 1, x - room_w // 2))
        room_y = max(1, min(config.height - room_h - 1, y - room_h // 2))
        return Room(room_x, room_y, room_w, room_h)

    def generate(self, config: GenerationConfig, rng: GameRNG) -> Tuple[Grid, List[Room]]:
        grid = Grid(config.width, config.height)
        start_x, start_y = config.width // 2, config.height // 2

        seed_room = Room(
            start_x - config.room_min_width // 2,
            start_y - config.room_min_height // 2,
            config.room_min_width,
            config.room_min_height,
        )
        seed_room.carve(grid)
        rooms: List[Room] = [seed_room]

        floor_cells = grid.floor_count()
        target = int(config.width * config.height * TARGET_FLOOR_RATIO)
        max_steps = config.width * config.height * STEP_CEILING_FACTOR
        x, y = start_x, start_y
        steps = 0
        rooms_rejected = 0

        while floor_cells < target and steps < max_steps:
            steps += 1
            dx, dy = DIRECTIONS[rng.get_int(0, 3)]
            x = min(config.width - 2, max(1, x + dx))
            y = min(config.height - 2, max(1, y + dy))
            if grid.cells[y, x] == CellState.WALL:
                grid.cells[y, x] = CellState.FLOOR
                floor_cells += 1

            if rng.chance(ROOM_CHANCE_PER_STEP):
                candidate = self._room_near(x, y, config, rng)
                # Only tracked rooms count as obstacles, not the walker's trail
                if any(candidate.intersects(r, ROOM_PADDING) for r in rooms):
                    rooms_rejected += 1
                    continue
                floor_cells += _carve_counting(grid, candidate)
                rooms.append(candidate)

        ceiling_hit = floor_cells < target
        if ceiling_hit:
            log.warning(
                "Drunkard's walk stopped at step ceiling",
                steps=steps,
                floor_cells=floor_cells,
                target=target,
            )
        walked_rooms = len(rooms)
        rooms.extend(extract_rooms(grid, config))
        self.stats = {
            "steps": steps,
            "floor_cells": floor_cells,
            "target_floor": target,
            "ceiling_hit": ceiling_hit,
            "walk_rooms": walked_rooms,
            "walk_rooms_rejected": rooms_rejected,
        }
        log.info("Drunkard's walk finished", rooms=len(rooms), **self.stats)
        return grid, rooms
