# levelgen/strategies/random_rooms.py
from typing import Final, List, Tuple

import structlog

from game_rng import GameRNG
from levelgen.config import Algorithm, GenerationConfig
from levelgen.grid import Grid
from levelgen.room import Room
from levelgen.strategies.base import GenerationStrategy

log = structlog.get_logger()

ROOM_PADDING: Final[int] = 1


class RandomRoomsStrategy(GenerationStrategy):
    """Rejection-sampled room placement; no corridors."""

    algorithm = Algorithm.RANDOM_ROOMS

    def generate(self, config: GenerationConfig, rng: GameRNG) -> Tuple[Grid, List[Room]]:
        grid = Grid(config.width, config.height)
        rooms: List[Room] = []
        attempts = 0

        while len(rooms) < config.max_rooms and attempts < config.max_room_attempts:
            attempts += 1
            room_w, room_h = self.random_room_size(config, rng)
            room_x = rng.get_int(1, config.width - room_w - 1)
            room_y = rng.get_int(1, config.height - room_h - 1)
            candidate = Room(room_x, room_y, room_w, room_h)
            if any(candidate.intersects(r, ROOM_PADDING) for r in rooms):
                continue
            candidate.carve(grid)
            rooms.append(candidate)

        self.stats = {
            "attempts": attempts,
            "rejected": attempts - len(rooms),
            "ceiling_hit": len(rooms) < config.max_rooms,
        }
        log.info("Random room placement finished", rooms=len(rooms), **self.stats)
        return grid, rooms
