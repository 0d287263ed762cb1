# levelgen/strategies/bsp.py
from collections import deque
from typing import Final, List, NamedTuple, Optional, Tuple

import structlog

from game_rng import GameRNG
from levelgen.config import Algorithm, GenerationConfig
from levelgen.grid import Grid
from levelgen.room import Room
from levelgen.strategies.base import GenerationStrategy

log = structlog.get_logger()

MAX_BSP_ITERATIONS: Final[int] = 100
CONTAINER_MARGIN: Final[int] = 2


class Container(NamedTuple):
    """A rectangular region of the BSP partition."""
    x: int
    y: int
    width: int
    height: int

    def split(self) -> Tuple["Container", "Container"]:
        """Halves the container across its longer axis."""
        if self.width > self.height:
            split_x = self.x + self.width // 2
            return (
                Container(self.x, self.y, split_x - self.x, self.height),
                Container(split_x, self.y, self.x + self.width - split_x, self.height),
            )
        split_y = self.y + self.height // 2
        return (
            Container(self.x, self.y, self.width, split_y - self.y),
            Container(self.x, split_y, self.width, self.y + self.height - split_y),
        )


def _room_in_container(
    container: Container, config: GenerationConfig, rng: GameRNG
) -> Optional[Room]:
    """One randomly sized room with at least one cell of padding inside ``container``."""
    max_w = min(config.room_max_width, container.width - 2)
    max_h = min(config.room_max_height, container.height - 2)
    if max_w < config.room_min_width or max_h < config.room_min_height:
        log.debug(
            "Container too small for a room",
            container=tuple(container),
            max_w=max_w,
            max_h=max_h,
        )
        return None
    room_w = rng.get_int(config.room_min_width, max_w)
    room_h = rng.get_int(config.room_min_height, max_h)
    room_x = container.x + rng.get_int(1, container.width - room_w - 1)
    room_y = container.y + rng.get_int(1, container.height - room_h - 1)
    return Room(room_x, room_y, room_w, room_h)


class BSPStrategy(GenerationStrategy):
    """Classic partition recursion: split until a container fits one room."""

    algorithm = Algorithm.BSP

    def generate(self, config: GenerationConfig, rng: GameRNG) -> Tuple[Grid, List[Room]]:
        grid = Grid(config.width, config.height)
        rooms: List[Room] = []
        min_container = max(config.room_max_width, config.room_max_height) + CONTAINER_MARGIN
        containers = deque([Container(1, 1, config.width - 2, config.height - 2)])
        iterations = 0
        splits = 0
        discarded = 0

        while containers and iterations < MAX_BSP_ITERATIONS:
            iterations += 1
            container = containers.popleft()
            if container.width < min_container * 2 and container.height < min_container * 2:
                room = _room_in_container(container, config, rng)
                if room is None:
                    discarded += 1
                    continue
                room.carve(grid)
                rooms.append(room)
                continue
            containers.extend(container.split())
            splits += 1

        if containers:
            log.info(
                "BSP iteration ceiling reached",
                iterations=iterations,
                pending_containers=len(containers),
            )
        self.stats = {
            "iterations": iterations,
            "splits": splits,
            "containers_discarded": discarded + len(containers),
            "ceiling_hit": bool(containers),
        }
        log.info("BSP partition finished", rooms=len(rooms), **self.stats)
        return grid, rooms
