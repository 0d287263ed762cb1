from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, List, Tuple, TYPE_CHECKING

from levelgen.config import Algorithm, GenerationConfig
from levelgen.grid import Grid
from levelgen.room import Room

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from game_rng import GameRNG


class GenerationStrategy(ABC):
    """One level-generation algorithm.

    ``generate`` allocates a fresh grid, fills it and returns it together with
    the rooms it registered. Rooms come back unconnected; corridors are the
    connectivity pass's job. ``stats`` describes the most recent run.
    """

    algorithm: ClassVar[Algorithm]

    def __init__(self) -> None:
        self.stats: Dict[str, Any] = {}

    @abstractmethod
    def generate(self, config: GenerationConfig, rng: "GameRNG") -> Tuple[Grid, List[Room]]:
        raise NotImplementedError

    def random_room_size(self, config: GenerationConfig, rng: "GameRNG") -> Tuple[int, int]:
        return (
            rng.get_int(config.room_min_width, config.room_max_width),
            rng.get_int(config.room_min_height, config.room_max_height),
        )
