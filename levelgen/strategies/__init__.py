"""Interchangeable level-generation algorithms, selected by :class:`Algorithm`."""

from typing import Dict, Type

from levelgen.config import Algorithm
from levelgen.strategies.base import GenerationStrategy
from levelgen.strategies.bsp import BSPStrategy
from levelgen.strategies.cellular import CellularAutomataStrategy
from levelgen.strategies.drunkard import DrunkardsWalkStrategy
from levelgen.strategies.random_rooms import RandomRoomsStrategy

STRATEGIES: Dict[Algorithm, Type[GenerationStrategy]] = {
    Algorithm.BSP: BSPStrategy,
    Algorithm.CELLULAR: CellularAutomataStrategy,
    Algorithm.DRUNKARD: DrunkardsWalkStrategy,
    Algorithm.RANDOM_ROOMS: RandomRoomsStrategy,
}


def get_strategy(algorithm: Algorithm) -> GenerationStrategy:
    """Fresh strategy instance for ``algorithm`` (enum or its string value)."""
    if not isinstance(algorithm, Algorithm):
        algorithm = Algorithm(str(algorithm).lower())
    return STRATEGIES[algorithm]()


__all__ = [
    "BSPStrategy",
    "CellularAutomataStrategy",
    "DrunkardsWalkStrategy",
    "GenerationStrategy",
    "RandomRoomsStrategy",
    "STRATEGIES",
    "get_strategy",
]
