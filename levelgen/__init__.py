"""Procedural level generation: grids of Floor/Wall cells, rooms, corridors and markers.

Typical use::

    from utils.logging_utils import setup_logging
    from levelgen import GenerationConfig, generate_level

    setup_logging()
    layout = generate_level(GenerationConfig(seed=42))
    print(layout.grid.to_ascii())

Every module logs through structlog; ``setup_logging`` (``json=True`` for one
JSON object per line) is the one place that configures output.
"""

from levelgen.config import (
    Algorithm,
    ConfigError,
    GenerationConfig,
    PropSpec,
    SpawnPolicy,
    load_generation_config,
)
from levelgen.grid import CellState, Grid, Marker, MarkerKind
from levelgen.postprocess import SpawnPoint
from levelgen.procgen import LevelLayout, generate_level
from levelgen.room import Room

__all__ = [
    "Algorithm",
    "CellState",
    "ConfigError",
    "GenerationConfig",
    "Grid",
    "LevelLayout",
    "Marker",
    "MarkerKind",
    "PropSpec",
    "Room",
    "SpawnPoint",
    "SpawnPolicy",
    "generate_level",
    "load_generation_config",
]
