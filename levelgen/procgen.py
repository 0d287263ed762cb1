# levelgen/procgen.py
"""Level generation entry point.

Runs the three stages in order, each handed the same grid and rng::

    strategy -> connectivity pass -> post-processor

and returns everything the caller needs in a :class:`LevelLayout`. The engine
keeps no reference to the result.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, TypeVar

import structlog

from game_rng import GameRNG
from levelgen.config import Algorithm, GenerationConfig, SpawnPolicy
from levelgen.connectivity import Connection, connect_rooms
from levelgen.grid import Grid, MarkerKind
from levelgen.postprocess import SpawnPoint, post_process
from levelgen.room import Room
from levelgen.strategies import get_strategy

log = structlog.get_logger()

T = TypeVar("T")


@dataclass
class LevelLayout:
    grid: Grid
    rooms: List[Room]
    spawn: Optional[SpawnPoint]
    algorithm: Algorithm
    seed: int
    connections: List[Connection] = field(default_factory=list)
    metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height


def generate_level(
    config: Optional[GenerationConfig] = None,
    rng: Optional[GameRNG] = None,
    algorithm: Optional[Algorithm] = None,
    spawn_policy: Optional[SpawnPolicy] = None,
) -> LevelLayout:
    """Generates one complete level.

    ``algorithm`` and ``spawn_policy`` override the values in ``config``.
    Without ``rng`` a :class:`GameRNG` is seeded from ``config.seed`` (system
    entropy when that is ``None``).
    """
    config = config or GenerationConfig()
    if rng is None:
        rng = GameRNG(seed=config.seed)
    elif not isinstance(rng, GameRNG):
        log.error("Generate level called with invalid GameRNG object", rng_type=type(rng))
        raise TypeError("Invalid GameRNG object passed to generate_level")
    strategy = get_strategy(algorithm or config.algorithm)

    log.info(
        "Starting level generation",
        width=config.width,
        height=config.height,
        algorithm=strategy.algorithm.value,
        seed=rng.initial_seed,
        rng_source=rng.source.value,
    )

    phase_ms: Dict[str, float] = {}

    def _phase(label: str, fn: Callable[..., T], *args: Any) -> T:
        started = time.perf_counter()
        result = fn(*args)
        phase_ms[label] = round((time.perf_counter() - started) * 1000, 3)
        return result

    grid, rooms = _phase("strategy", strategy.generate, config, rng)
    floor_after_strategy = grid.floor_count()
    connections = _phase("connectivity", connect_rooms, grid, rooms, config.corridor_width, rng)
    spawn = _phase("post_process", post_process, grid, rooms, config, rng, spawn_policy)

    metrics: Dict[str, Any] = {
        "rooms": len(rooms),
        "corridors": len(connections),
        "floor_after_strategy": floor_after_strategy,
        "floor_cells": grid.floor_count(),
        "waypoints": grid.count_markers(MarkerKind.WAYPOINT),
        "props": grid.count_markers(MarkerKind.PROP),
        "strategy": dict(strategy.stats),
        "phase_ms": phase_ms,
    }
    log.info(
        "Level generation complete",
        algorithm=strategy.algorithm.value,
        rooms=len(rooms),
        spawn=spawn.position if spawn else None,
        runtime_ms=round(sum(phase_ms.values()), 3),
    )
    return LevelLayout(
        grid=grid,
        rooms=rooms,
        spawn=spawn,
        algorithm=strategy.algorithm,
        seed=rng.initial_seed,
        connections=connections,
        metrics=metrics,
    )
