# levelgen/postprocess.py
"""Marker stamping and spawn selection on a finished level."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, List, Optional, Sequence, Tuple

import structlog

from game_rng import GameRNG
from levelgen.config import GenerationConfig, PropSpec, SpawnPolicy
from levelgen.grid import Grid, Marker, MarkerKind
from levelgen.room import Room

log = structlog.get_logger()

SPAWN_MIN_ROOM_SIZE: Final[int] = 6
SPAWN_AREA_SIZE: Final[int] = 4


@dataclass(frozen=True)
class SpawnPoint:
    """Where an agent should be placed.

    ``area`` is the verified all-Floor square around the spawn, or ``None``
    when only the single cell could be used.
    """

    x: int
    y: int
    room: Optional[Room] = None
    area: Optional[Tuple[int, int, int, int]] = None

    @property
    def position(self) -> Tuple[int, int]:
        return self.x, self.y


def stamp_markers(
    grid: Grid,
    waypoint_probability: float,
    prop_table: Sequence[PropSpec],
    rng: GameRNG,
) -> Tuple[int, int]:
    """Scatters waypoints and props over Floor cells. Returns (waypoints, props)."""
    waypoints = props = 0
    for x, y in grid.floor_positions():
        if rng.chance(waypoint_probability):
            grid.set_marker(x, y, Marker.waypoint())
            waypoints += 1
        for prop in prop_table:
            if rng.chance(prop.probability):
                # One marker per cell; a waypoint keeps its cell
                if grid.marker_at(x, y) is None:
                    grid.set_marker(x, y, Marker.prop(prop.kind))
                    props += 1
                break
    log.debug("Markers stamped", waypoints=waypoints, props=props)
    return waypoints, props


def _pick_room(rooms: List[Room], policy: SpawnPolicy, rng: GameRNG) -> Room:
    suitable = [
        r for r in rooms if r.width >= SPAWN_MIN_ROOM_SIZE and r.height >= SPAWN_MIN_ROOM_SIZE
    ]
    pool = suitable or rooms
    if policy is SpawnPolicy.FIRST:
        return pool[0]
    if policy is SpawnPolicy.LAST:
        return pool[-1]
    return rng.choice(pool)


def spawn_in_room(grid: Grid, room: Room) -> SpawnPoint:
    """Spawn at the room centre, backed by a 4x4 Floor area when one fits."""
    cx, cy = room.center
    half = SPAWN_AREA_SIZE // 2
    area_x, area_y = cx - half, cy - half
    if grid.is_area_floor(area_x, area_y, SPAWN_AREA_SIZE, SPAWN_AREA_SIZE):
        return SpawnPoint(
            area_x + half,
            area_y + half,
            room=room,
            area=(area_x, area_y, SPAWN_AREA_SIZE, SPAWN_AREA_SIZE),
        )
    if grid.is_floor(cx, cy):
        log.debug("Spawn area blocked, using room centre", room=room.as_tuple())
        return SpawnPoint(cx, cy, room=room)
    # Cave bounding boxes can have a Wall centre when no corridor reached it
    for x, y in room.cells():
        if grid.is_floor(x, y):
            log.debug(
                "Room centre is wall, using first floor cell", room=room.as_tuple(), pos=(x, y)
            )
            return SpawnPoint(x, y, room=room)
    log.warning("Spawn room has no floor, using its centre", room=room.as_tuple())
    return SpawnPoint(cx, cy, room=room)


def choose_spawn(
    grid: Grid, rooms: List[Room], policy: SpawnPolicy, rng: GameRNG
) -> Optional[SpawnPoint]:
    if not rooms:
        floor = grid.floor_positions()
        if not floor:
            log.warning("No floor to spawn on")
            return None
        x, y = rng.choice(floor)
        log.warning("No rooms registered, spawning on a random floor cell", pos=(x, y))
        return SpawnPoint(x, y)
    return spawn_in_room(grid, _pick_room(rooms, policy, rng))


def clear_spawn_area(grid: Grid, spawn: SpawnPoint) -> int:
    """Removes props from the 4x4 square around the spawn. Waypoints stay.

    Runs whether or not the square was verified as Floor, so the spawn cell
    never carries a prop.
    """
    half = SPAWN_AREA_SIZE // 2
    ax, ay = spawn.x - half, spawn.y - half
    cleared = 0
    for y in range(ay, ay + SPAWN_AREA_SIZE):
        for x in range(ax, ax + SPAWN_AREA_SIZE):
            marker = grid.marker_at(x, y)
            if marker is not None and marker.kind is MarkerKind.PROP:
                grid.clear_marker(x, y)
                cleared += 1
    return cleared


def post_process(
    grid: Grid,
    rooms: List[Room],
    config: GenerationConfig,
    rng: GameRNG,
    spawn_policy: Optional[SpawnPolicy] = None,
) -> Optional[SpawnPoint]:
    """Stamps markers then picks the spawn. Returns the spawn point."""
    stamp_markers(grid, config.waypoint_probability, config.prop_table, rng)
    spawn = choose_spawn(grid, rooms, spawn_policy or config.spawn_policy, rng)
    if spawn is not None:
        cleared = clear_spawn_area(grid, spawn)
        log.info(
            "Spawn chosen",
            pos=spawn.position,
            has_area=spawn.area is not None,
            props_cleared=cleared,
        )
    log.info(
        "Post-processing finished",
        waypoints=grid.count_markers(MarkerKind.WAYPOINT),
        props=grid.count_markers(MarkerKind.PROP),
    )
    return spawn
