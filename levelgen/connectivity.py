# levelgen/connectivity.py
"""Corridor carving that joins every room into one connected structure.

Rooms are connected greedily: each unconnected room is joined to the nearest
(Manhattan distance between centres) room that is already connected. That is
not a minimum spanning tree, but every pass connects at least one room, so the
loop terminates with all rooms reachable.
"""

from typing import List, Tuple

import structlog

from game_rng import GameRNG
from levelgen.grid import CellState, Grid
from levelgen.room import Room

log = structlog.get_logger()

Connection = Tuple[Room, Room]


def _band(corridor_width: int) -> range:
    """Offsets across the corridor axis, centred on it."""
    half = corridor_width // 2
    return range(-half, corridor_width - half)


def carve_horizontal(grid: Grid, x1: int, x2: int, y: int, corridor_width: int) -> None:
    start_x, end_x = min(x1, x2), max(x1, x2)
    offsets = _band(corridor_width)
    grid.fill_rect(start_x, y + offsets.start, end_x - start_x + 1, len(offsets), CellState.FLOOR)


def carve_vertical(grid: Grid, y1: int, y2: int, x: int, corridor_width: int) -> None:
    start_y, end_y = min(y1, y2), max(y1, y2)
    offsets = _band(corridor_width)
    grid.fill_rect(x + offsets.start, start_y, len(offsets), end_y - start_y + 1, CellState.FLOOR)


def carve_corridor(
    grid: Grid, start: Tuple[int, int], end: Tuple[int, int], corridor_width: int, rng: GameRNG
) -> bool:
    """
    Carves an L-shaped corridor between two points.
    Returns True if the horizontal leg was carved first.
    """
    (x1, y1), (x2, y2) = start, end
    horizontal_first = rng.coin_flip() == "heads"
    if horizontal_first:
        carve_horizontal(grid, x1, x2, y1, corridor_width)
        carve_vertical(grid, y1, y2, x2, corridor_width)
    else:
        carve_vertical(grid, y1, y2, x1, corridor_width)
        carve_horizontal(grid, x1, x2, y2, corridor_width)
    log.debug(
        "Carved corridor",
        start=start,
        end=end,
        width=corridor_width,
        horizontal_first=horizontal_first,
    )
    return horizontal_first


def _manhattan(a: Room, b: Room) -> int:
    (ax, ay), (bx, by) = a.center, b.center
    return abs(ax - bx) + abs(ay - by)


def connect_rooms(
    grid: Grid, rooms: List[Room], corridor_width: int, rng: GameRNG
) -> List[Connection]:
    """Carves corridors until every room is connected. Returns the joined pairs."""
    if len(rooms) < 2:
        log.debug("Connectivity pass skipped", rooms=len(rooms))
        return []

    ordered = sorted(rooms, key=lambda r: r.center[0])
    for room in ordered:
        room.connected = False
    ordered[0].connected = True

    connections: List[Connection] = []
    passes = 0
    while not all(room.connected for room in ordered):
        passes += 1
        for room in ordered[1:]:
            if room.connected:
                continue
            closest = None
            closest_distance = None
            for other in ordered:
                if not other.connected:
                    continue
                distance = _manhattan(room, other)
                if closest_distance is None or distance < closest_distance:
                    closest, closest_distance = other, distance
            carve_corridor(grid, room.center, closest.center, corridor_width, rng)
            room.connected = True
            connections.append((room, closest))

    log.info("Rooms connected", rooms=len(ordered), corridors=len(connections), passes=passes)
    return connections
