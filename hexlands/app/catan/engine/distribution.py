"""Catan resource distribution.

Computes who collects what for a dice roll, and the starting hand granted by
a second setup settlement.  Both functions are pure; the processor applies
the results to player state.
"""

from __future__ import annotations

from collections.abc import Iterable

from ..models import board, player, room_state

# Resource units a building collects from each producing hex.
_BUILDING_YIELD: dict[room_state.StructureType, int] = {
    room_state.StructureType.SETTLEMENT: 1,
    room_state.StructureType.CITY: 2,
}


def resources_for_roll(
    roll: int,
    hexes: Iterable[board.Hex],
    structures: Iterable[room_state.PlacedStructure],
    vertices: Iterable[board.Vertex],
) -> dict[player.PlayerColor, player.Resources]:
    """Return the resources each colour collects when *roll* comes up.

    Every non-desert hex whose number token equals *roll* pays its resource
    to each settlement (1) or city (2) on a vertex touching it.  Roads never
    collect.  Colours that collect nothing are absent from the result.
    """
    vertex_map = {v.vertex_id: v for v in vertices}
    buildings = [s for s in structures if s.is_building]
    distribution: dict[player.PlayerColor, player.Resources] = {}

    for hex_tile in hexes:
        if hex_tile.number_token != roll:
            continue
        resource = hex_tile.resource
        if resource is None:
            continue
        for building in buildings:
            vertex = vertex_map.get(building.location_id)
            if vertex is None or hex_tile.key not in vertex.adjacent_hexes:
                continue
            gained = distribution.get(building.color, player.Resources())
            distribution[building.color] = gained.plus(
                resource, _BUILDING_YIELD[building.structure_type]
            )

    return distribution


def resources_for_vertex(
    vertex_id: str,
    hexes: Iterable[board.Hex],
    vertices: Iterable[board.Vertex],
) -> player.Resources:
    """Return one unit of each resource produced by the hexes around *vertex_id*.

    Used for the starting hand granted by the second setup settlement; the
    desert contributes nothing.
    """
    vertex = next((v for v in vertices if v.vertex_id == vertex_id), None)
    gained = player.Resources()
    if vertex is None:
        return gained
    for hex_tile in hexes:
        if hex_tile.key not in vertex.adjacent_hexes:
            continue
        resource = hex_tile.resource
        if resource is not None:
            gained = gained.plus(resource)
    return gained
