"""Catan placement rules.

Pure decision functions for settlement and road legality.  They take the
full structure list and edge graph and keep no state of their own.  Callers
are responsible for checking that the location exists and is unoccupied.
"""

from __future__ import annotations

from collections.abc import Iterable

from ..models import board, player, room_state

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def can_place_settlement(
    vertex_id: str,
    color: player.PlayerColor,
    structures: Iterable[room_state.PlacedStructure],
    edges: Iterable[board.Edge],
    is_setup_phase: bool = False,
) -> bool:
    """Return True if *color* may build a settlement at *vertex_id*.

    1. Distance rule: no settlement or city on any vertex one edge away.
       Applies during setup too.
    2. Connection rule (skipped during setup): *color* must own a road on an
       edge touching *vertex_id*.
    """
    structures = list(structures)
    touching = [e for e in edges if e.touches(vertex_id)]
    neighbours = {e.other_end(vertex_id) for e in touching}

    if any(s.is_building and s.location_id in neighbours for s in structures):
        return False

    if is_setup_phase:
        return True

    touching_ids = {e.edge_id for e in touching}
    return any(
        s.structure_type == room_state.StructureType.ROAD
        and s.color == color
        and s.location_id in touching_ids
        for s in structures
    )


def can_place_road(
    edge_id: str,
    color: player.PlayerColor,
    structures: Iterable[room_state.PlacedStructure],
    edges: Iterable[board.Edge],
) -> bool:
    """Return True if *color* may build a road on *edge_id*.

    The road must touch one of the player's own settlements/cities, or one of
    their roads sharing an endpoint.  The same rule holds in setup and play.
    """
    edge_map = {e.edge_id: e for e in edges}
    target = edge_map.get(edge_id)
    if target is None:
        return False

    own = [s for s in structures if s.color == color]
    for vid in (target.v1, target.v2):
        if _connects_at(vid, own, edge_map):
            return True
    return False


def legal_settlement_vertices(
    state: room_state.RoomState, color: player.PlayerColor
) -> list[str]:
    """Return unoccupied vertex IDs where *color* may settle in the current phase."""
    is_setup = state.game_phase in room_state.SETUP_PHASES
    occupied = {s.location_id for s in state.placed_structures}
    edges = state.board.edge_list()
    return [
        vid
        for vid in state.board.vertices
        if vid not in occupied
        and can_place_settlement(
            vid, color, state.placed_structures, edges, is_setup_phase=is_setup
        )
    ]


def legal_road_edges(
    state: room_state.RoomState, color: player.PlayerColor
) -> list[str]:
    """Return unoccupied edge IDs where *color* may build a road."""
    occupied = {s.location_id for s in state.placed_structures}
    edges = state.board.edge_list()
    return [
        e.edge_id
        for e in edges
        if e.edge_id not in occupied
        and can_place_road(e.edge_id, color, state.placed_structures, edges)
    ]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _connects_at(
    vertex_id: str,
    own: list[room_state.PlacedStructure],
    edge_map: dict[str, board.Edge],
) -> bool:
    """True if one of *own* is a building on, or a road touching, *vertex_id*."""
    for s in own:
        if s.is_building and s.location_id == vertex_id:
            return True
        if s.structure_type == room_state.StructureType.ROAD:
            road_edge = edge_map.get(s.location_id)
            if road_edge is not None and road_edge.touches(vertex_id):
                return True
    return False
