"""Catan board generation algorithm.

Generates the standard 19-hex board (radius 2) with randomised terrain and
number tokens laid down in a fixed scan order, then derives the vertex/edge
graph via :mod:`.grid_builder`.

Scan order
----------
Hexes are visited column by column::

    for q in -2..2:
        for r in max(-2, -q - 2)..min(2, -q + 2):

Terrain is shuffled before assignment; number tokens are *not* shuffled.
They are dealt in scan order from :data:`NUMBER_TOKENS`, skipping the
desert, so where a token lands depends only on where the desert landed.
"""

from __future__ import annotations

import random

from .grid_builder import build_grid
from .models.board import Board, Hex, TerrainType

BOARD_RADIUS = 2

# Standard terrain distribution (must sum to 19).
TERRAIN_DISTRIBUTION: list[TerrainType] = (
    [TerrainType.FOREST] * 4
    + [TerrainType.PASTURE] * 4
    + [TerrainType.FIELDS] * 4
    + [TerrainType.HILLS] * 3
    + [TerrainType.MOUNTAINS] * 3
    + [TerrainType.DESERT] * 1
)

# Number tokens dealt in scan order to the 18 non-desert hexes.
NUMBER_TOKENS: list[int] = [5, 2, 6, 3, 8, 10, 9, 12, 11, 4, 8, 10, 9, 4, 5, 6, 3, 11]


def board_positions(radius: int = BOARD_RADIUS) -> list[tuple[int, int]]:
    """Return the axial ``(q, r)`` positions of the board in scan order."""
    positions: list[tuple[int, int]] = []
    for q in range(-radius, radius + 1):
        r1 = max(-radius, -q - radius)
        r2 = min(radius, -q + radius)
        for r in range(r1, r2 + 1):
            positions.append((q, r))
    return positions


def generate_hexes(rng: random.Random | None = None) -> list[Hex]:
    """Shuffle terrain and deal number tokens, returning 19 hexes in scan order."""
    rng = rng or random.Random()
    terrain_pool = TERRAIN_DISTRIBUTION.copy()
    rng.shuffle(terrain_pool)
    token_iter = iter(NUMBER_TOKENS)

    hexes: list[Hex] = []
    for (q, r), terrain in zip(board_positions(), terrain_pool, strict=True):
        number_token = None if terrain == TerrainType.DESERT else next(token_iter)
        hexes.append(Hex(q=q, r=r, terrain=terrain, number_token=number_token))
    return hexes


def generate_board(seed: int | None = None) -> Board:
    """Generate and return a randomised board with its vertex/edge graph.

    Args:
        seed: Optional integer seed for reproducible boards.
    """
    hexes = generate_hexes(random.Random(seed))
    vertices, edges = build_grid(hexes)
    return Board(
        hexes=hexes,
        vertices={v.vertex_id: v for v in vertices},
        edges={e.edge_id: e for e in edges},
    )
