"""Catan vertex/edge graph construction.

Derives the de-duplicated corner (vertex) and side (edge) graph from the hex
layout so that the placement rules can reason about adjacency without
re-deriving geometry.

Geometry
--------
Hexes are pointy-top with unit circumradius.  Axial ``(q, r)`` maps to the
planar centre::

    x = sqrt(3) * (q + r / 2)
    z = 1.5 * r

and corner ``i`` (0-5) sits at angle ``60 * i + 30`` degrees from the centre.

Vertex identification
---------------------
Neighbouring hexes compute the same corner with slightly different floating
point error.  Each coordinate is therefore snapped to 3 decimal places and
the formatted pair ``'x,z'`` is the vertex ID, e.g. ``'0.866,0.500'``.
Corners with the same ID merge into one vertex whose ``adjacent_hexes`` is
the union of the hexes that produced it.

Edge identification
-------------------
Consecutive corners of a hex (wrapping from 5 back to 0) form an edge.  Its
ID is the two vertex IDs sorted and joined by ``'|'``, so the side shared by
two hexes is only recorded once.

A standard 19-hex board has **54 vertices** and **72 edges**.
"""

from __future__ import annotations

import logging
import math

from .models.board import Edge, Hex, Vertex

logger = logging.getLogger(__name__)

HEX_RADIUS = 1.0
_SNAP_DIGITS = 3


def snap(value: float) -> str:
    """Round *value* to 3 decimals and format it, normalising ``-0.000``."""
    # Adding 0.0 turns a rounded negative zero into positive zero.
    return f'{round(value, _SNAP_DIGITS) + 0.0:.{_SNAP_DIGITS}f}'


def vertex_id_for(x: float, z: float) -> str:
    """Return the vertex ID for a corner at planar position ``(x, z)``."""
    return f'{snap(x)},{snap(z)}'


def edge_id_for(vertex_a: str, vertex_b: str) -> str:
    """Return the undirected edge ID joining two vertex IDs."""
    return '|'.join(sorted((vertex_a, vertex_b)))


def hex_center(q: int, r: int) -> tuple[float, float]:
    """Return the planar ``(x, z)`` centre of the hex at axial ``(q, r)``."""
    x = HEX_RADIUS * math.sqrt(3) * (q + r / 2)
    z = HEX_RADIUS * 3 / 2 * r
    return x, z


def hex_corners(q: int, r: int) -> list[tuple[float, float]]:
    """Return the six unsnapped corner positions of a hex, in order 0-5."""
    cx, cz = hex_center(q, r)
    corners: list[tuple[float, float]] = []
    for i in range(6):
        angle = i * math.pi * 2 / 6 + math.pi / 6
        corners.append(
            (cx + math.cos(angle) * HEX_RADIUS, cz + math.sin(angle) * HEX_RADIUS)
        )
    return corners


def build_grid(hexes: list[Hex]) -> tuple[list[Vertex], list[Edge]]:
    """Compute all unique vertices and edges for *hexes*.

    Returns:
        A pair ``(vertices, edges)`` in first-seen order.
    """
    positions: dict[str, tuple[float, float]] = {}
    adjacent: dict[str, list[str]] = {}
    edges: dict[str, Edge] = {}

    for hex_tile in hexes:
        corner_ids: list[str] = []
        for x, z in hex_corners(hex_tile.q, hex_tile.r):
            vid = vertex_id_for(x, z)
            corner_ids.append(vid)
            if vid not in positions:
                positions[vid] = (float(snap(x)), float(snap(z)))
                adjacent[vid] = []
            if hex_tile.key not in adjacent[vid]:
                adjacent[vid].append(hex_tile.key)

        for i in range(6):
            v1 = corner_ids[i]
            v2 = corner_ids[(i + 1) % 6]
            eid = edge_id_for(v1, v2)
            if eid in edges:
                continue
            x1, z1 = positions[v1]
            x2, z2 = positions[v2]
            edges[eid] = Edge(
                edge_id=eid,
                v1=v1,
                v2=v2,
                x=(x1 + x2) / 2,
                z=(z1 + z2) / 2,
                rotation=math.atan2(z2 - z1, x2 - x1),
            )

    vertices = [
        Vertex(vertex_id=vid, x=x, z=z, adjacent_hexes=tuple(adjacent[vid]))
        for vid, (x, z) in positions.items()
    ]
    logger.debug('Generated grid: %d vertices, %d edges', len(vertices), len(edges))
    return vertices, list(edges.values())
