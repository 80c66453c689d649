"""Catan board data models.

Defines the hex tiles in axial coordinates, terrain and resource types, and
the de-duplicated vertex/edge graph that placement rules operate on.
"""

from __future__ import annotations

import enum

import pydantic


class TerrainType(enum.StrEnum):
    """Terrain tile types and the resource each produces."""

    FOREST = 'forest'  # produces wood
    PASTURE = 'pasture'  # produces sheep
    FIELDS = 'fields'  # produces wheat
    HILLS = 'hills'  # produces brick
    MOUNTAINS = 'mountains'  # produces ore
    DESERT = 'desert'  # produces nothing


class ResourceType(enum.StrEnum):
    """The five resource types."""

    WOOD = 'wood'
    BRICK = 'brick'
    SHEEP = 'sheep'
    WHEAT = 'wheat'
    ORE = 'ore'


# Map from terrain type to the resource it produces (desert excluded).
TERRAIN_RESOURCE: dict[TerrainType, ResourceType] = {
    TerrainType.FOREST: ResourceType.WOOD,
    TerrainType.PASTURE: ResourceType.SHEEP,
    TerrainType.FIELDS: ResourceType.WHEAT,
    TerrainType.HILLS: ResourceType.BRICK,
    TerrainType.MOUNTAINS: ResourceType.ORE,
}


def hex_key(q: int, r: int) -> str:
    """Return the ``'q,r'`` key used to reference a hex from a vertex."""
    return f'{q},{r}'


class Hex(pydantic.BaseModel):
    """A single terrain hex in axial coordinates."""

    model_config = pydantic.ConfigDict(frozen=True)

    q: int
    r: int
    terrain: TerrainType
    number_token: int | None = None  # None for desert; 2-12 excluding 7

    @property
    def key(self) -> str:
        return hex_key(self.q, self.r)

    @property
    def resource(self) -> ResourceType | None:
        """The resource this hex produces, or None for the desert."""
        return TERRAIN_RESOURCE.get(self.terrain)


class Vertex(pydantic.BaseModel):
    """A corner point where settlements and cities are placed.

    Identified by its snapped ``'x,z'`` position so that the same corner
    computed from up to three different hexes collapses to one vertex.
    """

    model_config = pydantic.ConfigDict(frozen=True)

    vertex_id: str
    x: float
    z: float
    adjacent_hexes: tuple[str, ...]  # hex keys ('q,r') touching this corner


class Edge(pydantic.BaseModel):
    """A hex side where roads are placed.

    ``edge_id`` is the two vertex IDs sorted and joined by ``'|'``.
    """

    model_config = pydantic.ConfigDict(frozen=True)

    edge_id: str
    v1: str
    v2: str
    x: float  # midpoint
    z: float
    rotation: float  # presentation only

    def touches(self, vertex_id: str) -> bool:
        """Return True if *vertex_id* is one of this edge's endpoints."""
        return vertex_id in (self.v1, self.v2)

    def other_end(self, vertex_id: str) -> str:
        """Return the endpoint opposite *vertex_id*."""
        return self.v2 if self.v1 == vertex_id else self.v1


class Board(pydantic.BaseModel):
    """The generated board: hexes plus the vertex/edge graph.

    Vertices and edges are keyed by their IDs, in generation order.
    """

    hexes: list[Hex]
    vertices: dict[str, Vertex]
    edges: dict[str, Edge]

    def edge_list(self) -> list[Edge]:
        return list(self.edges.values())

    def vertex_list(self) -> list[Vertex]:
        return list(self.vertices.values())
