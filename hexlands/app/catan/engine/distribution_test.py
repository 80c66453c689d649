"""Unit tests for resource distribution."""

from __future__ import annotations

import unittest

from hexlands.app.catan import grid_builder
from hexlands.app.catan.engine import distribution
from hexlands.app.catan.models import room_state
from hexlands.app.catan.models.board import Hex, TerrainType
from hexlands.app.catan.models.player import PlayerColor, Resources

# Corner shared by hexes (0,0), (1,-1) and (1,0).
SHARED = '0.866,-0.500'
# Top corner of (0,0), touching no other hex in the layout below.
FIELDS_ONLY = '0.000,1.000'

_HEXES = [
    Hex(q=0, r=0, terrain=TerrainType.FIELDS, number_token=8),
    Hex(q=1, r=-1, terrain=TerrainType.FOREST, number_token=8),
    Hex(q=1, r=0, terrain=TerrainType.HILLS, number_token=5),
]


def _building(
    structure_type: room_state.StructureType, color: PlayerColor, vertex_id: str
) -> room_state.PlacedStructure:
    return room_state.PlacedStructure(
        structure_id=f'{color}-{vertex_id}',
        structure_type=structure_type,
        color=color,
        location_id=vertex_id,
    )


class TestResourcesForRoll(unittest.TestCase):
    """Tests for resources_for_roll."""

    def setUp(self) -> None:
        self.vertices, _ = grid_builder.build_grid(_HEXES)

    def roll(
        self, value: int, *structures: room_state.PlacedStructure
    ) -> dict[PlayerColor, Resources]:
        return distribution.resources_for_roll(
            value, _HEXES, structures, self.vertices
        )

    def test_settlement_collects_one(self) -> None:
        result = self.roll(
            8,
            _building(
                room_state.StructureType.SETTLEMENT, PlayerColor.RED, FIELDS_ONLY
            ),
        )
        self.assertEqual(result, {PlayerColor.RED: Resources(wheat=1)})

    def test_city_collects_two(self) -> None:
        result = self.roll(
            8, _building(room_state.StructureType.CITY, PlayerColor.RED, FIELDS_ONLY)
        )
        self.assertEqual(result, {PlayerColor.RED: Resources(wheat=2)})

    def test_every_matching_hex_pays(self) -> None:
        """Two hexes numbered 8 both pay the settlement between them."""
        result = self.roll(
            8,
            _building(room_state.StructureType.SETTLEMENT, PlayerColor.BLUE, SHARED),
        )
        self.assertEqual(result, {PlayerColor.BLUE: Resources(wheat=1, wood=1)})

    def test_only_matching_number_pays(self) -> None:
        result = self.roll(
            5,
            _building(room_state.StructureType.SETTLEMENT, PlayerColor.BLUE, SHARED),
            _building(
                room_state.StructureType.SETTLEMENT, PlayerColor.RED, FIELDS_ONLY
            ),
        )
        self.assertEqual(result, {PlayerColor.BLUE: Resources(brick=1)})

    def test_no_match_gives_empty_mapping(self) -> None:
        result = self.roll(
            11,
            _building(room_state.StructureType.SETTLEMENT, PlayerColor.BLUE, SHARED),
        )
        self.assertEqual(result, {})

    def test_roads_collect_nothing(self) -> None:
        road = room_state.PlacedStructure(
            structure_id='r',
            structure_type=room_state.StructureType.ROAD,
            color=PlayerColor.RED,
            location_id=grid_builder.edge_id_for(FIELDS_ONLY, '0.866,0.500'),
        )
        self.assertEqual(self.roll(8, road), {})


class TestResourcesForVertex(unittest.TestCase):
    """Tests for the second setup settlement's starting hand."""

    def test_one_of_each_adjacent_resource(self) -> None:
        vertices, _ = grid_builder.build_grid(_HEXES)
        gained = distribution.resources_for_vertex(SHARED, _HEXES, vertices)
        self.assertEqual(gained, Resources(wheat=1, wood=1, brick=1))

    def test_desert_contributes_nothing(self) -> None:
        hexes = [
            Hex(q=0, r=0, terrain=TerrainType.DESERT),
            Hex(q=1, r=-1, terrain=TerrainType.MOUNTAINS, number_token=6),
            Hex(q=1, r=0, terrain=TerrainType.PASTURE, number_token=9),
        ]
        vertices, _ = grid_builder.build_grid(hexes)
        gained = distribution.resources_for_vertex(SHARED, hexes, vertices)
        self.assertEqual(gained, Resources(ore=1, sheep=1))

    def test_unknown_vertex(self) -> None:
        vertices, _ = grid_builder.build_grid(_HEXES)
        gained = distribution.resources_for_vertex('9.999,9.999', _HEXES, vertices)
        self.assertTrue(gained.is_empty())


if __name__ == '__main__':
    unittest.main()
