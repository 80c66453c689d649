"""Unit tests for catan board data models."""

from __future__ import annotations

import unittest

import pydantic

from hexlands.app.catan.models import board


class TestHex(unittest.TestCase):
    """Tests for the Hex model."""

    def test_key(self) -> None:
        """key is the axial coordinates joined by a comma."""
        tile = board.Hex(q=-1, r=2, terrain=board.TerrainType.FOREST, number_token=5)
        self.assertEqual(tile.key, '-1,2')

    def test_resource_for_producing_terrain(self) -> None:
        tile = board.Hex(q=0, r=0, terrain=board.TerrainType.FIELDS, number_token=8)
        self.assertEqual(tile.resource, board.ResourceType.WHEAT)

    def test_desert_produces_nothing(self) -> None:
        """The desert has no resource and no token."""
        tile = board.Hex(q=0, r=0, terrain=board.TerrainType.DESERT)
        self.assertIsNone(tile.resource)
        self.assertIsNone(tile.number_token)

    def test_frozen(self) -> None:
        """Hex is immutable."""
        tile = board.Hex(q=0, r=0, terrain=board.TerrainType.HILLS, number_token=4)
        with self.assertRaises(pydantic.ValidationError):
            tile.q = 1  # type: ignore[misc]

    def test_every_non_desert_terrain_has_a_resource(self) -> None:
        for terrain in board.TerrainType:
            if terrain == board.TerrainType.DESERT:
                continue
            self.assertIn(terrain, board.TERRAIN_RESOURCE)


class TestEdge(unittest.TestCase):
    """Tests for the Edge model."""

    def setUp(self) -> None:
        self.edge = board.Edge(
            edge_id='0.000,1.000|0.866,0.500',
            v1='0.866,0.500',
            v2='0.000,1.000',
            x=0.433,
            z=0.75,
            rotation=0.0,
        )

    def test_touches_endpoints(self) -> None:
        self.assertTrue(self.edge.touches('0.866,0.500'))
        self.assertTrue(self.edge.touches('0.000,1.000'))

    def test_does_not_touch_other_vertex(self) -> None:
        self.assertFalse(self.edge.touches('-0.866,0.500'))

    def test_other_end(self) -> None:
        """other_end returns the opposite endpoint from either side."""
        self.assertEqual(self.edge.other_end('0.866,0.500'), '0.000,1.000')
        self.assertEqual(self.edge.other_end('0.000,1.000'), '0.866,0.500')


class TestBoard(unittest.TestCase):
    """Tests for Board graph accessors."""

    def test_lists_follow_insertion_order(self) -> None:
        east = board.Vertex(
            vertex_id='0.866,0.500', x=0.866, z=0.5, adjacent_hexes=('0,0',)
        )
        north = board.Vertex(
            vertex_id='0.000,1.000', x=0.0, z=1.0, adjacent_hexes=('0,0',)
        )
        side = board.Edge(
            edge_id='0.000,1.000|0.866,0.500',
            v1='0.000,1.000',
            v2='0.866,0.500',
            x=0.433,
            z=0.75,
            rotation=0.0,
        )
        b = board.Board(
            hexes=[board.Hex(q=0, r=0, terrain=board.TerrainType.DESERT)],
            vertices={east.vertex_id: east, north.vertex_id: north},
            edges={side.edge_id: side},
        )
        self.assertEqual(b.vertex_list(), [east, north])
        self.assertEqual(b.edge_list(), [side])


if __name__ == '__main__':
    unittest.main()
