"""Integration tests for the Catan HTTP router."""

from __future__ import annotations

import unittest

import fastapi.testclient

from hexlands.app import main
from hexlands.app.catan.models import commands
from hexlands.app.catan.server import room_manager as rm_module


def _fresh_client() -> tuple[fastapi.testclient.TestClient, rm_module.RoomManager]:
    """Return a TestClient with a fresh RoomManager to prevent cross-test state."""
    mgr = rm_module.RoomManager()
    rm_module.room_manager = mgr
    return fastapi.testclient.TestClient(main.app), mgr


class TestCatanRouter(unittest.TestCase):
    """Tests for the Catan HTTP routes."""

    def setUp(self) -> None:
        self.client, self.mgr = _fresh_client()

    def test_create_room_returns_code(self) -> None:
        """POST /catan/rooms returns a 4-character room code."""
        resp = self.client.post('/catan/rooms')
        self.assertEqual(resp.status_code, 200)
        code = resp.json()['room_code']
        self.assertRegex(code, r'^[A-Z0-9]{4}$')
        self.assertIsNotNone(self.mgr.get_room(code))

    def test_create_multiple_rooms_unique_codes(self) -> None:
        codes = {self.client.post('/catan/rooms').json()['room_code'] for _ in range(5)}
        self.assertEqual(len(codes), 5)

    def test_room_status_not_found(self) -> None:
        """GET /catan/rooms/<unknown> returns 404."""
        resp = self.client.get('/catan/rooms/ZZZZ')
        self.assertEqual(resp.status_code, 404)

    def test_room_status_initial_state(self) -> None:
        """A freshly created room starts in lobby phase with 0 players."""
        code = self.client.post('/catan/rooms').json()['room_code']
        resp = self.client.get(f'/catan/rooms/{code}')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(
            resp.json(),
            {'room_code': code, 'player_count': 0, 'phase': 'LOBBY', 'players': []},
        )

    def test_room_status_lists_players_in_turn_order(self) -> None:
        code = self.client.post('/catan/rooms').json()['room_code']
        room = self.mgr.get_room(code)
        assert room is not None
        room.apply(commands.Join(session_id='s0', name='Alice'))
        room.apply(commands.Join(session_id='s1', name='Bob'))
        data = self.client.get(f'/catan/rooms/{code}').json()
        self.assertEqual(data['player_count'], 2)
        self.assertEqual(data['players'], ['Alice', 'Bob'])

    def test_list_rooms(self) -> None:
        self.assertEqual(self.client.get('/catan/rooms').json(), [])
        code = self.client.post('/catan/rooms').json()['room_code']
        rooms = self.client.get('/catan/rooms').json()
        self.assertEqual([r['room_code'] for r in rooms], [code])

    def test_health(self) -> None:
        resp = self.client.get('/health')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {'status': 'healthy'})


if __name__ == '__main__':
    unittest.main()
