"""Unit tests for the server-to-client message schemas."""

from __future__ import annotations

import json
import unittest

from hexlands.app.catan.models import ws_messages
from hexlands.app.catan.models.player import PlayerColor


class TestServerMessages(unittest.TestCase):
    def test_welcome_wire_format(self) -> None:
        msg = ws_messages.Welcome(session_id='abc', color=PlayerColor.ORANGE)
        self.assertEqual(
            json.loads(msg.model_dump_json()),
            {'message_type': 'welcome', 'session_id': 'abc', 'color': 'orange'},
        )

    def test_snapshot_carries_state_dict(self) -> None:
        msg = ws_messages.StateSnapshot(room_state={'room_code': 'AB12'})
        data = json.loads(msg.model_dump_json())
        self.assertEqual(data['message_type'], 'state_snapshot')
        self.assertEqual(data['room_state'], {'room_code': 'AB12'})

    def test_error_message(self) -> None:
        msg = ws_messages.ErrorMessage(error='Room does not exist')
        self.assertEqual(msg.message_type, ws_messages.ServerMessageType.ERROR_MESSAGE)
        self.assertEqual(msg.error, 'Room does not exist')


if __name__ == '__main__':
    unittest.main()
