"""Catan game room manager.

Manages in-memory game rooms for multiplayer Catan sessions.  Each room
holds the authoritative :class:`RoomState`, its dice source, and the
FastAPI :class:`WebSocket` handles of the connected sessions needed for
broadcasting.

Rooms are independent: commands for one room never touch another.  All
commands for a room are applied one at a time on the event loop, so the
processor never sees two commands for the same state concurrently.
"""

from __future__ import annotations

import logging
import random
import string

import fastapi

import common.settings

from ..engine import processor, turn_manager
from ..models import commands, room_state

logger = logging.getLogger(__name__)

ROOM_CODE_LENGTH = 4
_ROOM_CODE_ALPHABET = string.ascii_uppercase + string.digits


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


class GameRoom:
    """A single multiplayer Catan game room."""

    def __init__(
        self,
        room_code: str,
        state: room_state.RoomState,
        rng: random.Random | None = None,
    ) -> None:
        self.room_code = room_code
        self.state = state
        self.rng = rng or random.Random()
        self.connections: dict[str, fastapi.WebSocket] = {}

    # ------------------------------------------------------------------
    # Convenience properties
    # ------------------------------------------------------------------

    @property
    def player_count(self) -> int:
        """Number of seats currently occupied."""
        return len(self.state.turn_order)

    @property
    def phase(self) -> str:
        """Current game phase as a string."""
        return self.state.game_phase.value

    @property
    def player_names(self) -> list[str]:
        """Seated player names in turn order."""
        return [
            self.state.players[sid].name
            for sid in self.state.turn_order
            if sid in self.state.players
        ]

    @property
    def is_empty(self) -> bool:
        """True once every player has left."""
        return not self.state.turn_order

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def apply(self, command: commands.Command) -> commands.CommandResult:
        """Apply *command* to this room's state, keeping it only on success."""
        result = processor.apply_command(self.state, command, self.rng)
        if result.success and result.updated_state is not None:
            self.state = result.updated_state
        return result


# ---------------------------------------------------------------------------
# Room manager
# ---------------------------------------------------------------------------


class RoomManager:
    """Singleton that owns all active :class:`GameRoom` instances."""

    def __init__(self) -> None:
        self._rooms: dict[str, GameRoom] = {}

    @property
    def rooms(self) -> dict[str, GameRoom]:
        """All active rooms keyed by room code."""
        return self._rooms

    # ------------------------------------------------------------------
    # Room lifecycle
    # ------------------------------------------------------------------

    def create_room(self, seed: int | None = None) -> str:
        """Create a new lobby room with a fresh board and return its code.

        Args:
            seed: Board seed; falls back to the ``BOARD_SEED`` setting.
        """
        if seed is None:
            seed = common.settings.BOARD_SEED
        for _ in range(100):
            code = ''.join(random.choices(_ROOM_CODE_ALPHABET, k=ROOM_CODE_LENGTH))
            if code not in self._rooms:
                state = turn_manager.create_room_state(code, seed=seed)
                self._rooms[code] = GameRoom(code, state)
                logger.info('[%s] Room created', code)
                return code
        raise RuntimeError('Could not generate a unique room code after 100 tries')

    def get_room(self, room_code: str) -> GameRoom | None:
        """Return the room with *room_code*, or ``None`` if not found."""
        return self._rooms.get(room_code)

    def close_room(self, room_code: str) -> None:
        """Forget the room with *room_code*.  Unknown codes are ignored."""
        if self._rooms.pop(room_code, None) is not None:
            logger.info('[%s] Room closed', room_code)

    # ------------------------------------------------------------------
    # Messaging
    # ------------------------------------------------------------------

    async def broadcast(self, room: GameRoom, message: str) -> None:
        """Send *message* to every connected session in *room*.

        A send error is logged and skipped so a single broken connection
        does not prevent the remaining sessions from receiving the message.
        """
        for session_id, websocket in list(room.connections.items()):
            try:
                await websocket.send_text(message)
            except Exception:  # noqa: BLE001
                logger.warning(
                    '[%s] Send to session %s failed', room.room_code, session_id
                )


# Module-level singleton consumed by the HTTP and WebSocket routers.
room_manager: RoomManager = RoomManager()
