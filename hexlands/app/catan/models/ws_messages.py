"""WebSocket message schemas for Catan multiplayer communication.

Client frames are commands (see :mod:`.commands`); the server fills in the
sender's session ID before applying them.  This module defines the
server-to-client messages.
"""

from __future__ import annotations

import enum
from typing import Any

import pydantic

from .player import PlayerColor


class ServerMessageType(enum.StrEnum):
    """Discriminator values for server-to-client WebSocket messages."""

    WELCOME = 'welcome'
    STATE_SNAPSHOT = 'state_snapshot'
    ERROR_MESSAGE = 'error_message'


class Welcome(pydantic.BaseModel):
    """Sent once to a client after its join is accepted."""

    message_type: ServerMessageType = ServerMessageType.WELCOME
    session_id: str
    color: PlayerColor


class StateSnapshot(pydantic.BaseModel):
    """Broadcast by the server after every accepted command.

    ``room_state`` is the serialized RoomState dict, augmented with
    placement highlights for the current player.
    """

    message_type: ServerMessageType = ServerMessageType.STATE_SNAPSHOT
    room_state: dict[str, Any]


class ErrorMessage(pydantic.BaseModel):
    """Sent before closing a connection that cannot be seated."""

    message_type: ServerMessageType = ServerMessageType.ERROR_MESSAGE
    error: str
