"""WebSocket handler for Catan multiplayer sessions.

Serves ``/ws/{room_code}``; the HTTP router mounts it under ``/catan``.
Every connection is one session: the server issues the session ID and
seats it with a ``join`` command using the optional ``name`` query
parameter.

Message flow
------------
* Client connects → server sends :class:`~.ws_messages.Welcome` to the new
  session and broadcasts a :class:`~.ws_messages.StateSnapshot`.
* Client sends a command frame (``{"command_type": ..., ...}``) → server
  stamps the session ID, applies it via the processor, then broadcasts a
  snapshot to all room members.
* Malformed or rejected frame → logged and dropped; the sender hears
  nothing back.
* Client disconnects → server applies ``leave``; an empty room is closed.
"""

from __future__ import annotations

import logging
import typing
import uuid

import fastapi
import pydantic

from ..engine import placement, turn_manager
from ..models import commands, room_state, serializers, ws_messages
from . import room_manager

logger = logging.getLogger(__name__)

router = fastapi.APIRouter()

# Close code sent when every colour in the room is taken.
ROOM_FULL_CLOSE_CODE = 4002


def serialize_state_for_broadcast(
    state: room_state.RoomState,
) -> dict[str, typing.Any]:
    """Serialize room state and augment with placement highlights.

    Adds ``legal_vertex_ids`` and ``legal_edge_ids`` for the current player
    so the client can highlight valid positions.  In a setup round only the
    piece still owed this round is offered.  Both lists are empty
    outside the setup rounds and the building step of a play turn.
    """
    data = serializers.serialize_model(state)
    data['legal_vertex_ids'] = []
    data['legal_edge_ids'] = []

    current = state.current_player
    can_build = state.game_phase in room_state.SETUP_PHASES or (
        state.game_phase == room_state.GamePhase.PLAY_TURN
        and state.turn_phase == room_state.TurnPhase.BUILDING
    )
    if current is None or not can_build:
        return data

    want_settlement = want_road = True
    if state.game_phase in room_state.SETUP_PHASES:
        settlements, roads, expected = turn_manager.setup_progress(
            state, current.color
        )
        want_settlement = settlements <= expected
        want_road = settlements > expected and roads <= expected
    if want_settlement:
        data['legal_vertex_ids'] = placement.legal_settlement_vertices(
            state, current.color
        )
    if want_road:
        data['legal_edge_ids'] = placement.legal_road_edges(state, current.color)
    return data


# Pydantic v2 TypeAdapter for the discriminated-union Command type.
_command_adapter: pydantic.TypeAdapter[commands.Command] = pydantic.TypeAdapter(
    commands.Command
)


async def broadcast_snapshot(room: room_manager.GameRoom) -> None:
    """Send the room's current state to every connected session."""
    snapshot = ws_messages.StateSnapshot(
        room_state=serialize_state_for_broadcast(room.state)
    )
    await room_manager.room_manager.broadcast(room, snapshot.model_dump_json())


@router.websocket('/ws/{room_code}')
async def catan_ws(
    websocket: fastapi.WebSocket,
    room_code: str,
    name: str | None = None,
) -> None:
    """WebSocket endpoint for a Catan game session.

    The room must already exist (created via ``POST /catan/rooms``).  A
    fifth connection to a room is closed with code 4002.
    """
    # Always accept before sending any message (WebSocket protocol requires it).
    await websocket.accept()

    room = room_manager.room_manager.get_room(room_code)
    if room is None:
        logger.warning('[%s] Connection refused: room not found', room_code)
        await websocket.send_text(
            ws_messages.ErrorMessage(
                error=f'Room {room_code!r} does not exist'
            ).model_dump_json()
        )
        await websocket.close(code=1008)
        return

    session_id = uuid.uuid4().hex
    result = room.apply(commands.Join(session_id=session_id, name=name))
    if not result.success:
        logger.warning(
            '[%s] Session %s refused: %s',
            room_code,
            session_id,
            result.error_message,
        )
        if result.rejection == commands.RejectionReason.ROOM_FULL:
            await websocket.close(code=ROOM_FULL_CLOSE_CODE, reason='Room is full')
        else:
            await websocket.close(code=1008)
        return

    seated = room.state.players[session_id]
    room.connections[session_id] = websocket
    logger.info(
        '[%s] Session %s joined as %r (%s, %d total)',
        room_code,
        session_id,
        seated.name,
        seated.color,
        room.player_count,
    )

    welcome = ws_messages.Welcome(session_id=session_id, color=seated.color)
    await websocket.send_text(welcome.model_dump_json())
    await broadcast_snapshot(room)

    try:
        while True:
            frame = await websocket.receive_text()
            try:
                command = _command_adapter.validate_json(frame)
            except pydantic.ValidationError as exc:
                logger.warning(
                    '[%s] Session %s sent unusable frame (%d errors)',
                    room_code,
                    session_id,
                    exc.error_count(),
                )
                continue

            # The sender is whoever owns this socket, never what the frame says.
            command = command.model_copy(update={'session_id': session_id})
            await _handle_command(room, command)

            if session_id not in room.state.players:
                # An explicit leave ends the session.
                room.connections.pop(session_id, None)
                await websocket.close()
                _close_if_empty(room)
                return

    except fastapi.WebSocketDisconnect:
        logger.info('[%s] Session %s disconnected', room_code, session_id)
        room.connections.pop(session_id, None)
        if session_id in room.state.players:
            await _handle_command(room, commands.Leave(session_id=session_id))
        _close_if_empty(room)


async def _handle_command(
    room: room_manager.GameRoom, command: commands.Command
) -> None:
    """Apply *command* to *room* and broadcast the new state if accepted."""
    result = room.apply(command)
    if not result.success:
        logger.debug(
            '[%s] Session %s %s dropped: %s',
            room.room_code,
            command.session_id,
            command.command_type,
            result.error_message,
        )
        return

    logger.debug(
        '[%s] Session %s %s applied',
        room.room_code,
        command.session_id,
        command.command_type,
    )
    if not room.is_empty:
        await broadcast_snapshot(room)


def _close_if_empty(room: room_manager.GameRoom) -> None:
    if room.is_empty:
        room_manager.room_manager.close_room(room.room_code)
