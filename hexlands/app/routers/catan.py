"""HTTP routes for opening and inspecting Hexlands rooms.

Players open a room over HTTP, share its code, then each connects to
``/catan/ws/{room_code}``.  The socket route lives in
:mod:`hexlands.app.catan.server.ws_handler` and is mounted on this router.
"""

from __future__ import annotations

import typing

import fastapi
import pydantic

from ..catan.server import room_manager, ws_handler

router = fastapi.APIRouter(prefix='/catan', tags=['catan'])
router.include_router(ws_handler.router)


class RoomCreatedResponse(pydantic.BaseModel):
    room_code: str


class RoomStatusResponse(pydantic.BaseModel):
    """Lobby-level view of a room; the board itself is only sent over the socket."""

    room_code: str
    player_count: int
    phase: str
    players: list[str]

    @classmethod
    def from_room(cls, room: room_manager.GameRoom) -> RoomStatusResponse:
        return cls(
            room_code=room.room_code,
            player_count=room.player_count,
            phase=room.phase,
            players=room.player_names,
        )


def _lookup_room(room_code: str) -> room_manager.GameRoom:
    room = room_manager.room_manager.get_room(room_code)
    if room is None:
        raise fastapi.HTTPException(status_code=404, detail=f'No room {room_code!r}')
    return room


@router.post('/rooms')
async def open_room() -> RoomCreatedResponse:
    """Open a lobby with a freshly generated board."""
    return RoomCreatedResponse(room_code=room_manager.room_manager.create_room())


@router.get('/rooms')
async def list_rooms() -> list[RoomStatusResponse]:
    rooms = room_manager.room_manager.rooms.values()
    return [RoomStatusResponse.from_room(room) for room in rooms]


@router.get('/rooms/{room_code}')
async def get_room_status(
    room: typing.Annotated[room_manager.GameRoom, fastapi.Depends(_lookup_room)],
) -> RoomStatusResponse:
    return RoomStatusResponse.from_room(room)
