"""Catan lobby and roster management.

Seats and unseats players, hands out colours, elects the host, and gates the
start of a game behind the ready check.  Every function mutates the given
RoomState in place and raises ``ValueError`` when the command does not
apply.
"""

from __future__ import annotations

from ..models.player import PieceInventory, Player, PlayerColor, Resources
from ..models.room_state import NO_ROLL, GamePhase, RoomState, TurnPhase

MAX_NAME_LENGTH = 24
MIN_PLAYERS = 2


class RoomFullError(ValueError):
    """Raised when a join finds every colour already taken."""


def sanitize_name(raw: str | None) -> str | None:
    """Return *raw* trimmed and cut to 24 characters, or None if blank."""
    if not raw:
        return None
    trimmed = raw.strip()
    if not trimmed:
        return None
    return trimmed[:MAX_NAME_LENGTH]


def available_color(state: RoomState) -> PlayerColor | None:
    """Return the first colour no seated player is using, or None."""
    used = {p.color for p in state.players.values()}
    return next((c for c in PlayerColor if c not in used), None)


def join_player(state: RoomState, session_id: str, name: str | None = None) -> Player:
    """Seat *session_id* in the room and return the new Player.

    The first player to join an empty room becomes host.

    Raises:
        RoomFullError: If all four colours are taken.
        ValueError: If *session_id* is already seated.
    """
    if session_id in state.players:
        raise ValueError(f'Session {session_id!r} is already seated.')
    color = available_color(state)
    if color is None:
        raise RoomFullError('Room is full')

    is_host = state.host_session_id == ''
    new_player = Player(
        session_id=session_id,
        name=sanitize_name(name) or f'Player {len(state.players) + 1}',
        color=color,
        is_host=is_host,
    )
    if is_host:
        state.host_session_id = session_id

    state.players[session_id] = new_player
    state.turn_order.append(session_id)
    state.add_log(f'{new_player.name} joined the lobby.')
    return new_player


def remove_player(state: RoomState, session_id: str) -> Player:
    """Unseat *session_id*, keep the turn pointer valid, and re-elect the host.

    Returns the removed Player.

    Raises:
        ValueError: If *session_id* is not seated.
    """
    departed = state.players.get(session_id)
    if departed is None:
        raise ValueError(f'Session {session_id!r} is not seated.')

    if session_id in state.turn_order:
        leaving_index = state.turn_order.index(session_id)
        state.turn_order.pop(leaving_index)
        current = state.current_player_index
        if current >= len(state.turn_order):
            state.current_player_index = max(0, len(state.turn_order) - 1)
        elif leaving_index <= current and current > 0:
            state.current_player_index = current - 1

    del state.players[session_id]
    state.add_log(f'{departed.name} left the room.')

    if state.host_session_id == session_id:
        assign_new_host(state)
    return departed


def assign_new_host(state: RoomState) -> None:
    """Make the first player in turn order host, or clear the host if empty."""
    for p in state.players.values():
        p.is_host = False
    next_host = state.turn_order[0] if state.turn_order else ''
    state.host_session_id = next_host
    if next_host and next_host in state.players:
        state.players[next_host].is_host = True


def toggle_ready(state: RoomState, session_id: str) -> None:
    """Flip the ready flag of *session_id* while in the lobby."""
    if state.game_phase != GamePhase.LOBBY:
        raise ValueError('Ready can only be toggled in the lobby.')
    seated = state.players.get(session_id)
    if seated is None:
        raise ValueError(f'Session {session_id!r} is not seated.')
    seated.ready = not seated.ready


def start_game(state: RoomState, session_id: str) -> bool:
    """Begin SETUP_ROUND_1 if the host asks and every player is ready.

    A host start with too few or unready players is not an error: the game
    stays in the lobby and the reason goes to the game log for everyone.

    Returns:
        True if the game started.

    Raises:
        ValueError: Outside the lobby, or if *session_id* is not the host.
    """
    if state.game_phase != GamePhase.LOBBY:
        raise ValueError('The game has already started.')
    if state.host_session_id != session_id:
        raise ValueError('Only the host can start the game.')
    if len(state.turn_order) < MIN_PLAYERS:
        state.add_log('Need at least two players to start.')
        return False
    if not all(
        state.players[sid].ready for sid in state.turn_order if sid in state.players
    ):
        state.add_log('All players must be ready.')
        return False

    for p in state.players.values():
        p.ready = False
        p.victory_points = 0
        p.resources = Resources()
        p.pieces = PieceInventory()

    state.placed_structures = []
    state.last_distribution = {}
    state.game_phase = GamePhase.SETUP_ROUND_1
    state.turn_phase = TurnPhase.BUILDING
    state.current_player_index = 0
    state.dice_roll = NO_ROLL
    state.add_log('Setup Round 1 started.')
    return True
