"""Catan turn manager.

Handles room state initialization and turn-order advancement for the setup
rounds and the main game.
"""

from __future__ import annotations

from ..board_generator import generate_board
from ..models.player import PlayerColor
from ..models.room_state import (
    NO_ROLL,
    GamePhase,
    RoomState,
    StructureType,
    TurnPhase,
)


def create_room_state(room_code: str, seed: int | None = None) -> RoomState:
    """Create and return an empty lobby RoomState with a freshly generated board.

    Args:
        room_code: Code the transport uses to address this room.
        seed: Optional RNG seed for a reproducible board.
    """
    return RoomState(
        room_code=room_code,
        board=generate_board(seed=seed),
        game_phase=GamePhase.LOBBY,
        turn_phase=TurnPhase.LOBBY,
    )


def get_next_setup_position(
    current_index: int, num_players: int, phase: GamePhase
) -> tuple[int, GamePhase]:
    """Compute the next player index and phase during setup.

    Round 1 runs forward; the last player then places again to open round 2,
    which runs backward.  Player 0 finishing round 2 starts the main game.

    Returns:
        A ``(next_player_index, next_phase)`` tuple.

    Raises:
        ValueError: If *phase* is not a setup phase.
    """
    if phase == GamePhase.SETUP_ROUND_1:
        if current_index >= num_players - 1:
            return current_index, GamePhase.SETUP_ROUND_2
        return current_index + 1, GamePhase.SETUP_ROUND_1

    if phase == GamePhase.SETUP_ROUND_2:
        if current_index <= 0:
            return 0, GamePhase.PLAY_TURN
        return current_index - 1, GamePhase.SETUP_ROUND_2

    raise ValueError(f'get_next_setup_position called with non-setup phase: {phase}')


# Pieces of each kind a player has placed before a setup round begins.
SETUP_EXPECTED_BEFORE: dict[GamePhase, int] = {
    GamePhase.SETUP_ROUND_1: 0,
    GamePhase.SETUP_ROUND_2: 1,
}


def setup_progress(state: RoomState, color: PlayerColor) -> tuple[int, int, int]:
    """Return ``(settlements, roads, expected)`` for *color* in a setup round.

    ``expected`` is how many of each piece the player had down when the
    current round began.
    """
    own = state.structures_of(color)
    settlements = sum(1 for s in own if s.structure_type == StructureType.SETTLEMENT)
    roads = sum(1 for s in own if s.structure_type == StructureType.ROAD)
    return settlements, roads, SETUP_EXPECTED_BEFORE[state.game_phase]


def advance_setup_turn(state: RoomState) -> RoomState:
    """Move *state* to the next setup placement.  Modifies and returns *state*."""
    next_index, next_phase = get_next_setup_position(
        state.current_player_index, len(state.turn_order), state.game_phase
    )
    previous_phase = state.game_phase
    state.current_player_index = next_index
    state.game_phase = next_phase

    if next_phase == GamePhase.SETUP_ROUND_2 and previous_phase != next_phase:
        state.add_log('Setup Round 2 (reverse order).')
    elif next_phase == GamePhase.PLAY_TURN:
        state.turn_phase = TurnPhase.ROLL_DICE
        state.dice_roll = NO_ROLL
        current = state.current_player
        state.add_log(f'{current.name if current else "Player"} starts the game.')
    return state


def advance_play_turn(state: RoomState) -> RoomState:
    """Pass the turn to the next player in order.  Modifies and returns *state*."""
    if not state.turn_order:
        return state
    state.current_player_index = (state.current_player_index + 1) % len(
        state.turn_order
    )
    state.turn_phase = TurnPhase.ROLL_DICE
    state.dice_roll = NO_ROLL
    state.last_distribution = {}
    current = state.current_player
    state.add_log(f"{current.name if current else 'Player'}'s turn.")
    return state
