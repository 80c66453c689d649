"""Catan command processor.

Applies a single command to a RoomState and returns the result.  The
original state is never modified.  Illegal, out-of-turn and out-of-phase
commands come back as unsuccessful results; nothing is raised to the caller.
"""

from __future__ import annotations

import random
import typing
import uuid

from ..models import commands, player, room_state
from . import distribution, lobby, placement, turn_manager

_BUILD_COSTS: dict[room_state.StructureType, player.Resources] = {
    room_state.StructureType.ROAD: player.ROAD_COST,
    room_state.StructureType.SETTLEMENT: player.SETTLEMENT_COST,
    room_state.StructureType.CITY: player.CITY_COST,
}

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def apply_command(
    state: room_state.RoomState,
    command: commands.Command,
    rng: random.Random | None = None,
) -> commands.CommandResult:
    """Apply *command* to *state* and return a :class:`CommandResult`.

    The original state is never modified; a deep copy is made first.

    Args:
        state: Current authoritative room state.
        command: The command, with ``session_id`` set to the sender.
        rng: Dice source; defaults to a fresh unseeded ``random.Random``.
    """
    state = state.model_copy(deep=True)

    try:
        _dispatch(state, command, rng or random.Random())
    except lobby.RoomFullError as exc:
        return commands.CommandResult(
            success=False,
            rejection=commands.RejectionReason.ROOM_FULL,
            error_message=str(exc),
        )
    except ValueError as exc:
        return commands.CommandResult(
            success=False,
            rejection=commands.RejectionReason.INVALID,
            error_message=str(exc),
        )

    return commands.CommandResult(success=True, updated_state=state)


# ---------------------------------------------------------------------------
# Internal dispatch
# ---------------------------------------------------------------------------


def _dispatch(
    state: room_state.RoomState, command: commands.Command, rng: random.Random
) -> None:
    """Mutate *state* in place according to *command* type."""
    if isinstance(command, commands.Join):
        lobby.join_player(state, command.session_id, command.name)
    elif isinstance(command, commands.Leave):
        lobby.remove_player(state, command.session_id)
    elif isinstance(command, commands.ToggleReady):
        lobby.toggle_ready(state, command.session_id)
    elif isinstance(command, commands.StartGame):
        lobby.start_game(state, command.session_id)
    elif isinstance(command, commands.PlaceStructure):
        _apply_place_structure(state, command)
    elif isinstance(command, commands.RollDice):
        _apply_roll_dice(state, command, rng)
    elif isinstance(command, commands.EndTurn):
        _apply_end_turn(state, command)
    else:
        typing.assert_never(command)


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


def _apply_place_structure(
    state: room_state.RoomState, command: commands.PlaceStructure
) -> None:
    p = _require_current_player(state, command.session_id)
    _validate_location(state, command)

    if state.game_phase in room_state.SETUP_PHASES:
        _apply_setup_placement(state, p, command)
        return

    if (
        state.game_phase != room_state.GamePhase.PLAY_TURN
        or state.turn_phase != room_state.TurnPhase.BUILDING
    ):
        raise ValueError('Building is only allowed after rolling.')

    structure_type = command.structure_type
    _require_piece(p, structure_type)

    cost = _BUILD_COSTS[structure_type]
    if not p.resources.can_afford(cost):
        # Visible to the room; the command still counts as handled.
        state.add_log(f'{p.name} cannot afford a {structure_type}.')
        return

    edges = state.board.edge_list()
    if structure_type == room_state.StructureType.SETTLEMENT:
        valid = placement.can_place_settlement(
            command.location_id, p.color, state.placed_structures, edges
        )
    else:
        valid = placement.can_place_road(
            command.location_id, p.color, state.placed_structures, edges
        )
    if not valid:
        raise ValueError(f'A {structure_type} is not allowed there.')

    p.resources = p.resources.subtract(cost)
    _push_structure(state, p, structure_type, command.location_id)
    if structure_type == room_state.StructureType.SETTLEMENT:
        p.victory_points += 1
    state.add_log(f'{p.name} built a {structure_type}.')


def _apply_setup_placement(
    state: room_state.RoomState,
    p: player.Player,
    command: commands.PlaceStructure,
) -> None:
    """One settlement then one road per setup round, free of charge."""
    settlements, roads, expected = turn_manager.setup_progress(state, p.color)
    edges = state.board.edge_list()

    if command.structure_type == room_state.StructureType.SETTLEMENT:
        if settlements > expected:
            raise ValueError('Settlement already placed this round.')
        _require_piece(p, command.structure_type)
        if not placement.can_place_settlement(
            command.location_id,
            p.color,
            state.placed_structures,
            edges,
            is_setup_phase=True,
        ):
            raise ValueError('Settlement violates the distance rule.')

        _push_structure(state, p, command.structure_type, command.location_id)
        p.victory_points += 1
        state.add_log(f'{p.name} placed a settlement.')

        if state.game_phase == room_state.GamePhase.SETUP_ROUND_2:
            gained = distribution.resources_for_vertex(
                command.location_id, state.board.hexes, state.board.vertex_list()
            )
            p.resources = p.resources.add(gained)
        return

    if roads > expected:
        raise ValueError('Road already placed this round.')
    if settlements == expected:
        raise ValueError("Place this round's settlement before its road.")
    _require_piece(p, command.structure_type)
    if not placement.can_place_road(
        command.location_id, p.color, state.placed_structures, edges
    ):
        raise ValueError('Setup road must connect to own settlement or road.')

    _push_structure(state, p, command.structure_type, command.location_id)
    state.add_log(f'{p.name} placed a road.')

    # Counts are from before this road; a player who skipped an earlier road
    # keeps the turn until they have caught up.
    if settlements == expected + 1 and roads == expected:
        turn_manager.advance_setup_turn(state)


def _apply_roll_dice(
    state: room_state.RoomState, command: commands.RollDice, rng: random.Random
) -> None:
    roller = _require_current_player(state, command.session_id)
    if state.game_phase != room_state.GamePhase.PLAY_TURN:
        raise ValueError('Dice can only be rolled during play.')
    if state.turn_phase != room_state.TurnPhase.ROLL_DICE:
        raise ValueError('Dice have already been rolled this turn.')

    d1 = rng.randint(1, 6)
    d2 = rng.randint(1, 6)
    roll = d1 + d2

    state.dice_roll = roll
    state.turn_phase = room_state.TurnPhase.BUILDING
    state.last_distribution = {}
    state.add_log(f'{roller.name} rolled {roll} ({d1}+{d2}).')

    if roll == 7:
        state.add_log('Robber triggered (not implemented).')
        return

    gains = distribution.resources_for_roll(
        roll,
        state.board.hexes,
        state.placed_structures,
        state.board.vertex_list(),
    )
    for color, gained in gains.items():
        recipient = state.player_by_color(color)
        if recipient is None:
            continue
        state.last_distribution[color] = gained
        recipient.resources = recipient.resources.add(gained)


def _apply_end_turn(state: room_state.RoomState, command: commands.EndTurn) -> None:
    _require_current_player(state, command.session_id)

    if state.game_phase in room_state.SETUP_PHASES:
        turn_manager.advance_setup_turn(state)
        return
    if state.game_phase != room_state.GamePhase.PLAY_TURN:
        raise ValueError('No turn to end outside the game.')

    turn_manager.advance_play_turn(state)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _require_current_player(
    state: room_state.RoomState, session_id: str
) -> player.Player:
    """Return the sender's Player if it is their turn, else raise ValueError."""
    if not state.is_current_player(session_id):
        raise ValueError('Not your turn.')
    p = state.players.get(session_id)
    if p is None:
        raise ValueError(f'Session {session_id!r} is not seated.')
    return p


def _validate_location(
    state: room_state.RoomState, command: commands.PlaceStructure
) -> None:
    """Check that the location exists for the piece type and is unoccupied."""
    if command.structure_type == room_state.StructureType.ROAD:
        exists = command.location_id in state.board.edges
    else:
        exists = command.location_id in state.board.vertices
    if not exists:
        raise ValueError(f'Unknown {command.structure_type} location.')
    if state.structure_at(command.location_id) is not None:
        raise ValueError(f'Location {command.location_id!r} is already occupied.')


def _require_piece(p: player.Player, structure_type: room_state.StructureType) -> None:
    """Raise ValueError if *p* has no piece of *structure_type* left."""
    remaining = {
        room_state.StructureType.ROAD: p.pieces.roads_remaining,
        room_state.StructureType.SETTLEMENT: p.pieces.settlements_remaining,
        room_state.StructureType.CITY: p.pieces.cities_remaining,
    }[structure_type]
    if remaining < 1:
        raise ValueError(f'No {structure_type} pieces remaining.')


def _push_structure(
    state: room_state.RoomState,
    p: player.Player,
    structure_type: room_state.StructureType,
    location_id: str,
) -> None:
    """Append a new structure owned by *p* and spend the matching piece."""
    state.placed_structures.append(
        room_state.PlacedStructure(
            structure_id=uuid.uuid4().hex,
            structure_type=structure_type,
            color=p.color,
            location_id=location_id,
        )
    )
    if structure_type == room_state.StructureType.ROAD:
        p.pieces.roads_remaining -= 1
    elif structure_type == room_state.StructureType.SETTLEMENT:
        p.pieces.settlements_remaining -= 1
    else:
        p.pieces.cities_remaining -= 1
