"""Pydantic command schemas for every room command.

Each command carries the session ID of the sender and the data needed to
apply it to a RoomState.  The CommandResult carries the outcome back to the
caller.
"""

from __future__ import annotations

import enum
from typing import Annotated, Literal

import pydantic

from .room_state import RoomState, StructureType


class CommandType(enum.StrEnum):
    """Discriminator values for every command type."""

    JOIN = 'join'
    LEAVE = 'leave'
    TOGGLE_READY = 'toggle_ready'
    START_GAME = 'start_game'
    PLACE_STRUCTURE = 'place_structure'
    ROLL_DICE = 'roll_dice'
    END_TURN = 'end_turn'


class BaseCommand(pydantic.BaseModel):
    """Base for all commands.  The transport fills in the sender's session ID."""

    session_id: str = ''


class Join(BaseCommand):
    """Take a seat in the room."""

    command_type: Literal[CommandType.JOIN] = CommandType.JOIN
    name: str | None = None


class Leave(BaseCommand):
    """Give up a seat in the room."""

    command_type: Literal[CommandType.LEAVE] = CommandType.LEAVE


class ToggleReady(BaseCommand):
    """Flip the sender's ready flag in the lobby."""

    command_type: Literal[CommandType.TOGGLE_READY] = CommandType.TOGGLE_READY


class StartGame(BaseCommand):
    """Host-only: begin the first setup round."""

    command_type: Literal[CommandType.START_GAME] = CommandType.START_GAME


class PlaceStructure(BaseCommand):
    """Place a road on an edge or a settlement on a vertex."""

    command_type: Literal[CommandType.PLACE_STRUCTURE] = CommandType.PLACE_STRUCTURE
    structure_type: Literal[StructureType.ROAD, StructureType.SETTLEMENT]
    location_id: str = pydantic.Field(min_length=1)


class RollDice(BaseCommand):
    """Roll the two dice to start a main-phase turn."""

    command_type: Literal[CommandType.ROLL_DICE] = CommandType.ROLL_DICE


class EndTurn(BaseCommand):
    """End the current turn (or setup turn) and advance to the next player."""

    command_type: Literal[CommandType.END_TURN] = CommandType.END_TURN


# Discriminated union of all command types for deserialization.
Command = Annotated[
    Join | Leave | ToggleReady | StartGame | PlaceStructure | RollDice | EndTurn,
    pydantic.Field(discriminator='command_type'),
]


class RejectionReason(enum.StrEnum):
    """Why a command was not applied."""

    INVALID = 'invalid'  # out of turn, out of phase, or illegal placement
    ROOM_FULL = 'room_full'  # join with every colour taken


class CommandResult(pydantic.BaseModel):
    """Result returned by the processor after attempting to apply a command."""

    success: bool
    rejection: RejectionReason | None = None
    error_message: str | None = None
    # Updated room state after the command (None on failure).
    updated_state: RoomState | None = None
