"""Catan room state model.

Captures the complete authoritative state of one room: the board, the
player roster, turn order, phases, placed structures, and the game log.
"""

from __future__ import annotations

import enum

import pydantic

from .board import Board
from .player import Player, PlayerColor, Resources

# Maximum number of entries kept in RoomState.game_log.
GAME_LOG_LIMIT = 50

# Sentinel for RoomState.dice_roll when no dice have been rolled this turn.
NO_ROLL = -1


class GamePhase(enum.StrEnum):
    """High-level phases of a room."""

    # Players join, pick ready, and wait for the host to start.
    LOBBY = 'LOBBY'
    # Initial placement: settlement/road pairs placed in turn order.
    SETUP_ROUND_1 = 'SETUP_ROUND_1'
    # Initial placement: settlement/road pairs placed in reverse order.
    SETUP_ROUND_2 = 'SETUP_ROUND_2'
    # Main game: roll, then build.
    PLAY_TURN = 'PLAY_TURN'
    # Declared for clients; no rule currently ends a game.
    GAME_OVER = 'GAME_OVER'


class TurnPhase(enum.StrEnum):
    """Sub-phase of the current player's turn."""

    LOBBY = 'LOBBY'
    ROLL_DICE = 'ROLL_DICE'
    TRADING = 'TRADING'  # declared, never entered
    BUILDING = 'BUILDING'


class StructureType(enum.StrEnum):
    """Pieces a player can put on the board."""

    ROAD = 'road'
    SETTLEMENT = 'settlement'
    CITY = 'city'


# Structures that sit on vertices (and so produce resources).
BUILDING_TYPES = (StructureType.SETTLEMENT, StructureType.CITY)

SETUP_PHASES = (GamePhase.SETUP_ROUND_1, GamePhase.SETUP_ROUND_2)


class PlacedStructure(pydantic.BaseModel):
    """A road, settlement, or city on the board."""

    model_config = pydantic.ConfigDict(frozen=True)

    structure_id: str
    structure_type: StructureType
    color: PlayerColor
    location_id: str  # vertex ID for settlement/city, edge ID for road

    @property
    def is_building(self) -> bool:
        return self.structure_type in BUILDING_TYPES


class RoomState(pydantic.BaseModel):
    """Complete snapshot of one room at any point in time."""

    room_code: str
    board: Board
    # Seated players keyed by session ID.
    players: dict[str, Player] = pydantic.Field(default_factory=dict)
    # Session IDs in turn order; changes on join and leave.
    turn_order: list[str] = pydantic.Field(default_factory=list)
    current_player_index: int = 0
    game_phase: GamePhase = GamePhase.LOBBY
    turn_phase: TurnPhase = TurnPhase.LOBBY
    dice_roll: int = NO_ROLL
    host_session_id: str = ''
    # Most recent entry first, at most GAME_LOG_LIMIT entries.
    game_log: list[str] = pydantic.Field(default_factory=list)
    placed_structures: list[PlacedStructure] = pydantic.Field(default_factory=list)
    # Resources each colour gained from the most recent roll.
    last_distribution: dict[PlayerColor, Resources] = pydantic.Field(
        default_factory=dict
    )

    # ------------------------------------------------------------------
    # Look-ups
    # ------------------------------------------------------------------

    @property
    def current_session_id(self) -> str | None:
        """Session ID of the player whose turn it is, or None for an empty room."""
        if 0 <= self.current_player_index < len(self.turn_order):
            return self.turn_order[self.current_player_index]
        return None

    @property
    def current_player(self) -> Player | None:
        session_id = self.current_session_id
        return self.players.get(session_id) if session_id is not None else None

    def is_current_player(self, session_id: str) -> bool:
        return self.current_session_id == session_id

    def player_by_color(self, color: PlayerColor) -> Player | None:
        return next((p for p in self.players.values() if p.color == color), None)

    def structure_at(self, location_id: str) -> PlacedStructure | None:
        """Return the structure occupying *location_id*, or None."""
        return next(
            (s for s in self.placed_structures if s.location_id == location_id), None
        )

    def structures_of(self, color: PlayerColor) -> list[PlacedStructure]:
        return [s for s in self.placed_structures if s.color == color]

    # ------------------------------------------------------------------
    # Mutation helpers
    # ------------------------------------------------------------------

    def add_log(self, entry: str) -> None:
        """Prepend *entry* to the game log, dropping the oldest past the limit."""
        self.game_log.insert(0, entry)
        del self.game_log[GAME_LOG_LIMIT:]
