"""Catan player data models.

Tracks a player's resources, remaining pieces, and victory points, plus the
build cost table.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator

import pydantic

from .board import ResourceType


class PlayerColor(enum.StrEnum):
    """The four player colours, in assignment order."""

    RED = 'red'
    BLUE = 'blue'
    WHITE = 'white'
    ORANGE = 'orange'


class Resources(pydantic.BaseModel):
    """A typed record of the five resource counters."""

    wood: int = 0
    brick: int = 0
    sheep: int = 0
    wheat: int = 0
    ore: int = 0

    def items(self) -> Iterator[tuple[ResourceType, int]]:
        """Yield ``(resource_type, count)`` for all five resources in order."""
        for resource_type in ResourceType:
            yield resource_type, self.get(resource_type)

    def total(self) -> int:
        """Return the total number of resource cards."""
        return sum(count for _, count in self.items())

    def is_empty(self) -> bool:
        return self.total() == 0

    def get(self, resource_type: ResourceType) -> int:
        """Return the count for a specific resource type."""
        return getattr(self, resource_type.value)

    def can_afford(self, cost: Resources) -> bool:
        """Return True if every counter covers the matching counter in *cost*."""
        return all(self.get(resource) >= amount for resource, amount in cost.items())

    def subtract(self, cost: Resources) -> Resources:
        """Return new Resources with *cost* removed.

        Raises:
            ValueError: If any counter would go negative; nothing is debited.
        """
        if not self.can_afford(cost):
            raise ValueError('Insufficient resources.')
        return Resources(
            **{
                resource.value: count - cost.get(resource)
                for resource, count in self.items()
            }
        )

    def add(self, other: Resources) -> Resources:
        """Return new Resources with another set added."""
        return Resources(
            **{
                resource.value: count + other.get(resource)
                for resource, count in self.items()
            }
        )

    def with_resource(self, resource_type: ResourceType, amount: int) -> Resources:
        """Return new Resources with one field replaced."""
        data = self.model_dump()
        data[resource_type.value] = amount
        return Resources(**data)

    def plus(self, resource_type: ResourceType, amount: int = 1) -> Resources:
        """Return new Resources with *amount* added to one field."""
        return self.with_resource(resource_type, self.get(resource_type) + amount)


# Standard build costs.
ROAD_COST = Resources(wood=1, brick=1)
SETTLEMENT_COST = Resources(wood=1, brick=1, sheep=1, wheat=1)
CITY_COST = Resources(wheat=2, ore=3)


class PieceInventory(pydantic.BaseModel):
    """Remaining building pieces a player can still place on the board."""

    roads_remaining: int = 15
    settlements_remaining: int = 5
    cities_remaining: int = 4


class Player(pydantic.BaseModel):
    """One seated player's complete state."""

    session_id: str
    name: str
    color: PlayerColor
    resources: Resources = pydantic.Field(default_factory=Resources)
    pieces: PieceInventory = pydantic.Field(default_factory=PieceInventory)
    victory_points: int = 0
    ready: bool = False
    is_host: bool = False
