"""JSON serialization helpers for Catan models."""

from __future__ import annotations

import typing

import pydantic


def serialize_model(model: pydantic.BaseModel) -> dict[str, typing.Any]:
    """Return a JSON-serializable dict representation of any Pydantic model."""
    return model.model_dump(mode='json')
