"""Shared application settings read from environment variables."""

import os


def _optional_int(name: str) -> int | None:
    """Return the integer value of env var *name*, or None if unset or blank."""
    raw = os.environ.get(name, '').strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f'{name} must be an integer, got {raw!r}') from None


LOG_LEVEL: str = os.environ.get('LOG_LEVEL', 'INFO').upper()

# Seeds board generation for new rooms; unset means a fresh random board.
BOARD_SEED: int | None = _optional_int('BOARD_SEED')
