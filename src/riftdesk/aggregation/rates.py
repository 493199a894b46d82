"""Rate helpers shared by the aggregators.

All helpers resolve division by zero to 0 (or to the raw numerator for
KDA) instead of raising.
"""

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


def winrate(wins: int, games: int) -> int:
    """Win percentage in [0, 100]; 0 when no games were played."""
    if games <= 0:
        return 0
    return round_half_up(wins / games * 100)


def kda(kills: int, deaths: int, assists: int, digits: int = 1) -> float:
    """(kills + assists) / deaths, or kills + assists when deaths is zero."""
    if deaths == 0:
        return float(kills + assists)
    return round((kills + assists) / deaths, digits)


def per_game(total: int, games: int, digits: int = 1) -> float:
    """Per-game average rounded to `digits`; 0.0 when no games were played."""
    if games <= 0:
        return 0.0
    return round(total / games, digits)


def per_game_int(total: int, games: int) -> int:
    """Per-game average rounded to an integer; 0 when no games were played."""
    if games <= 0:
        return 0
    return round_half_up(total / games)


def per_minute(total: int, seconds: int, digits: int = 1) -> float:
    """Per-minute rate over a duration in seconds; 0.0 for zero duration."""
    if seconds <= 0:
        return 0.0
    return round(total / (seconds / 60), digits)
