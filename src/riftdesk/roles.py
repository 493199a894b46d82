"""Lane role normalization.

The canonical roles are TOP, JUNGLE, MID, ADC, SUPPORT. Older match
records store the bottom lane carry as "BOT"; those rows are mapped to
ADC when they are read.
"""

from __future__ import annotations

CANONICAL_ROLES: tuple[str, ...] = ("TOP", "JUNGLE", "MID", "ADC", "SUPPORT")

# Legacy labels still present in historical data
LEGACY_ROLE_ALIASES: dict[str, str] = {"BOT": "ADC"}


def normalize_role(role: str | None) -> str | None:
    """Normalize a stored position label to its canonical form.

    Args:
        role: Position label as stored (e.g. "MID", "BOT"), or None.

    Returns:
        The canonical label, the input unchanged if it is not a known
        legacy label, or None when no role was recorded.

    Examples:
        >>> normalize_role("BOT")
        'ADC'
        >>> normalize_role("mid")
        'MID'
    """
    if role is None:
        return None

    label = role.strip().upper()
    if not label:
        return None
    return LEGACY_ROLE_ALIASES.get(label, label)


def is_canonical_role(role: str | None) -> bool:
    """Check whether a role normalizes to one of the five canonical roles."""
    return normalize_role(role) in CANONICAL_ROLES
