"""Personality: the tunable weights that give each engine level its style."""

from dataclasses import dataclass

from magnus.constants import (
    DEFAULT_AGGRESSIVENESS,
    DEFAULT_DEFENSIVENESS,
    DEFAULT_LEVEL,
    DEFAULT_MOBILITY,
    DEFAULT_POSITIONALITY,
    DEFAULT_RISK_TAKING,
)


@dataclass(frozen=True)
class Personality:
    """
    Evaluation factors plus the playing level.

    Every field has a baseline default, so callers may override any subset.
    risk_taking is carried for clients that send it but does not currently
    feed any evaluation term.
    """

    aggressiveness: float = DEFAULT_AGGRESSIVENESS
    defensiveness: float = DEFAULT_DEFENSIVENESS
    mobility: float = DEFAULT_MOBILITY
    positionality: float = DEFAULT_POSITIONALITY
    risk_taking: float = DEFAULT_RISK_TAKING
    level: int = DEFAULT_LEVEL
