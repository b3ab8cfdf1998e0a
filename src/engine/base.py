"""
Audience Dice - Engine Base Classes

This module defines the foundational data structures and enums used throughout
the round engine. Recorded rolls and computed stats are immutable (frozen
dataclasses) so that snapshots can be shared with broadcast code safely.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum


Number = int | float

HOST_TEST_SESSION = "HOST_TEST"


class AggregationMode(Enum):
    """Statistic used as the round's single result."""
    MEAN = "mean"
    MEDIAN = "median"
    MODE = "mode"


class RollMode(Enum):
    """How a participant's single logical roll is produced client-side."""
    NORMAL = "normal"
    ADVANTAGE = "advantage"        # two dice, keep the higher
    DISADVANTAGE = "disadvantage"  # two dice, keep the lower


@dataclass(frozen=True)
class Roll:
    """
    A single accepted roll.

    Attributes:
        session_id: Session that submitted the roll
        result: The value counted towards the round's stats
        raw: Underlying dice values (1 or 2), display only
        timestamp: When the roll was recorded (UTC)
    """
    session_id: str
    result: Number
    raw: tuple[Number, ...] | None = None
    timestamp: datetime | None = None

    @classmethod
    def record(
        cls,
        session_id: str,
        result: Number,
        raw: tuple[Number, ...] | None = None,
    ) -> "Roll":
        """Create a Roll stamped with the current time."""
        return cls(
            session_id=session_id,
            result=result,
            raw=raw,
            timestamp=datetime.now(timezone.utc),
        )


@dataclass(frozen=True)
class RollStats:
    """
    Summary statistics over one round's roll results.

    Attributes:
        count: Number of rolls
        total: Sum of all results
        average: Mean rounded to the nearest integer
        highest: Largest result (0 when empty)
        lowest: Smallest result (0 when empty)
        computed_result: Value selected by the aggregation mode
    """
    count: int = 0
    total: Number = 0
    average: int = 0
    highest: Number = 0
    lowest: Number = 0
    computed_result: Number = 0

    @property
    def is_empty(self) -> bool:
        return self.count == 0
