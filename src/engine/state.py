"""
Audience Dice - Round State

The single authoritative in-memory record of the current round. Only
RoundController mutates it; everything else reads.
"""

from dataclasses import dataclass, field

from src.engine.base import AggregationMode, Number, Roll, RollMode


@dataclass
class RoundState:
    """
    Mutable state of the current round.

    Attributes:
        active: Whether rolls are currently accepted
        rolls: Accepted rolls in submission order
        rolled_sessions: Sessions that have a roll this round
        aggregation_mode: Statistic used as the round's result
        roll_mode: Roll-selection mode announced to clients
    """
    active: bool = False
    rolls: list[Roll] = field(default_factory=list)
    rolled_sessions: set[str] = field(default_factory=set)
    aggregation_mode: AggregationMode = AggregationMode.MEAN
    roll_mode: RollMode = RollMode.NORMAL

    @property
    def results(self) -> tuple[Number, ...]:
        return tuple(roll.result for roll in self.rolls)

    def has_rolled(self, session_id: str) -> bool:
        return session_id in self.rolled_sessions

    def clear_rolls(self) -> None:
        """Drop every roll and has-rolled flag. Modes are kept."""
        self.rolls.clear()
        self.rolled_sessions.clear()

    def append(self, roll: Roll, *, mark_rolled: bool = True) -> None:
        """Record a roll; the round must be active."""
        if not self.active:
            raise RuntimeError("Cannot append a roll while the round is inactive.")
        self.rolls.append(roll)
        if mark_rolled:
            self.rolled_sessions.add(roll.session_id)
