"""
Audience Dice Round Engine.

Pure Python round logic with zero transport dependencies.
Handles session registration, round lifecycle, roll acceptance and stats.
"""

from src.engine.base import (
    AggregationMode,
    Roll,
    RollMode,
    RollStats,
)
from src.engine.controller import RoundController
from src.engine.events import InboundEvent, Notification, OutboundEvent, parse_command
from src.engine.exceptions import (
    AlreadyRolled,
    InvalidValue,
    NoSession,
    RollRejected,
    RoundInactive,
)
from src.engine.models import Summary
from src.engine.sessions import SessionRegistry
from src.engine.state import RoundState
from src.engine.stats import StatsCalculator

__all__ = [
    # Data Classes
    "Roll",
    "RollStats",
    "RoundState",
    "Summary",
    # Enums
    "AggregationMode",
    "RollMode",
    "InboundEvent",
    "OutboundEvent",
    # Errors
    "RollRejected",
    "NoSession",
    "RoundInactive",
    "AlreadyRolled",
    "InvalidValue",
    # Components
    "StatsCalculator",
    "SessionRegistry",
    "RoundController",
    "Notification",
    "parse_command",
]
