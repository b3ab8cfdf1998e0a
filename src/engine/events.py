"""
Audience Dice - Event Definitions

Inbound event names and the commands they map to, outbound event names,
and the Notification wrapper the controller returns for the transport.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import ValidationError

from src.engine.models import RegisterSessionRequest, RollRequest, WireModel


class InboundEvent(Enum):
    """Events clients send to the server."""

    REGISTER_SESSION = "register-session"
    ROLL_DICE = "roll-dice"
    START_ROUND = "start-round"
    END_ROUND = "end-round"
    RESET_ROUND = "reset-round"
    SET_MODE = "set-mode"
    SET_ROLL_MODE = "set-roll-mode"
    HOST_TEST_ROLL = "host-test-roll"


class OutboundEvent(Enum):
    """Events the server sends to clients."""

    ROLLS_UPDATE = "rolls-update"
    SESSION_REGISTERED = "session-registered"
    ROLL_ACCEPTED = "roll-accepted"
    ROLL_REJECTED = "roll-rejected"
    ALREADY_ROLLED = "already-rolled"
    ROUND_INACTIVE = "round-inactive"
    ROUND_STARTED = "round-started"
    ROUND_ENDED = "round-ended"
    ROUND_RESET = "round-reset"
    ERROR = "error"


# -- Commands ---------------------------------------------------------------

@dataclass(frozen=True)
class RegisterSession:
    session_id: Any


@dataclass(frozen=True)
class RollDice:
    result: Any
    raw: Any = None


@dataclass(frozen=True)
class StartRound:
    pass


@dataclass(frozen=True)
class EndRound:
    pass


@dataclass(frozen=True)
class ResetRound:
    pass


@dataclass(frozen=True)
class SetAggregationMode:
    mode: Any


@dataclass(frozen=True)
class SetRollMode:
    mode: Any


@dataclass(frozen=True)
class HostTestRoll:
    value: Any


Command = (
    RegisterSession
    | RollDice
    | StartRound
    | EndRound
    | ResetRound
    | SetAggregationMode
    | SetRollMode
    | HostTestRoll
)


@dataclass(frozen=True)
class Notification:
    """One outbound event.

    A Notification with `to=None` goes to every connection; otherwise
    only to the named connection.
    """

    event: OutboundEvent
    data: WireModel | None = None
    to: str | None = None

    @property
    def is_broadcast(self) -> bool:
        return self.to is None


def _validate(model: type[WireModel], payload: Any) -> WireModel:
    if not isinstance(payload, dict):
        return model()
    try:
        return model.model_validate(payload)
    except ValidationError:
        return model()


def parse_command(event: InboundEvent | str, payload: Any = None) -> Command | None:
    """Build the command for an inbound event.

    Malformed payloads still produce a command carrying None values, so
    the controller can report the problem to the sender.

    Returns:
        The command, or None for an unknown event name.
    """
    try:
        event = InboundEvent(event)
    except ValueError:
        return None

    if event == InboundEvent.REGISTER_SESSION:
        return RegisterSession(session_id=_validate(RegisterSessionRequest, payload).session_id)
    if event == InboundEvent.ROLL_DICE:
        request = _validate(RollRequest, payload)
        return RollDice(result=request.result, raw=request.raw)
    if event == InboundEvent.START_ROUND:
        return StartRound()
    if event == InboundEvent.END_ROUND:
        return EndRound()
    if event == InboundEvent.RESET_ROUND:
        return ResetRound()
    if event == InboundEvent.SET_MODE:
        return SetAggregationMode(mode=payload)
    if event == InboundEvent.SET_ROLL_MODE:
        return SetRollMode(mode=payload)
    return HostTestRoll(value=payload)
