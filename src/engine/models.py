"""
Audience Dice - Wire Models

Pydantic models that mirror the Socket.IO event payloads. Field names are
snake_case in Python and camelCase on the wire.
"""

from typing import Any

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from src.engine.base import AggregationMode, RollMode

_WIRE_CONFIG = {
    "alias_generator": to_camel,
    "populate_by_name": True,
    "from_attributes": True,
}


class WireModel(BaseModel):
    """Base for payloads serialized with camelCase keys."""

    model_config = _WIRE_CONFIG

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


# -- Outbound ---------------------------------------------------------------

class Summary(WireModel):
    """Full round snapshot carried by `rolls-update`."""

    round_active: bool = False
    count: int = 0
    total: int | float = 0
    average: int = 0
    highest: int | float = 0
    lowest: int | float = 0
    rolls: list[int | float] = Field(default_factory=list)
    connected_count: int = 0
    calc_mode: AggregationMode = AggregationMode.MEAN
    roll_mode: RollMode = RollMode.NORMAL
    computed_result: int | float = 0


class SessionStatus(WireModel):
    """Payload of `session-registered`."""

    has_rolled: bool


class RollAccepted(WireModel):
    """Payload of `roll-accepted`."""

    result: int | float
    stats: Summary


class RollRejection(WireModel):
    """Payload of `roll-rejected`."""

    reason: str
    message: str


class Notice(WireModel):
    """Payload of `error`, `already-rolled` and `round-inactive`."""

    message: str


# -- Inbound ----------------------------------------------------------------

class RegisterSessionRequest(WireModel):
    """Payload of `register-session`."""

    session_id: Any = None


class RollRequest(WireModel):
    """Payload of `roll-dice`. Values are validated by the controller."""

    result: Any = None
    raw: Any = None
