"""
Audience Dice - Round Controller

The round state machine. Round activity cycles inactive -> active ->
inactive through explicit start/end/reset transitions; the aggregation
and roll-selection modes change independently at any time.

Every operation returns the Notifications the transport should send.
Nothing here performs I/O.
"""

from __future__ import annotations

import logging
import threading
from typing import Any

from src.engine.base import HOST_TEST_SESSION, Number, Roll
from src.engine.events import (
    Command,
    EndRound,
    HostTestRoll,
    Notification,
    OutboundEvent,
    RegisterSession,
    ResetRound,
    RollDice,
    SetAggregationMode,
    SetRollMode,
    StartRound,
)
from src.engine.exceptions import (
    AlreadyRolled,
    InvalidValue,
    NoSession,
    RollRejected,
    RoundInactive,
)
from src.engine.models import Notice, RollAccepted, RollRejection, SessionStatus, Summary
from src.engine.sessions import SessionRegistry
from src.engine.state import RoundState
from src.engine.stats import StatsCalculator
from src.engine.validators import (
    parse_aggregation_mode,
    parse_roll_mode,
    validate_raw_values,
    validate_roll_value,
)

logger = logging.getLogger(__name__)


class RoundController:
    """Owns all mutations of a RoundState.

    Operations run under a single re-entrant lock, so the check-then-act
    in submit_roll cannot interleave with another submission even when
    called from several threads.
    """

    def __init__(
        self,
        state: RoundState | None = None,
        registry: SessionRegistry | None = None,
    ) -> None:
        self.state = state if state is not None else RoundState()
        self.registry = registry if registry is not None else SessionRegistry(self.state)
        self._lock = threading.RLock()

    # -- Snapshot ----------------------------------------------------------

    def summary(self) -> Summary:
        """Fresh snapshot of the round with connection count and modes."""
        with self._lock:
            stats = StatsCalculator.summarize(self.state.results, self.state.aggregation_mode)
            return Summary(
                round_active=self.state.active,
                count=stats.count,
                total=stats.total,
                average=stats.average,
                highest=stats.highest,
                lowest=stats.lowest,
                rolls=list(self.state.results),
                connected_count=self.registry.connected_count,
                calc_mode=self.state.aggregation_mode,
                roll_mode=self.state.roll_mode,
                computed_result=stats.computed_result,
            )

    def _state_update(self) -> Notification:
        return Notification(OutboundEvent.ROLLS_UPDATE, self.summary())

    def _session_statuses(self) -> list[Notification]:
        return [
            Notification(
                OutboundEvent.SESSION_REGISTERED,
                SessionStatus(has_rolled=self.registry.has_rolled(session_id)),
                to=connection_id,
            )
            for connection_id, session_id in self.registry.registered_connections()
        ]

    def _lifecycle(self, signal: OutboundEvent) -> list[Notification]:
        return [self._state_update(), *self._session_statuses(), Notification(signal)]

    # -- Connections -------------------------------------------------------

    def connect(self, connection_id: str) -> list[Notification]:
        with self._lock:
            self.registry.connect(connection_id)
            logger.info("Connection opened: %s", connection_id)
            return [self._state_update()]

    def disconnect(self, connection_id: str) -> list[Notification]:
        with self._lock:
            self.registry.disconnect(connection_id)
            logger.info("Connection closed: %s", connection_id)
            return [self._state_update()]

    def register_session(self, connection_id: str, session_id: Any) -> list[Notification]:
        with self._lock:
            try:
                has_rolled = self.registry.register(session_id, connection_id)
            except ValueError as e:
                return [Notification(OutboundEvent.ERROR, Notice(message=str(e)), to=connection_id)]
            return [
                Notification(
                    OutboundEvent.SESSION_REGISTERED,
                    SessionStatus(has_rolled=has_rolled),
                    to=connection_id,
                )
            ]

    # -- Round lifecycle ---------------------------------------------------

    def start_round(self) -> list[Notification]:
        """Open a fresh round: clears rolls and has-rolled flags."""
        with self._lock:
            self.state.active = True
            self.state.clear_rolls()
            logger.info("Round started")
            return self._lifecycle(OutboundEvent.ROUND_STARTED)

    def end_round(self) -> list[Notification]:
        """Stop accepting rolls; recorded rolls stay visible."""
        with self._lock:
            self.state.active = False
            logger.info("Round ended with %d rolls", len(self.state.rolls))
            return self._lifecycle(OutboundEvent.ROUND_ENDED)

    def reset_round(self) -> list[Notification]:
        """Close the round and clear it. A new start is required to roll again."""
        with self._lock:
            self.state.active = False
            self.state.clear_rolls()
            logger.info("Round reset")
            return self._lifecycle(OutboundEvent.ROUND_RESET)

    # -- Rolls -------------------------------------------------------------

    def submit_roll(
        self,
        session_id: str | None,
        result: Any,
        raw: Any = None,
    ) -> Roll:
        """Record a participant's roll for the current round.

        The submitted result is trusted as-is; it is not checked against
        `raw` or the roll-selection mode.

        Args:
            session_id: Session submitting the roll.
            result: The roll's value.
            raw: Optional underlying dice values (display only).

        Returns:
            The recorded Roll.

        Raises:
            NoSession: session_id was never registered.
            RoundInactive: no round is running.
            AlreadyRolled: the session already rolled this round.
            InvalidValue: result is not a finite number.
        """
        with self._lock:
            if not session_id or not self.registry.is_registered(session_id):
                raise NoSession()
            if not self.state.active:
                raise RoundInactive()
            if self.state.has_rolled(session_id):
                raise AlreadyRolled()
            value = validate_roll_value(result)

            roll = Roll.record(session_id, value, validate_raw_values(raw))
            self.state.append(roll)
            logger.info("Session %s rolled: %s", session_id, value)
            return roll

    def roll(self, connection_id: str, result: Any, raw: Any = None) -> list[Notification]:
        """submit_roll on behalf of a connection, reporting the outcome."""
        with self._lock:
            session_id = self.registry.session_for(connection_id)
            try:
                roll = self.submit_roll(session_id, result, raw)
            except RollRejected as e:
                logger.info("Roll rejected for %s: %s", session_id or connection_id, e.message)
                return self._rejection(e, connection_id)

            accepted = RollAccepted(result=roll.result, stats=self.summary())
            return [
                Notification(OutboundEvent.ROLL_ACCEPTED, accepted, to=connection_id),
                self._state_update(),
            ]

    def _rejection(self, error: RollRejected, connection_id: str) -> list[Notification]:
        if isinstance(error, RoundInactive):
            notice_event = OutboundEvent.ROUND_INACTIVE
        elif isinstance(error, AlreadyRolled):
            notice_event = OutboundEvent.ALREADY_ROLLED
        else:
            return [Notification(OutboundEvent.ERROR, Notice(message=error.message), to=connection_id)]

        return [
            Notification(notice_event, Notice(message=error.notice), to=connection_id),
            Notification(
                OutboundEvent.ROLL_REJECTED,
                RollRejection(reason=error.reason, message=error.message),
                to=connection_id,
            ),
        ]

    def inject_test_roll(self, value: Any) -> Roll | None:
        """Append a host rehearsal roll outside of any audience session.

        Silently does nothing when the round is inactive or the value is
        not a finite number.
        """
        with self._lock:
            if not self.state.active:
                return None
            try:
                number: Number = validate_roll_value(value)
            except InvalidValue:
                return None

            roll = Roll.record(HOST_TEST_SESSION, number)
            self.state.append(roll, mark_rolled=False)
            logger.info("Host test roll: %s", number)
            return roll

    def host_test_roll(self, value: Any) -> list[Notification]:
        with self._lock:
            if self.inject_test_roll(value) is None:
                return []
            return [self._state_update()]

    # -- Modes -------------------------------------------------------------

    def set_aggregation_mode(self, mode: Any) -> list[Notification]:
        """Switch mean/median/mode. Unknown values are ignored."""
        with self._lock:
            parsed = parse_aggregation_mode(mode)
            if parsed is None:
                logger.debug("Ignoring unknown aggregation mode: %r", mode)
                return []
            self.state.aggregation_mode = parsed
            logger.info("Calculation mode changed to: %s", parsed.value)
            return [self._state_update()]

    def set_roll_mode(self, mode: Any) -> list[Notification]:
        """Switch normal/advantage/disadvantage. Unknown values are ignored."""
        with self._lock:
            parsed = parse_roll_mode(mode)
            if parsed is None:
                logger.debug("Ignoring unknown roll mode: %r", mode)
                return []
            self.state.roll_mode = parsed
            logger.info("Roll mode changed to: %s", parsed.value)
            return [self._state_update()]

    # -- Dispatch ----------------------------------------------------------

    def apply(self, connection_id: str, command: Command) -> list[Notification]:
        """Run one command from a connection and return what to send."""
        if isinstance(command, RegisterSession):
            return self.register_session(connection_id, command.session_id)
        if isinstance(command, RollDice):
            return self.roll(connection_id, command.result, command.raw)
        if isinstance(command, StartRound):
            return self.start_round()
        if isinstance(command, EndRound):
            return self.end_round()
        if isinstance(command, ResetRound):
            return self.reset_round()
        if isinstance(command, SetAggregationMode):
            return self.set_aggregation_mode(command.mode)
        if isinstance(command, SetRollMode):
            return self.set_roll_mode(command.mode)
        if isinstance(command, HostTestRoll):
            return self.host_test_roll(command.value)
        raise TypeError(f"Unknown command: {command!r}")
