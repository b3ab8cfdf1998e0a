"""
Audience Dice - Session Registry

Tracks which durable session each open connection currently represents.
Sessions outlive connections: disconnecting never clears a session's
has-rolled status.
"""

import logging

from src.engine.state import RoundState
from src.engine.validators import validate_session_id

logger = logging.getLogger(__name__)


class SessionRegistry:
    """Connection-to-session association table.

    Each connection represents at most one session. When a session
    registers from a new connection, the newest connection wins.

    Known sessions are never forgotten: the set grows for the life of
    the process, including sessions that disconnected without rolling.
    """

    def __init__(self, state: RoundState) -> None:
        self._state = state
        self._open: set[str] = set()
        self._by_connection: dict[str, str] = {}
        self._by_session: dict[str, str] = {}
        self._known_sessions: set[str] = set()

    # -- Transport-level connections ---------------------------------------

    def connect(self, connection_id: str) -> None:
        """Record a newly opened connection."""
        self._open.add(connection_id)

    def disconnect(self, connection_id: str) -> None:
        """Forget a closed connection and its session association."""
        self.unregister(connection_id)
        self._open.discard(connection_id)

    @property
    def connected_count(self) -> int:
        """Number of open connections, registered or not."""
        return len(self._open)

    # -- Session association -----------------------------------------------

    def register(self, session_id: str, connection_id: str) -> bool:
        """Associate a connection with a session.

        Replaces any session the connection represented before. Calling
        it again with the same pair changes nothing.

        Args:
            session_id: Durable client-chosen identifier.
            connection_id: Transport connection (socket id).

        Returns:
            Whether the session already rolled this round.

        Raises:
            ValueError: If session_id is not a non-empty string.
        """
        session_id = validate_session_id(session_id)

        previous = self._by_connection.get(connection_id)
        if previous is not None and previous != session_id:
            self._drop_session_link(previous, connection_id)

        self._open.add(connection_id)
        self._by_connection[connection_id] = session_id
        self._by_session[session_id] = connection_id
        self._known_sessions.add(session_id)

        logger.info("Registered session %s for connection %s", session_id, connection_id)
        return self.has_rolled(session_id)

    def unregister(self, connection_id: str) -> None:
        """Remove the connection's session association, if any."""
        session_id = self._by_connection.pop(connection_id, None)
        if session_id is not None:
            self._drop_session_link(session_id, connection_id)

    def _drop_session_link(self, session_id: str, connection_id: str) -> None:
        if self._by_session.get(session_id) == connection_id:
            del self._by_session[session_id]

    # -- Lookups -----------------------------------------------------------

    def has_rolled(self, session_id: str) -> bool:
        return self._state.has_rolled(session_id)

    def is_registered(self, session_id: str | None) -> bool:
        """Whether the session has ever registered on this server."""
        return session_id in self._known_sessions

    def session_for(self, connection_id: str) -> str | None:
        return self._by_connection.get(connection_id)

    def connection_for(self, session_id: str) -> str | None:
        return self._by_session.get(session_id)

    def registered_connections(self) -> list[tuple[str, str]]:
        """(connection_id, session_id) pairs in registration order."""
        return list(self._by_connection.items())
