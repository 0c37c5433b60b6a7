"""In-memory store of live form sessions.

Sessions live for the lifetime of the process; nothing is persisted. The
store holds at most ``max_sessions`` sessions and drops the least
recently used one to make room for a new one.
"""

import logging
import threading
import uuid
from collections import OrderedDict

from formbuilder.application import FormSession

logger = logging.getLogger(__name__)

DEFAULT_MAX_SESSIONS = 1000


class SessionNotFoundError(Exception):
    """Raised when a session id is unknown."""

    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        super().__init__(f"Session not found: {session_id}")


class SessionStore:
    """Maps session ids to FormSession instances, least recently used first."""

    def __init__(self, max_sessions: int = DEFAULT_MAX_SESSIONS) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self.max_sessions = max_sessions
        self._sessions: OrderedDict[str, FormSession] = OrderedDict()
        # guards the mapping, not the sessions
        self._lock = threading.Lock()

    def create(self, session: FormSession | None = None) -> tuple[str, FormSession]:
        session = session if session is not None else FormSession()
        session_id = uuid.uuid4().hex
        with self._lock:
            while len(self._sessions) >= self.max_sessions:
                evicted, _ = self._sessions.popitem(last=False)
                logger.info(f"Evicted idle session {evicted}")
            self._sessions[session_id] = session
        logger.debug(f"Created session {session_id}")
        return session_id, session

    def get(self, session_id: str) -> FormSession:
        """Raises SessionNotFoundError for an unknown id."""
        with self._lock:
            session = self._sessions.get(session_id)
            if session is not None:
                self._sessions.move_to_end(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def delete(self, session_id: str) -> None:
        with self._lock:
            if self._sessions.pop(session_id, None) is None:
                raise SessionNotFoundError(session_id)
        logger.debug(f"Deleted session {session_id}")

    def __len__(self) -> int:
        return len(self._sessions)
