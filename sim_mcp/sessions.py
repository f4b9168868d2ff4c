"""Client session bookkeeping for the streamable HTTP endpoint."""

from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Session:
    session_id: str
    protocol_version: Optional[str] = None
    client_info: Dict[str, object] = field(default_factory=dict)
    last_seen: float = 0.0
    initialized: bool = False


class SessionStore:
    """
    Session id to Session mapping.

    Entries are inserted on ``initialize`` and removed on close, or once they
    have been idle for longer than ``idle_timeout`` seconds (``None`` keeps
    them until closed). Ids are unique per client, so no locking is needed
    inside a single event loop.
    """

    def __init__(
        self,
        idle_timeout: Optional[float] = None,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.idle_timeout = idle_timeout
        self._clock = clock
        self._sessions: Dict[str, Session] = {}

    def create(self, session_id: Optional[str] = None, **details) -> Session:
        """Create (or replace) a session, generating an id when none is given."""
        self.evict_idle()
        sid = session_id or str(uuid.uuid4())
        if sid in self._sessions:
            logger.info("Reusing existing session: %s", sid)
        else:
            logger.info("MCP session initialized: %s", sid)
        session = Session(session_id=sid, last_seen=self._clock(), **details)
        self._sessions[sid] = session
        return session

    def get(self, session_id: Optional[str]) -> Optional[Session]:
        if not session_id:
            return None
        self.evict_idle()
        session = self._sessions.get(session_id)
        if session is not None:
            session.last_seen = self._clock()
        return session

    def close(self, session_id: str) -> bool:
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        logger.info("MCP session closed: %s", session_id)
        return True

    def evict_idle(self) -> List[str]:
        """Drop sessions idle past ``idle_timeout``; returns the evicted ids."""
        if self.idle_timeout is None:
            return []
        cutoff = self._clock() - self.idle_timeout
        expired = [sid for sid, session in self._sessions.items() if session.last_seen < cutoff]
        for sid in expired:
            del self._sessions[sid]
            logger.info("MCP session expired: %s", sid)
        return expired

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
