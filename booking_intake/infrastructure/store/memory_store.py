from __future__ import annotations

import logging
import time
import uuid
from collections import OrderedDict
from typing import Callable

from booking_intake.application.dto.wizard_session import WizardSession
from booking_intake.application.exceptions import WizardSessionNotFound
from booking_intake.application.ports.session_store import WizardSessionStorePort


class MemoryWizardSessionStore(WizardSessionStorePort):
    """
    Sessions are kept in least-recently-seen order. Sessions idle longer than
    `ttl_seconds` are dropped on the next create/get, and the oldest ones are
    dropped once `max_sessions` is reached. None disables either limit.
    """

    def __init__(
        self,
        ttl_seconds: float | None = None,
        max_sessions: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._sessions: OrderedDict[str, WizardSession] = OrderedDict()
        self._last_seen: dict[str, float] = {}
        self._ttl_seconds = ttl_seconds
        self._max_sessions = max_sessions
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    def create(self, session: WizardSession) -> str:
        now = self._clock()
        self._evict_idle(now)
        if self._max_sessions is not None:
            while self._sessions and len(self._sessions) >= self._max_sessions:
                oldest = next(iter(self._sessions))
                self._drop(oldest)
                self._logger.info("Session evicted at capacity", extra={"session_id": oldest})
        session_id = uuid.uuid4().hex
        self._sessions[session_id] = session
        self._last_seen[session_id] = now
        return session_id

    def get(self, session_id: str) -> WizardSession:
        now = self._clock()
        self._evict_idle(now)
        try:
            session = self._sessions[session_id]
        except KeyError:
            raise WizardSessionNotFound(session_id) from None
        self._sessions.move_to_end(session_id)
        self._last_seen[session_id] = now
        return session

    def discard(self, session_id: str) -> bool:
        return self._drop(session_id)

    def _evict_idle(self, now: float) -> None:
        if self._ttl_seconds is None:
            return
        while self._sessions:
            oldest = next(iter(self._sessions))
            if now - self._last_seen[oldest] <= self._ttl_seconds:
                break
            self._drop(oldest)
            self._logger.info("Idle session expired", extra={"session_id": oldest})

    def _drop(self, session_id: str) -> bool:
        self._last_seen.pop(session_id, None)
        return self._sessions.pop(session_id, None) is not None

    def __len__(self) -> int:
        return len(self._sessions)
