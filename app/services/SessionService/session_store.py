"""Simple in-memory store for chat page sessions."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from uuid import uuid4

from app.services.ChatService.chat_service_interface import ChatServiceInterface

DEFAULT_SESSION_IDLE_SECONDS: float = 60 * 60


@dataclass
class _Session:
    chat: ChatServiceInterface
    last_seen: float


class SessionStore:
    """
    Map page session ids to their chat orchestrator.

    Sessions not touched for ``idle_seconds`` are dropped the next time a
    session is created. A busy session is never dropped.
    """

    def __init__(
        self,
        chat_factory: Callable[[], ChatServiceInterface],
        logger: logging.Logger,
        idle_seconds: float = DEFAULT_SESSION_IDLE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._chat_factory = chat_factory
        self._sessions: dict[str, _Session] = {}
        self._idle_seconds = idle_seconds
        self._clock = clock
        self.logger = logger

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self) -> str:
        """Create a new session with an empty transcript and return its id."""
        self.evict_idle()

        session_id = uuid4().hex
        self._sessions[session_id] = _Session(
            chat=self._chat_factory(), last_seen=self._clock()
        )
        self.logger.info("Opened chat session %s", session_id)
        return session_id

    def get(self, session_id: str) -> ChatServiceInterface:
        """Return a session or raise KeyError if missing."""
        session = self._sessions.get(session_id)
        if session is None:
            raise KeyError(f"Session {session_id} not found")
        session.last_seen = self._clock()
        return session.chat

    def close(self, session_id: str) -> None:
        """Forget a session and its transcript."""
        if self._sessions.pop(session_id, None) is None:
            raise KeyError(f"Session {session_id} not found")
        self.logger.info("Closed chat session %s", session_id)

    def evict_idle(self) -> int:
        """Drop sessions idle for longer than the configured window."""
        cutoff = self._clock() - self._idle_seconds
        expired = [
            session_id
            for session_id, session in self._sessions.items()
            if session.last_seen < cutoff and not session.chat.busy
        ]
        for session_id in expired:
            del self._sessions[session_id]

        if expired:
            self.logger.info("Evicted %s idle chat sessions", len(expired))
        return len(expired)
