"""
Session Store

Holds one ConversationSession per assistant session id.
Sessions live in memory only and are dropped when the UI discards them.
"""

from __future__ import annotations

from typing import Callable, Optional

from ashwini.core.conversation import ConversationSession, TextGenerator


class SessionStore:
    """In-memory map of session id to conversation."""

    def __init__(self, client_factory: Callable[[], TextGenerator]) -> None:
        self._client_factory = client_factory
        self._sessions: dict[str, ConversationSession] = {}

    def get(self, session_id: str) -> Optional[ConversationSession]:
        """Return the session if it exists."""
        return self._sessions.get(session_id)

    def get_or_create(self, session_id: str) -> ConversationSession:
        """Return the session, creating it on first use.

        Args:
            session_id: The unique session identifier.
        """
        session = self._sessions.get(session_id)
        if session is None:
            session = ConversationSession(self._client_factory())
            self._sessions[session_id] = session
        return session

    def clear_session(self, session_id: str) -> bool:
        """Discard a session.  Returns False if it did not exist."""
        return self._sessions.pop(session_id, None) is not None

    def clear_all(self) -> None:
        """Discard every session."""
        self._sessions.clear()


def _default_client() -> TextGenerator:
    from ashwini.core.gemini_client import gemini_client

    return gemini_client


# Module-level singleton instance
session_store = SessionStore(_default_client)
