"""
Conversation Session

Multi-turn wrapper around the Gemini client for the AI assistant.
Keeps an append-only transcript and a fixed system directive.  A failed
exchange never raises: it is recorded with a fallback reply so the dialogue
stays usable.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from ashwini.core.generation_request import Attachment, GenerationRequest, Turn
from ashwini.errors import GenerationError
from ashwini.prompts.assistant import (
    ASSISTANT_SYSTEM_DIRECTIVE,
    DESCRIBE_ATTACHMENT_PLACEHOLDER,
    FALLBACK_REPLY,
    LANGUAGE_WRAPPER,
)

logger = logging.getLogger(__name__)


class TextGenerator(Protocol):
    async def generate(self, request: GenerationRequest) -> str: ...


@dataclass(frozen=True)
class TranscriptEntry:
    """A turn as shown to the user; degraded entries are not sent as history."""

    turn: Turn
    degraded: bool = False


class ConversationSession:
    """Ordered chat with one system directive.

    The history sent with each call holds only prior successful exchanges,
    text only; the message being sent is the live prompt, never part of it.
    """

    def __init__(
        self,
        client: TextGenerator,
        system_directive: str = ASSISTANT_SYSTEM_DIRECTIVE,
    ) -> None:
        self._client = client
        self.system_directive = system_directive
        self._entries: list[TranscriptEntry] = []

    @property
    def transcript(self) -> list[TranscriptEntry]:
        return list(self._entries)

    @property
    def is_active(self) -> bool:
        return bool(self._entries)

    def history(self) -> tuple[Turn, ...]:
        """Prior turns to thread into the next call."""
        return tuple(
            Turn(role=entry.turn.role, content=entry.turn.content)
            for entry in self._entries
            if not entry.degraded
        )

    async def send(
        self,
        text: str = "",
        attachment: Optional[Attachment] = None,
        language: Optional[str] = None,
    ) -> str:
        """Send one user message and return the model's reply text.

        On any generation failure the fallback reply is returned instead;
        callers cannot tell the two apart.

        Raises:
            ValueError: if neither text nor an attachment is supplied.
        """
        text = text.strip()
        if not text and attachment is None:
            raise ValueError("A message needs text or an attachment")

        content = text or DESCRIBE_ATTACHMENT_PLACEHOLDER
        message = content
        if language:
            message = LANGUAGE_WRAPPER.format(language=language, message=content)

        request = GenerationRequest(
            prompt=message,
            attachment=attachment,
            prior_turns=self.history(),
            system_instruction=self.system_directive,
        )
        user_turn = Turn(role="user", content=content, attachment=attachment)

        try:
            reply = await self._client.generate(request)
        except GenerationError as exc:
            logger.warning("Assistant reply failed, sending fallback: %s", exc)
            self._entries.append(TranscriptEntry(user_turn, degraded=True))
            self._entries.append(
                TranscriptEntry(Turn(role="model", content=FALLBACK_REPLY), degraded=True)
            )
            return FALLBACK_REPLY

        self._entries.append(TranscriptEntry(user_turn))
        self._entries.append(TranscriptEntry(Turn(role="model", content=reply)))
        return reply
