"""
Generation request types shared by the prompt builder, the Gemini client
and the conversation session.
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from typing import Literal, Optional

from ashwini.core.output_schema import SchemaNode

Role = Literal["user", "model"]


@dataclass(frozen=True)
class Attachment:
    """Binary payload sent to the model as its own multimodal part."""

    data: bytes
    mime_type: str

    @classmethod
    def from_base64(cls, data: str, mime_type: str) -> "Attachment":
        """Decode a base64 string (as sent by the UI) into an attachment."""
        try:
            raw = base64.b64decode(data, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValueError(f"Attachment is not valid base64: {exc}") from exc
        return cls(data=raw, mime_type=mime_type)

    @classmethod
    def from_data_uri(cls, uri: str) -> "Attachment":
        """Parse ``data:<mimetype>;base64,<encoded_data>``."""
        header, sep, encoded = uri.partition(",")
        if not sep or not header.startswith("data:") or not header.endswith(";base64"):
            raise ValueError("Expected a base64 data URI")
        mime_type = header[len("data:"):-len(";base64")]
        return cls.from_base64(encoded, mime_type)


@dataclass(frozen=True)
class Turn:
    """One message in a conversation."""

    role: Role
    content: str
    attachment: Optional[Attachment] = None


@dataclass(frozen=True)
class GenerationRequest:
    """Everything needed for one call to the model.  Immutable once built."""

    prompt: str
    attachment: Optional[Attachment] = None
    schema: Optional[SchemaNode] = None
    prior_turns: tuple[Turn, ...] = ()
    system_instruction: Optional[str] = None
