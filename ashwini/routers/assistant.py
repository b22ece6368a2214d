"""
Assistant Router

POST   /assistant/{session_id}/messages - Send a message to the AI assistant
GET    /assistant/{session_id}          - Retrieve the session transcript
DELETE /assistant/{session_id}          - Discard the session
"""

from typing import Any

from fastapi import APIRouter, HTTPException

from ashwini.memory.session_store import session_store
from ashwini.models.schemas import (
    ChatMessageRequest,
    ChatReplyResponse,
    ChatTranscript,
    ChatTurn,
)
from ashwini.routers.analysis import to_attachment

router = APIRouter()


# ── POST /assistant/{session_id}/messages ────────────────────────────────────

@router.post("/{session_id}/messages", response_model=ChatReplyResponse)
async def send_message(session_id: str, request: ChatMessageRequest) -> ChatReplyResponse:
    """Send one message; a failed model call yields the fallback reply."""
    session = session_store.get_or_create(session_id)
    try:
        reply = await session.send(
            request.text,
            attachment=to_attachment(request.image),
            language=request.language,
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return ChatReplyResponse(session_id=session_id, reply=reply)


# ── GET /assistant/{session_id} ──────────────────────────────────────────────

@router.get("/{session_id}", response_model=ChatTranscript)
async def get_transcript(session_id: str) -> ChatTranscript:
    session = session_store.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Unknown session: {session_id}")
    return ChatTranscript(
        session_id=session_id,
        turns=[
            ChatTurn(
                role=entry.turn.role,
                content=entry.turn.content,
                degraded=entry.degraded,
            )
            for entry in session.transcript
        ],
    )


# ── DELETE /assistant/{session_id} ───────────────────────────────────────────

@router.delete("/{session_id}")
async def clear_session(session_id: str) -> dict[str, Any]:
    cleared = session_store.clear_session(session_id)
    return {"status": "cleared", "session_id": session_id, "existed": cleared}
