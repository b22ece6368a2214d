"""Tests for ConversationSession history threading and degradation."""

import pytest
from google.auth import exceptions as auth_exceptions

from ashwini.core.conversation import ConversationSession
from ashwini.core.gemini_client import GeminiClient
from ashwini.core.generation_request import Attachment
from ashwini.errors import EmptyResponseError, TransportError, UpstreamError
from ashwini.prompts.assistant import (
    ASSISTANT_SYSTEM_DIRECTIVE,
    DESCRIBE_ATTACHMENT_PLACEHOLDER,
    FALLBACK_REPLY,
)
from tests.fakes import FakeGenerationClient


@pytest.mark.asyncio
async def test_first_message_has_no_history():
    client = FakeGenerationClient("Hello! How can I help?")
    session = ConversationSession(client)

    reply = await session.send("Hi")

    assert reply == "Hello! How can I help?"
    request = client.requests[0]
    assert request.prior_turns == ()
    assert request.prompt == "Hi"
    assert request.system_instruction == ASSISTANT_SYSTEM_DIRECTIVE


@pytest.mark.asyncio
async def test_history_holds_prior_exchanges_in_order():
    client = FakeGenerationClient("answer one", "answer two", "answer three")
    session = ConversationSession(client)

    await session.send("question one")
    await session.send("question two")
    await session.send("question three")

    third = client.requests[2]
    assert [(t.role, t.content) for t in third.prior_turns] == [
        ("user", "question one"),
        ("model", "answer one"),
        ("user", "question two"),
        ("model", "answer two"),
    ]
    assert third.prompt == "question three"
    assert len(session.transcript) == 6


@pytest.mark.asyncio
@pytest.mark.parametrize("failure", [
    TransportError("offline"),
    UpstreamError("quota exceeded", status_code=429),
    EmptyResponseError("blocked"),
])
async def test_failure_returns_fallback_and_session_continues(failure):
    client = FakeGenerationClient("first answer", failure, "third answer")
    session = ConversationSession(client)

    await session.send("first")
    reply = await session.send("second")
    assert reply == FALLBACK_REPLY

    transcript = session.transcript
    assert [e.degraded for e in transcript] == [False, False, True, True]
    assert transcript[-1].turn.content == FALLBACK_REPLY

    assert await session.send("third") == "third answer"
    # Degraded exchanges are not sent back as context
    assert [t.content for t in client.requests[2].prior_turns] == ["first", "first answer"]


@pytest.mark.asyncio
async def test_image_only_message_uses_placeholder():
    client = FakeGenerationClient("It looks like a rash.")
    session = ConversationSession(client)
    image = Attachment(data=b"jpeg", mime_type="image/jpeg")

    await session.send("", attachment=image)

    request = client.requests[0]
    assert request.prompt == DESCRIBE_ATTACHMENT_PLACEHOLDER
    assert request.attachment is image
    assert session.transcript[0].turn.content == DESCRIBE_ATTACHMENT_PLACEHOLDER


@pytest.mark.asyncio
async def test_history_is_text_only():
    client = FakeGenerationClient("It looks like a rash.", "Use a mild cream.")
    session = ConversationSession(client)

    await session.send("What is this?", attachment=Attachment(b"jpeg", "image/jpeg"))
    await session.send("What should I do?")

    assert all(t.attachment is None for t in client.requests[1].prior_turns)


@pytest.mark.asyncio
async def test_language_wraps_live_message_only():
    client = FakeGenerationClient("Namaste", "Theek hai")
    session = ConversationSession(client)

    await session.send("Hello", language="Hindi")
    await session.send("Thanks", language="Hindi")

    assert client.requests[0].prompt == "Please respond in Hindi. Here is my question: Hello"
    assert client.requests[1].prior_turns[0].content == "Hello"


@pytest.mark.asyncio
@pytest.mark.parametrize("text", ["", "   "])
async def test_empty_message_is_rejected(text):
    session = ConversationSession(FakeGenerationClient())
    with pytest.raises(ValueError):
        await session.send(text)
    assert not session.is_active


@pytest.mark.asyncio
@pytest.mark.parametrize("failure", [
    auth_exceptions.DefaultCredentialsError("no application default credentials"),
    auth_exceptions.RefreshError("token refresh failed"),
])
async def test_missing_credentials_give_fallback_reply(monkeypatch, failure):
    client = GeminiClient(model_name="gemini-test")
    client._initialized = True

    def build_model(system_instruction):
        raise failure

    monkeypatch.setattr(client, "_build_model", build_model)
    session = ConversationSession(client)

    assert await session.send("hello") == FALLBACK_REPLY
    assert [e.degraded for e in session.transcript] == [True, True]
