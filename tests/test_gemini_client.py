"""Tests for GeminiClient request assembly and error mapping.

The Vertex AI model is replaced with a fake; no network calls are made.
"""

import pytest
from google.api_core import exceptions as api_exceptions
from google.auth import exceptions as auth_exceptions

from ashwini.core.gemini_client import GeminiClient
from ashwini.core.generation_request import Attachment, GenerationRequest, Turn
from ashwini.errors import EmptyResponseError, TransportError, UpstreamError
from ashwini.prompts.facilities import FACILITY_LIST_SCHEMA


class _Response:
    def __init__(self, text):
        self._text = text

    @property
    def text(self):
        if isinstance(self._text, Exception):
            raise self._text
        return self._text


class _FakeModel:
    def __init__(self, outcome):
        self.outcome = outcome
        self.calls = []

    async def generate_content_async(self, contents, generation_config):
        self.calls.append((contents, generation_config))
        if isinstance(self.outcome, Exception) and not isinstance(self.outcome, ValueError):
            raise self.outcome
        return _Response(self.outcome)


@pytest.fixture
def client_with(monkeypatch):
    def factory(outcome):
        client = GeminiClient(model_name="gemini-test")
        client._initialized = True
        model = _FakeModel(outcome)
        monkeypatch.setattr(client, "_build_model", lambda system_instruction: model)
        return client, model
    return factory


@pytest.mark.asyncio
async def test_unconfigured_client_raises_transport_error():
    client = GeminiClient(model_name="gemini-test")
    client._initialized = False
    with pytest.raises(TransportError):
        await client.generate(GenerationRequest(prompt="hello"))


@pytest.mark.asyncio
async def test_generate_returns_text(client_with):
    client, model = client_with("Hello there")
    assert await client.generate(GenerationRequest(prompt="hi")) == "Hello there"


@pytest.mark.asyncio
async def test_prior_turns_precede_live_prompt(client_with):
    client, model = client_with("reply")
    request = GenerationRequest(
        prompt="third",
        prior_turns=(Turn("user", "first"), Turn("model", "second")),
        attachment=Attachment(b"img", "image/png"),
    )

    await client.generate(request)

    contents, _ = model.calls[0]
    assert [c.role for c in contents] == ["user", "model", "user"]
    # Live turn carries text plus the image part
    assert len(contents[-1].parts) == 2


@pytest.mark.asyncio
@pytest.mark.parametrize("failure", [
    api_exceptions.ServiceUnavailable("backend down"),
    api_exceptions.DeadlineExceeded("too slow"),
    ConnectionError("no route"),
    auth_exceptions.DefaultCredentialsError("no application default credentials"),
    auth_exceptions.RefreshError("token refresh failed"),
])
async def test_unreachable_backend_is_transport_error(client_with, failure):
    client, _ = client_with(failure)
    with pytest.raises(TransportError):
        await client.generate(GenerationRequest(prompt="hi"))


@pytest.mark.asyncio
@pytest.mark.parametrize("failure, status", [
    (api_exceptions.InvalidArgument("bad schema"), 400),
    (api_exceptions.PermissionDenied("no access"), 403),
    (api_exceptions.TooManyRequests("quota"), 429),
])
async def test_rejected_call_is_upstream_error(client_with, failure, status):
    client, _ = client_with(failure)
    with pytest.raises(UpstreamError) as excinfo:
        await client.generate(GenerationRequest(prompt="hi"))
    assert excinfo.value.status_code == status


@pytest.mark.asyncio
@pytest.mark.parametrize("text", ["", "   \n", ValueError("blocked by safety filters")])
async def test_empty_text_is_empty_response_error(client_with, text):
    client, _ = client_with(text)
    with pytest.raises(EmptyResponseError):
        await client.generate(GenerationRequest(prompt="hi"))


@pytest.mark.asyncio
async def test_structured_call_uses_request_schema(client_with):
    client, model = client_with("[]")
    request = GenerationRequest(prompt="find hospitals", schema=FACILITY_LIST_SCHEMA)

    assert await client.generate_structured(request) == "[]"
    assert len(model.calls) == 1


@pytest.mark.asyncio
async def test_structured_call_without_schema_is_rejected(client_with):
    client, model = client_with("{}")
    with pytest.raises(ValueError):
        await client.generate_structured(GenerationRequest(prompt="hi"))
    assert model.calls == []


@pytest.mark.asyncio
async def test_model_construction_failure_is_transport_error(monkeypatch):
    client = GeminiClient(model_name="gemini-test")
    client._initialized = True

    def no_credentials(system_instruction):
        raise auth_exceptions.DefaultCredentialsError("no application default credentials")

    monkeypatch.setattr(client, "_build_model", no_credentials)

    with pytest.raises(TransportError):
        await client.generate(GenerationRequest(prompt="hi"))
