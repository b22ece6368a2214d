"""
Gemini Client

Wrapper for Vertex AI Gemini API calls.
Handles initialization, multimodal request assembly, schema-constrained
generation and translation of SDK failures into the error taxonomy.
Provides a global singleton for use across the application.
"""

import json
import logging
import os
from typing import Any, Optional

from google.api_core import exceptions as api_exceptions
from google.auth import exceptions as auth_exceptions

from ashwini.config import settings
from ashwini.core.generation_request import Attachment, GenerationRequest
from ashwini.core.output_schema import SchemaNode
from ashwini.errors import EmptyResponseError, TransportError, UpstreamError

logger = logging.getLogger(__name__)

# SDK failures that mean the backend was never reached.  Credentials load
# lazily, so missing ADC or a failed token refresh surfaces here too.
_TRANSPORT_FAILURES = (
    ConnectionError,
    auth_exceptions.GoogleAuthError,
    api_exceptions.ServiceUnavailable,
    api_exceptions.DeadlineExceeded,
    api_exceptions.RetryError,
)


class GeminiClient:
    """Wrapper around the Vertex AI Gemini generative model.

    Initializes Vertex AI on construction.  If credentials are missing or
    the project is not configured, ``is_available`` returns False and every
    call fails with ``TransportError``.
    """

    def __init__(self, model_name: str | None = None) -> None:
        self.model_name = model_name or settings.GEMINI_MODEL
        self._initialized = False
        self._initialize()

    def _resolve_project(self) -> str | None:
        """Return the GCP project ID from settings or credentials file."""
        if settings.GOOGLE_CLOUD_PROJECT:
            return settings.GOOGLE_CLOUD_PROJECT
        # Fall back: read project_id from the service-account JSON
        creds_path = os.environ.get("GOOGLE_APPLICATION_CREDENTIALS", "")
        if creds_path and os.path.isfile(creds_path):
            with open(creds_path) as f:
                return json.load(f).get("project_id")
        return None

    def _initialize(self) -> None:
        """Attempt to initialise the Vertex AI SDK."""
        project = self._resolve_project()
        if not project:
            logger.warning("GCP project not found - Gemini calls will fail")
            return

        try:
            import vertexai

            vertexai.init(
                project=project,
                location=settings.GOOGLE_CLOUD_LOCATION,
            )
            self._initialized = True
            logger.info("Gemini client initialized (model=%s)", self.model_name)
        except Exception as exc:
            logger.warning("Gemini initialization failed: %s", exc)
            self._initialized = False

    @property
    def is_available(self) -> bool:
        """Return True if Gemini is ready to accept requests."""
        return self._initialized

    def _build_model(self, system_instruction: Optional[str]) -> Any:
        from vertexai.generative_models import GenerativeModel

        return GenerativeModel(
            self.model_name,
            system_instruction=system_instruction,
        )

    @staticmethod
    def _parts(text: str, attachment: Optional[Attachment]) -> list:
        """Text first, then the attachment as a separate inline-data part."""
        from vertexai.generative_models import Part

        parts = [Part.from_text(text)]
        if attachment is not None:
            parts.append(
                Part.from_data(data=attachment.data, mime_type=attachment.mime_type)
            )
        return parts

    def _build_contents(self, request: GenerationRequest) -> list:
        """Prior turns in order, then the live user prompt."""
        from vertexai.generative_models import Content

        contents = [
            Content(role=turn.role, parts=self._parts(turn.content, turn.attachment))
            for turn in request.prior_turns
        ]
        contents.append(
            Content(role="user", parts=self._parts(request.prompt, request.attachment))
        )
        return contents

    async def _call(
        self,
        request: GenerationRequest,
        schema: Optional[SchemaNode],
    ) -> str:
        if not self._initialized:
            raise TransportError(
                "Gemini client is not configured - set GOOGLE_CLOUD_PROJECT "
                "or GOOGLE_APPLICATION_CREDENTIALS"
            )

        from vertexai.generative_models import GenerationConfig

        config_kwargs: dict[str, Any] = {"temperature": settings.GEMINI_TEMPERATURE}
        if schema is not None:
            config_kwargs["response_mime_type"] = "application/json"
            config_kwargs["response_schema"] = schema.to_vertex_schema()

        logger.info(
            "Gemini call: structured=%s, attachment=%s, prior_turns=%d",
            schema is not None,
            request.attachment is not None,
            len(request.prior_turns),
        )

        try:
            model = self._build_model(request.system_instruction)
            response = await model.generate_content_async(
                contents=self._build_contents(request),
                generation_config=GenerationConfig(**config_kwargs),
            )
        except _TRANSPORT_FAILURES as exc:
            raise TransportError(f"Could not reach Gemini: {exc}") from exc
        except api_exceptions.GoogleAPICallError as exc:
            raise UpstreamError(
                f"Gemini rejected the request: {exc}",
                status_code=exc.code,
            ) from exc

        # .text raises ValueError when the candidate carries no text part
        # (e.g. blocked by safety filters).
        try:
            text = response.text
        except ValueError:
            text = ""
        if not text or not text.strip():
            raise EmptyResponseError("Gemini returned an empty response")
        return text

    async def generate(self, request: GenerationRequest) -> str:
        """Generate free text for *request*.

        Raises:
            TransportError, UpstreamError, EmptyResponseError.
        """
        return await self._call(request, schema=None)

    async def generate_structured(
        self,
        request: GenerationRequest,
        schema: Optional[SchemaNode] = None,
    ) -> str:
        """Generate JSON text constrained by *schema* (defaults to the request's).

        Returns the raw text; use ``response_extractor.extract`` to parse it.
        """
        schema = schema if schema is not None else request.schema
        if schema is None:
            raise ValueError("generate_structured requires an output schema")
        return await self._call(request, schema=schema)


# ---------------------------------------------------------------------------
# Global singleton
# ---------------------------------------------------------------------------
gemini_client = GeminiClient()
