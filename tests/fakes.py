"""Fakes for the Gemini client and the alert dispatcher."""

from ashwini.models.schemas import DispatchResult


class FakeGenerationClient:
    """Stands in for GeminiClient.

    Each call consumes the next outcome: a string is returned as the raw
    model text, an exception instance is raised.
    """

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.requests = []

    async def _next(self, request):
        self.requests.append(request)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    async def generate(self, request):
        return await self._next(request)

    async def generate_structured(self, request, schema=None):
        return await self._next(request)


class FakeDispatcher:
    def __init__(self, result=None):
        self.result = result or DispatchResult(success=True)
        self.messages = []

    async def dispatch_to_emergency_contact(self, message):
        self.messages.append(message)
        return self.result


