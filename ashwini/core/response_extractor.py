"""
Response Extractor

Recovers a structured JSON value from raw Gemini text.  The model sometimes
wraps JSON in markdown fences even when told not to, so exactly three shapes
are tolerated:

1. a ```json fenced block  -> text between the marker and the next fence
2. any ``` fenced block     -> text between the first pair of fences
3. no fence                 -> the full text

Anything after the first closing fence is discarded.  No other repair
(bracket balancing, trailing-comma removal, ...) is attempted.
"""

import json
import logging
from typing import Any

from ashwini.errors import MalformedOutputError

logger = logging.getLogger(__name__)

_JSON_FENCE = "```json"
_FENCE = "```"


def select_payload(raw_text: str) -> str:
    """Return the candidate JSON substring of *raw_text*, whitespace-stripped."""
    if _JSON_FENCE in raw_text:
        payload = raw_text.split(_JSON_FENCE, 1)[1].split(_FENCE, 1)[0]
    elif _FENCE in raw_text:
        payload = raw_text.split(_FENCE)[1]
    else:
        payload = raw_text
    return payload.strip()


def extract(raw_text: str) -> Any:
    """Parse *raw_text* into a JSON value.

    Raises:
        MalformedOutputError: if the selected substring is not valid JSON.
    """
    payload = select_payload(raw_text)
    try:
        value = json.loads(payload)
    except json.JSONDecodeError as exc:
        logger.error("Model output is not valid JSON: %s", exc)
        logger.debug("Raw output: %s", raw_text[:500])
        raise MalformedOutputError(
            f"Model output could not be parsed as JSON: {exc}",
            raw_text=raw_text,
        ) from exc
    return value
