"""
Caller-side validation of extracted results.

Walks an extracted JSON value against its output schema and reports every
missing required field or shape mismatch as a ValidationGap.  Gaps are
logged, never raised: callers render whatever partial data is present.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from ashwini.core.output_schema import ArrayNode, ObjectNode, SchemaNode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationGap:
    """A required field that is missing, or a value with the wrong shape."""

    path: str
    message: str


def find_validation_gaps(
    schema: SchemaNode,
    value: Any,
    path: str = "$",
) -> list[ValidationGap]:
    """Return the gaps between *value* and *schema* (empty when complete)."""
    gaps: list[ValidationGap] = []

    if isinstance(schema, ObjectNode):
        if not isinstance(value, dict):
            return [ValidationGap(path, "expected an object")]
        for name in schema.required:
            if value.get(name) is None:
                gaps.append(ValidationGap(f"{path}.{name}", "required field missing"))
        for name, child in schema.fields.items():
            if value.get(name) is not None:
                gaps.extend(find_validation_gaps(child, value[name], f"{path}.{name}"))

    elif isinstance(schema, ArrayNode):
        if not isinstance(value, list):
            return [ValidationGap(path, "expected an array")]
        for i, item in enumerate(value):
            gaps.extend(find_validation_gaps(schema.items, item, f"{path}[{i}]"))

    return gaps


def log_validation_gaps(domain: str, gaps: list[ValidationGap]) -> None:
    """Emit one warning per gap, tagged with the domain that produced it."""
    for gap in gaps:
        logger.warning("Validation gap in %s result: %s (%s)", domain, gap.path, gap.message)
