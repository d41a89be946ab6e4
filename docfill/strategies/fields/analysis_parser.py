"""Parsing of model field-analysis replies.

The model is asked to answer with ``{"fields": [...]}``. Its reply is free
text, so every reply is validated before any field is handed back.
"""

import json
import logging
from typing import Any

from pydantic import ValidationError

from docfill.interfaces.fields import AnalysisParseError
from docfill.strategies.fields.models import FieldDescriptor

logger = logging.getLogger(__name__)


def _strip_code_fence(content: str) -> str:
    """Remove a surrounding Markdown code fence, if any."""
    if not content.startswith("```"):
        return content
    body = content[3:]
    if body.lower().startswith("json"):
        body = body[4:]
    fence_end = body.rfind("```")
    if fence_end >= 0:
        body = body[:fence_end]
    return body.strip()


def parse_analysis_response(raw: str) -> list[FieldDescriptor]:
    """Parse a model reply into field descriptors.

    Args:
        raw: The reply text returned by the model.

    Returns:
        Descriptors in reply order, without positions.

    Raises:
        AnalysisParseError: If the reply is not JSON, has no ``fields`` list,
            or any entry is not a valid field.
    """
    if raw is None:
        raise AnalysisParseError("Analysis reply is empty")

    content = _strip_code_fence(raw.strip())
    if not content:
        raise AnalysisParseError("Analysis reply is empty")

    try:
        data: Any = json.loads(content)
    except json.JSONDecodeError as e:
        raise AnalysisParseError(f"Analysis reply is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise AnalysisParseError("Analysis reply must be a JSON object")
    if "fields" not in data:
        raise AnalysisParseError("Analysis reply is missing 'fields'")

    entries = data["fields"]
    if not isinstance(entries, list):
        raise AnalysisParseError("'fields' must be an array")

    fields: list[FieldDescriptor] = []
    for idx, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise AnalysisParseError(f"Field {idx} must be an object")
        # Model replies carry no positional grounding
        entry = {key: value for key, value in entry.items() if key != "position"}
        try:
            fields.append(FieldDescriptor.model_validate(entry))
        except ValidationError as e:
            raise AnalysisParseError(f"Field {idx} is invalid: {e}") from e

    logger.debug(f"Parsed {len(fields)} fields from analysis reply")
    return fields
