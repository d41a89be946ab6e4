"""Placeholder rewriter.

Replaces field occurrences in plain text or markup with ``[[NAME]]`` tokens.

Two modes, picked per descriptor:

* Positional: descriptors carrying a span are applied from the end of the
  buffer backwards so earlier offsets stay valid. A span reaching into a
  region an already-applied replacement consumed is skipped.
* Name-matching: descriptors without a span run three global passes each
  (whole-word name, underscore runs, dot leaders) in caller order. Generic
  passes of an early field consume blanks a later field might have matched.
"""

import logging
import re
from typing import Sequence

from docfill.interfaces.fields import BasePlaceholderRewriter, SpanOutOfRangeError
from docfill.strategies.fields.models import FieldDescriptor

logger = logging.getLogger(__name__)

UNDERSCORE_RUN = re.compile(r"_+")
DOT_LEADER = re.compile(r"\.{3,}")
PLACEHOLDER_TOKEN = re.compile(r"\[\[[^\[\]]+\]\]")


class PlaceholderRewriter(BasePlaceholderRewriter):
    """Rewrites content by substituting fields with their placeholders."""

    def rewrite(self, content: str, fields: Sequence[FieldDescriptor]) -> str:
        """Rewrite ``content`` with the given fields.

        Positional descriptors are applied first, against the buffer their
        spans were computed from; name-only descriptors follow in the order
        given.

        Args:
            content: Text or markup to rewrite.
            fields: Descriptors to substitute.

        Returns:
            A new string. ``content`` is returned as-is when ``fields`` is empty.

        Raises:
            SpanOutOfRangeError: If a positional span ends past ``content``.
        """
        if not fields:
            return content

        positional = [f for f in fields if f.is_positional]
        by_name = [f for f in fields if not f.is_positional]

        result = content
        if positional:
            result = self._rewrite_positional(result, positional)
        if by_name:
            result = self._rewrite_by_name(result, by_name)
        return result

    def _rewrite_positional(
        self, content: str, fields: list[FieldDescriptor]
    ) -> str:
        length = len(content)
        for field in fields:
            if field.position.end > length:
                raise SpanOutOfRangeError(
                    f"Span {field.position.start}:{field.position.end} of field "
                    f"'{field.name}' is out of range for content of length {length}"
                )

        # sorted() is stable: equal starts keep caller order, first one wins.
        ordered = sorted(fields, key=lambda f: f.position.start, reverse=True)

        result = content
        floor = length
        applied = 0
        for field in ordered:
            start, end = field.position.start, field.position.end
            if end > floor:
                logger.debug(
                    f"Skipping field '{field.name}' at {start}:{end}: "
                    f"overlaps replacement starting at {floor}"
                )
                continue
            result = result[:start] + field.placeholder + result[end:]
            floor = start
            applied += 1

        logger.debug(f"Applied {applied}/{len(fields)} positional replacements")
        return result

    def _rewrite_by_name(
        self, content: str, fields: list[FieldDescriptor]
    ) -> str:
        result = content
        for field in fields:
            name_pattern = re.compile(rf"\b{re.escape(field.name)}\b", re.IGNORECASE)
            for pattern in (name_pattern, UNDERSCORE_RUN, DOT_LEADER):
                result = _substitute_outside_tokens(pattern, field.placeholder, result)
        return result


def _substitute_outside_tokens(
    pattern: re.Pattern[str], placeholder: str, content: str
) -> str:
    """Replace every match of ``pattern`` except inside existing placeholder tokens."""
    pieces: list[str] = []
    cursor = 0
    for token in PLACEHOLDER_TOKEN.finditer(content):
        pieces.append(pattern.sub(lambda _: placeholder, content[cursor:token.start()]))
        pieces.append(token.group(0))
        cursor = token.end()
    pieces.append(pattern.sub(lambda _: placeholder, content[cursor:]))
    return "".join(pieces)


_default_rewriter = PlaceholderRewriter()


def rewrite(content: str, fields: Sequence[FieldDescriptor]) -> str:
    """Rewrite ``content`` with the default rewriter."""
    return _default_rewriter.rewrite(content, fields)
