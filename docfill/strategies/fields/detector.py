"""Pattern-based field detector.

Scans plain document text against the ordered pattern rule library and
emits one positional FieldDescriptor per match.
"""

import logging
from typing import Iterable

from docfill.interfaces.fields import BaseFieldDetector
from docfill.strategies.fields.models import FieldDescriptor, FieldPosition
from docfill.strategies.fields.patterns import (
    DEFAULT_PATTERN_RULES,
    PatternRule,
    compile_rules,
)

logger = logging.getLogger(__name__)


class PatternFieldDetector(BaseFieldDetector):
    """Detects blank-fill fields ("Email: ____") by regex family.

    Overlapping matches from different rules are all reported; the detector
    never merges or deduplicates them. Every match is marked required.
    """

    def __init__(self, rules: Iterable[PatternRule] = DEFAULT_PATTERN_RULES) -> None:
        """Initialize the detector.

        Args:
            rules: Ordered rule table. Compiled once, here.

        Raises:
            ValueError: If the rule table is empty or holds an invalid pattern.
        """
        self._rules = compile_rules(rules)
        logger.debug(f"PatternFieldDetector initialized: rules={len(self._rules)}")

    def detect(self, text: str) -> list[FieldDescriptor]:
        """Detect fields in ``text``.

        Args:
            text: The buffer to scan. Returned spans index into it.

        Returns:
            Descriptors in rule order, then left-to-right match order.
        """
        fields: list[FieldDescriptor] = []
        if not text or not text.strip():
            return fields

        for rule, regex in self._rules:
            for match in regex.finditer(text):
                fields.append(
                    FieldDescriptor(
                        name=rule.name,
                        type=rule.type,
                        description=rule.description,
                        required=True,
                        position=FieldPosition(start=match.start(), end=match.end()),
                    )
                )

        logger.debug(f"Detected {len(fields)} fields in {len(text)} characters")
        return fields

    @property
    def rules(self) -> list[PatternRule]:
        """Return the rule table in evaluation order."""
        return [rule for rule, _ in self._rules]


_default_detector: PatternFieldDetector | None = None


def detect(text: str) -> list[FieldDescriptor]:
    """Detect fields in ``text`` with the default rule library."""
    global _default_detector
    if _default_detector is None:
        _default_detector = PatternFieldDetector()
    return _default_detector.detect(text)
