"""Field engine strategies.

Implements blank-fill field detection, model reply parsing and placeholder
substitution.
"""

from docfill.strategies.fields.analysis_parser import parse_analysis_response
from docfill.strategies.fields.detector import PatternFieldDetector, detect
from docfill.strategies.fields.models import (
    FieldDescriptor,
    FieldPosition,
    FieldType,
    placeholder_for,
)
from docfill.strategies.fields.patterns import DEFAULT_PATTERN_RULES, PatternRule
from docfill.strategies.fields.rewriter import PlaceholderRewriter, rewrite

__all__ = [
    "DEFAULT_PATTERN_RULES",
    "FieldDescriptor",
    "FieldPosition",
    "FieldType",
    "PatternFieldDetector",
    "PatternRule",
    "PlaceholderRewriter",
    "detect",
    "parse_analysis_response",
    "placeholder_for",
    "rewrite",
]
