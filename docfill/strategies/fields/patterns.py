"""Pattern rule library for blank-fill field detection.

Each rule pairs a case-insensitive regex (a label followed by a run of
underscores) with the identity of the field it detects. Rule order is part
of the detector's output contract: all matches of an earlier rule are
emitted before any match of a later one.
"""

import re
from dataclasses import dataclass
from typing import Iterable

from docfill.strategies.fields.models import FieldType


@dataclass(frozen=True)
class PatternRule:
    """A declarative field detection rule.

    Attributes:
        pattern: Regex source, compiled case-insensitively.
        type: Field type assigned to every match.
        name: Canonical field name assigned to every match.
        description: Human-readable purpose of the field.
    """

    pattern: str
    type: FieldType
    name: str
    description: str

    def compile(self) -> re.Pattern[str]:
        """Compile the rule's regex.

        Raises:
            ValueError: If the pattern is not a valid regular expression.
        """
        try:
            return re.compile(self.pattern, re.IGNORECASE)
        except re.error as e:
            raise ValueError(f"Invalid pattern for rule '{self.name}': {e}") from e


# Generic rules intentionally overlap more specific ones ("name" also matches
# inside "first name"). Callers resolve the overlap, not the library.
DEFAULT_PATTERN_RULES: tuple[PatternRule, ...] = (
    PatternRule(
        pattern=r"name\s*:?\s*_+|full\s*name\s*:?\s*_+",
        type=FieldType.TEXT,
        name="full_name",
        description="Full name of the person",
    ),
    PatternRule(
        pattern=r"first\s*name\s*:?\s*_+",
        type=FieldType.TEXT,
        name="first_name",
        description="First name",
    ),
    PatternRule(
        pattern=r"last\s*name\s*:?\s*_+",
        type=FieldType.TEXT,
        name="last_name",
        description="Last name",
    ),
    PatternRule(
        pattern=r"email\s*:?\s*_+|e-mail\s*:?\s*_+",
        type=FieldType.EMAIL,
        name="email",
        description="Email address",
    ),
    PatternRule(
        pattern=r"phone\s*:?\s*_+|telephone\s*:?\s*_+",
        type=FieldType.PHONE,
        name="phone",
        description="Phone number",
    ),
    PatternRule(
        pattern=r"date\s*:?\s*_+|date\s*of\s*birth\s*:?\s*_+",
        type=FieldType.DATE,
        name="date",
        description="Date field",
    ),
    PatternRule(
        pattern=r"address\s*:?\s*_+",
        type=FieldType.ADDRESS,
        name="address",
        description="Street address",
    ),
    PatternRule(
        pattern=r"signature\s*:?\s*_+",
        type=FieldType.TEXT,
        name="signature",
        description="Signature field",
    ),
)


def compile_rules(
    rules: Iterable[PatternRule],
) -> list[tuple[PatternRule, re.Pattern[str]]]:
    """Compile a rule table, preserving order.

    Raises:
        ValueError: If any rule has an invalid pattern or the table is empty.
    """
    compiled = [(rule, rule.compile()) for rule in rules]
    if not compiled:
        raise ValueError("Pattern rule table must contain at least one rule")
    return compiled
