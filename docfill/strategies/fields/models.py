"""Field domain models.

Pydantic models shared by the detector, the rewriter and the analysis
boundary. These live here to avoid circular imports with the API layer.
"""

import enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def placeholder_for(name: str) -> str:
    """Return the placeholder token for a field name."""
    return f"[[{name.upper()}]]"


class FieldType(str, enum.Enum):
    """Closed set of fillable field types."""

    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    EMAIL = "email"
    PHONE = "phone"
    ADDRESS = "address"
    CHECKBOX = "checkbox"


class FieldPosition(BaseModel):
    """Half-open character span into the buffer a field was detected in."""

    model_config = ConfigDict(frozen=True)

    start: int = Field(ge=0, description="Offset of the first matched character")
    end: int = Field(ge=0, description="Offset one past the last matched character")

    @model_validator(mode="after")
    def check_order(self) -> "FieldPosition":
        if self.start > self.end:
            raise ValueError(f"start ({self.start}) must not exceed end ({self.end})")
        return self

    @property
    def length(self) -> int:
        return self.end - self.start


class FieldDescriptor(BaseModel):
    """A detected or declared fillable location in a document.

    The placeholder is always derived from ``name``; a value supplied by the
    caller is replaced so that two descriptors with the same name always
    share the same token.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="Stable lowercase identifier")
    type: FieldType = Field(description="Kind of value the field expects")
    description: str = Field(default="", description="What the field is for")
    placeholder: str = Field(default="", description="Replacement token, e.g. [[EMAIL]]")
    required: bool = Field(default=False, description="Informational presence flag")
    position: FieldPosition | None = Field(
        default=None, description="Span in the scanned text, if positionally detected"
    )

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        """Strip and lower-case the field name."""
        v = v.strip().lower()
        if not v:
            raise ValueError("name must not be blank")
        return v

    @model_validator(mode="before")
    @classmethod
    def derive_placeholder(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("name"), str):
            data = {**data, "placeholder": placeholder_for(data["name"].strip().lower())}
        return data

    @property
    def is_positional(self) -> bool:
        """Whether the descriptor carries a span into the scanned text."""
        return self.position is not None

    def without_position(self) -> "FieldDescriptor":
        """Return a copy of this descriptor with no positional grounding."""
        return self.model_copy(update={"position": None})
