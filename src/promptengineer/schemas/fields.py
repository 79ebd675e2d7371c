"""Schema for the prompt form fields."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator


class OutputFormat(str, Enum):
    """Output formats offered by the form."""

    BULLET_POINTS = "bullet-points"
    PARAGRAPH = "paragraph"
    STEP_BY_STEP = "step-by-step"
    CODE_SNIPPET = "code-snippet"

    @property
    def label(self) -> str:
        return {
            OutputFormat.BULLET_POINTS: "Bullet Points",
            OutputFormat.PARAGRAPH: "Paragraph",
            OutputFormat.STEP_BY_STEP: "Step-by-Step Guide",
            OutputFormat.CODE_SNIPPET: "Code Snippet",
        }[self]


class ExpertiseLevel(str, Enum):
    """Expertise levels offered by the form."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"

    @property
    def label(self) -> str:
        return self.value.title()


def normalize_field_value(v: Any) -> str:
    """Turn a field value into its stored text; None becomes empty, enums their value."""
    if v is None:
        return ""
    if isinstance(v, Enum):
        return str(v.value)
    return str(v)


class FieldSet(BaseModel):
    """
    The seven user-editable inputs describing the desired prompt.

    Any string is accepted for every field. The option sets for
    ``output_format`` and ``expertise_level`` are enforced by the input
    surface, not here.
    """

    prompt: str = Field(
        default="",
        description="Main question or request for the AI (required to generate)",
    )
    role: str = Field(
        default="",
        description="Role the AI should assume (e.g., 'Teacher', 'Scientist', 'Historian')",
    )
    topic: str = Field(
        default="",
        description="Subject area (e.g., 'Biology', 'Computer Science', 'History')",
    )
    goal: str = Field(
        default="",
        description="What the user wants to achieve (e.g., 'Understand basics', 'Solve a problem')",
    )
    output_format: str = Field(
        default="",
        description="Desired structure of the answer (bullet-points, paragraph, step-by-step, code-snippet)",
    )
    expertise_level: str = Field(
        default="",
        description="Knowledge level of the audience (beginner, intermediate, advanced, expert)",
    )
    details: str = Field(
        default="",
        description="Specific areas of interest or constraints",
    )

    @field_validator("*", mode="before")
    @classmethod
    def normalize_text(cls, v: Any) -> str:
        """Normalize field values to strings; None becomes empty."""
        return normalize_field_value(v)

    def has_prompt(self) -> bool:
        """Check whether the required prompt field is filled in."""
        return bool(self.prompt)


FIELD_NAMES: tuple[str, ...] = tuple(FieldSet.model_fields)
