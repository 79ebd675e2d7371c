"""Data models for the prompt form."""

from promptengineer.schemas.fields import (
    FIELD_NAMES,
    ExpertiseLevel,
    FieldSet,
    OutputFormat,
)

__all__ = ["FIELD_NAMES", "ExpertiseLevel", "FieldSet", "OutputFormat"]
