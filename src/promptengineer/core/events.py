"""Event type definitions for the Event Bus."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class FieldChangedEvent:
    """Event emitted when a form field is edited."""
    name: str
    value: str


@dataclass
class GenerationStartedEvent:
    """Event emitted when a generation request is sent."""
    model: str


@dataclass
class GenerationFinishedEvent:
    """Event emitted when a generation attempt completes, successfully or not."""
    success: bool
    result: str
    error: Optional[str] = None
