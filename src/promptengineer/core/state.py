"""Form state for a single prompt-generation session."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from promptengineer.core.errors import FailureKind
from promptengineer.core.event_bus import EVENT_FIELD_CHANGED, EventBus
from promptengineer.core.events import FieldChangedEvent
from promptengineer.schemas.fields import FIELD_NAMES, FieldSet, normalize_field_value

logger = logging.getLogger(__name__)


@dataclass
class GenerationOutcome:
    """Diagnostic record of one generation attempt."""

    success: bool
    text: str
    failure_kind: Optional[FailureKind] = None
    error: Optional[str] = None
    latency_ms: Optional[float] = None
    tokens_input: Optional[int] = None
    tokens_output: Optional[int] = None

    def stats(self) -> dict[str, Any]:
        """Non-empty diagnostics, for display."""
        data: dict[str, Any] = {"status": "success" if self.success else "failed"}
        if self.failure_kind is not None:
            data["failure_kind"] = self.failure_kind.value
        if self.latency_ms is not None:
            data["latency_ms"] = round(self.latency_ms, 1)
        if self.tokens_input is not None:
            data["tokens_input"] = self.tokens_input
        if self.tokens_output is not None:
            data["tokens_output"] = self.tokens_output
        return data


def _field_property(name: str) -> property:
    def getter(self: FormState) -> str:
        return self.get_field(name)

    def setter(self: FormState, value: str) -> None:
        self.set_field(name, value)

    return property(getter, setter, doc=f"Current value of the '{name}' field.")


class FormState:
    """
    Holds the form fields, the last generated result and the in-flight flag.

    Fields accept any string. Nothing here validates option sets or
    relationships between fields.
    """

    prompt = _field_property("prompt")
    role = _field_property("role")
    topic = _field_property("topic")
    goal = _field_property("goal")
    output_format = _field_property("output_format")
    expertise_level = _field_property("expertise_level")
    details = _field_property("details")

    def __init__(self, event_bus: Optional[EventBus] = None, **values: Any):
        """
        Initialize form state.

        Args:
            event_bus: Bus to announce field edits on (a private one if omitted)
            **values: Initial field values
        """
        self.event_bus = event_bus or EventBus()
        self._values: dict[str, str] = FieldSet(**values).model_dump()
        self.generated_prompt: str = ""
        self.is_loading: bool = False
        self.last_outcome: Optional[GenerationOutcome] = None

    def get_field(self, name: str) -> str:
        """Return the current value of a field."""
        if name not in FIELD_NAMES:
            raise KeyError(f"Unknown field: {name}")
        return self._values[name]

    def set_field(self, name: str, value: Optional[str]) -> None:
        """
        Store a new value for a field and announce the change.

        Raises:
            KeyError: If the field name is unknown
        """
        if name not in FIELD_NAMES:
            raise KeyError(f"Unknown field: {name}")
        value = normalize_field_value(value)
        self._values[name] = value
        self.event_bus.publish(EVENT_FIELD_CHANGED, FieldChangedEvent(name=name, value=value))

    def update(self, **values: Optional[str]) -> None:
        """Set several fields at once."""
        for name, value in values.items():
            self.set_field(name, value)

    @property
    def fields(self) -> FieldSet:
        """Snapshot of the current field values."""
        return FieldSet(**self._values)

    @property
    def can_generate(self) -> bool:
        """True when the prompt is filled in and no request is outstanding."""
        return bool(self._values["prompt"]) and not self.is_loading

    def reset(self) -> None:
        """Clear all fields and the generated result."""
        for name in FIELD_NAMES:
            self.set_field(name, "")
        self.generated_prompt = ""
        self.last_outcome = None
        logger.debug("Form state reset")
