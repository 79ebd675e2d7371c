"""Event Bus for decoupled communication between the form and its views."""

import logging
from collections import defaultdict
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

# Event type constants
EVENT_FIELD_CHANGED = "field_changed"
EVENT_GENERATION_STARTED = "generation_started"
EVENT_GENERATION_FINISHED = "generation_finished"


class EventBus:
    """Pub/Sub event bus, one per form session."""

    def __init__(self, max_log_size: int = 100):
        """Initialize the event bus."""
        self._subscribers: dict[str, list[Callable[[Any], None]]] = defaultdict(list)
        self._event_log: list[tuple[str, Any]] = []
        self._max_log_size = max_log_size

    def subscribe(self, event_type: str, callback: Callable[[Any], None]) -> Callable[[], None]:
        """
        Subscribe to an event type.

        Args:
            event_type: Event type constant (e.g., EVENT_FIELD_CHANGED)
            callback: Callback function that receives event payload

        Returns:
            Unsubscribe function
        """
        self._subscribers[event_type].append(callback)
        logger.debug(f"Subscribed to {event_type}")

        def unsubscribe():
            if callback in self._subscribers[event_type]:
                self._subscribers[event_type].remove(callback)
                logger.debug(f"Unsubscribed from {event_type}")

        return unsubscribe

    def publish(self, event_type: str, payload: Any) -> None:
        """
        Publish an event to all subscribers.

        A failing subscriber is logged and does not stop delivery to the rest.

        Args:
            event_type: Event type constant
            payload: Event payload (one of the dataclasses in events.py)
        """
        self._event_log.append((event_type, payload))
        if len(self._event_log) > self._max_log_size:
            self._event_log.pop(0)

        subscribers = self._subscribers.get(event_type)
        if not subscribers:
            return

        for callback in list(subscribers):
            try:
                callback(payload)
            except Exception as e:
                logger.error(f"Error in subscriber callback for {event_type}: {e}", exc_info=True)

    def get_event_log(self, event_type: Optional[str] = None) -> list[tuple[str, Any]]:
        """
        Get event log for debugging.

        Args:
            event_type: Optional filter by event type

        Returns:
            List of (event_type, payload) tuples
        """
        if event_type:
            return [(et, payload) for et, payload in self._event_log if et == event_type]
        return list(self._event_log)
