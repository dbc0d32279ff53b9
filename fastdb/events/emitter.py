# ==============================================
# EventEmitter
# ==============================================
#
# PURPOSE:
#   Push-style output channel of a Database. Observers register
#   callbacks per event kind; the store emits inline, before the
#   operation that triggered the event returns.
#
# EVENTS:
# -------
#   Event.CONNECTED     payload: ConnectedInfo    (first load)
#   Event.NEW_DATA      payload: dict             (inserted record)
#   Event.DATA_DELETED  payload: DeletionInfo     (delete / delete_all)
#   Event.ERROR         payload: Exception        (caught failure)
#
# DELIVERY:
# ---------
#   - Synchronous, in registration order.
#   - A listener that raises is NOT isolated here: the exception
#     propagates to whoever called emit(). The Database's own
#     try/except boundary decides what happens next.
#   - ERROR with no listener registered is logged instead of
#     being dropped silently.
#
# ==============================================

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union


logger = logging.getLogger(__name__)


class Event(Enum):
    """Event kinds emitted by a Database."""
    CONNECTED = "connected"
    NEW_DATA = "new_data"
    DATA_DELETED = "data_deleted"
    ERROR = "error"


@dataclass(frozen=True)
class ConnectedInfo:
    """Payload of Event.CONNECTED."""
    path: str

    def to_dict(self) -> Dict[str, Any]:
        return {"path": self.path}


@dataclass(frozen=True)
class DeletionInfo:
    """Payload of Event.DATA_DELETED."""
    original_length: int
    actual_length: int
    completed: bool = True

    @property
    def deleted_count(self) -> int:
        return self.original_length - self.actual_length

    def to_dict(self) -> Dict[str, Any]:
        return {
            "original_length": self.original_length,
            "actual_length": self.actual_length,
            "completed": self.completed
        }


Listener = Callable[[Any], Any]
EventName = Union[Event, str]


class _Registration:
    __slots__ = ("listener", "once")

    def __init__(self, listener: Listener, once: bool):
        self.listener = listener
        self.once = once


class EventEmitter:
    """Minimal synchronous publish/subscribe."""

    def __init__(self):
        self._listeners: Dict[Event, List[_Registration]] = {}

    @staticmethod
    def _coerce(event: EventName) -> Event:
        if isinstance(event, Event):
            return event
        try:
            return Event(event)
        except ValueError:
            raise ValueError(f"Unknown event: {event!r}") from None

    def _add(self, event: EventName, listener: Listener, once: bool):
        if not callable(listener):
            raise TypeError("listener must be callable")
        self._listeners.setdefault(self._coerce(event), []).append(
            _Registration(listener, once)
        )
        return self

    def on(self, event: EventName, listener: Listener):
        """
        Register a listener called on every emission of event.

        Returns:
            self, so registrations can be chained
        """
        return self._add(event, listener, once=False)

    def once(self, event: EventName, listener: Listener):
        """Register a listener removed after its first call."""
        return self._add(event, listener, once=True)

    def off(self, event: EventName, listener: Listener):
        """Remove the first registration of listener for event."""
        registrations = self._listeners.get(self._coerce(event), [])
        for index, registration in enumerate(registrations):
            if registration.listener == listener:
                del registrations[index]
                break
        return self

    def remove_all_listeners(self, event: Optional[EventName] = None):
        if event is None:
            self._listeners.clear()
        else:
            self._listeners.pop(self._coerce(event), None)
        return self

    def listener_count(self, event: EventName) -> int:
        return len(self._listeners.get(self._coerce(event), []))

    def emit(self, event: EventName, payload: Any = None) -> bool:
        """
        Call every listener of event with payload.

        Args:
            event: Event kind (enum or its string value)
            payload: Object handed to each listener

        Returns:
            True if at least one listener was called
        """
        event = self._coerce(event)
        registrations = self._listeners.get(event)

        if not registrations:
            if event is Event.ERROR:
                logger.error("Unhandled fastdb error event: %r", payload)
            return False

        # Snapshot: listeners added during emission run next time
        for registration in list(registrations):
            if registration.once:
                try:
                    registrations.remove(registration)
                except ValueError:
                    continue
            registration.listener(payload)

        return True
