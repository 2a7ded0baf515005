from typing import Dict, Optional, Protocol

from models import Event, TeeSheetMetadata, TeeSheetPayload


class TeeSheetStore(Protocol):
    """Interface for the persistence collaborator.

    Any class with matching method signatures satisfies this protocol.
    """

    async def save_tee_sheet(
        self, event_id: str, tee_sheet: TeeSheetPayload, metadata: TeeSheetMetadata
    ) -> None:
        """Write the tee sheet and its metadata onto the event. Raises on failure."""
        ...

    async def load_event(self, event_id: str) -> Optional[Event]:
        """Read the event back, including its tee sheet."""
        ...


class InMemoryTeeSheetStore:
    """Keeps events in a dict. Used for local runs and tests."""

    def __init__(self, events: Optional[Dict[str, Event]] = None):
        self._events: Dict[str, Event] = dict(events or {})

    def add_event(self, event: Event) -> None:
        self._events[event.id] = event

    async def save_tee_sheet(
        self, event_id: str, tee_sheet: TeeSheetPayload, metadata: TeeSheetMetadata
    ) -> None:
        event = self._events.get(event_id) or Event(id=event_id)
        self._events[event_id] = event.model_copy(
            update={"tee_sheet": tee_sheet.snapshot(), **metadata.model_dump()}
        )

    async def load_event(self, event_id: str) -> Optional[Event]:
        event = self._events.get(event_id)
        return event.snapshot() if event else None
