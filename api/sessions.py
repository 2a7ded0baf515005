"""In-process edit sessions, one per event."""

from typing import Dict, Optional

from teesheet.context import EventContext
from teesheet.editor import EditSession


class SessionEntry:
    """An open edit session and the event data it was opened with."""

    def __init__(self, session: EditSession, context: EventContext):
        self.session = session
        self.context = context


class SessionStore:
    """Open sessions keyed by event id. Opening again replaces the previous session."""

    def __init__(self):
        self._entries: Dict[str, SessionEntry] = {}

    def open(self, event_id: str, session: EditSession, context: EventContext) -> SessionEntry:
        entry = SessionEntry(session, context)
        self._entries[event_id] = entry
        return entry

    def get(self, event_id: str) -> Optional[SessionEntry]:
        return self._entries.get(event_id)

    def close(self, event_id: str) -> bool:
        return self._entries.pop(event_id, None) is not None
