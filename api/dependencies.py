from fastapi import Header, HTTPException, Request

from api.sessions import SessionStore
from database.db_manager import DatabaseManager
from teesheet.saver import TeeSheetSaver


def get_db(request: Request) -> DatabaseManager:
    """FastAPI dependency that provides the DatabaseManager."""
    return request.app.state.db_manager


def get_sessions(request: Request) -> SessionStore:
    return request.app.state.sessions


def get_saver(request: Request) -> TeeSheetSaver:
    return request.app.state.saver


def require_manager(x_can_manage_tee_sheet: bool = Header(False)) -> None:
    """Capability gate for routes that change a tee sheet."""
    if not x_can_manage_tee_sheet:
        raise HTTPException(403, "Only Captain or Handicapper can modify tee sheets.")
