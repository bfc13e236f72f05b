"""Lineup session state and user-facing actions.

Holds the single in-memory session: the current lineup, the saved lineup
archive, the clipboard collaborator, and the timed status message. Each
action records a success or error status; errors are re-raised for the
router to translate.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional, Protocol

from ..config import builder_config
from ..errors import ClipboardError, LineupError, PersistenceError
from ..models.chemistry import ChemistryConnection
from ..models.lineup import Lineup, LineupPayload, SavedLineup, StatusMessage
from . import assignment_store as store
from .chemistry_engine import chemistry_connections, total_chemistry
from .chemistry_loader import get_matrix
from .lineup_archive import (
    JsonFileStore,
    LineupArchive,
    PersistencePort,
    export_payload,
    export_text,
    import_payload,
)

logger = logging.getLogger(__name__)


class ClipboardPort(Protocol):
    def write_text(self, text: str) -> None: ...


class ResponseClipboard:
    """Keeps the last copied text so the HTTP response can hand it over."""

    def __init__(self):
        self.text: Optional[str] = None

    def write_text(self, text: str) -> None:
        self.text = text


# ---------------------------------------------------------------------------
# Singleton session state
# ---------------------------------------------------------------------------
_lineup = Lineup()
_archive = LineupArchive(JsonFileStore(builder_config.archive_path))
_clipboard: ClipboardPort = ResponseClipboard()
_status: Optional[StatusMessage] = None

# Replaced in tests to control status expiry
_clock: Callable[[], float] = time.monotonic


def get_lineup() -> Lineup:
    return _lineup


def set_lineup(lineup: Lineup) -> Lineup:
    global _lineup
    _lineup = lineup
    return _lineup


def get_archive() -> LineupArchive:
    return _archive


def get_clipboard() -> ClipboardPort:
    return _clipboard


def configure(
    persistence: Optional[PersistencePort] = None,
    clipboard: Optional[ClipboardPort] = None,
) -> None:
    """Swap the persistence and clipboard collaborators."""
    global _archive, _clipboard
    if persistence is not None:
        _archive = LineupArchive(persistence)
    if clipboard is not None:
        _clipboard = clipboard


def reset_session() -> None:
    """Tear down session state (useful in tests)."""
    global _lineup, _status
    _lineup = Lineup()
    _status = None


def load_saved_lineups() -> int:
    """Read the archive from its store. Called on startup."""
    try:
        count = _archive.refresh()
    except PersistenceError as e:
        logger.error(f"Could not load saved lineups: {e}")
        return 0
    if count:
        logger.info(f"Loaded {count} saved lineups")
    return count


# ---------------------------------------------------------------------------
# Status messages
# ---------------------------------------------------------------------------

def set_status(kind: str, message: str) -> StatusMessage:
    global _status
    _status = StatusMessage(
        type=kind,
        message=message,
        expires_at=_clock() + builder_config.status_message_seconds,
    )
    return _status


def get_status() -> Optional[StatusMessage]:
    """Current status message, or None once it has expired."""
    global _status
    if _status is not None and _clock() >= _status.expires_at:
        _status = None
    return _status


def _fail(error: LineupError) -> None:
    set_status("error", str(error))
    logger.warning(f"{type(error).__name__}: {error}")


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------

def current_chemistry() -> int:
    return total_chemistry(_lineup.field, get_matrix().lookup)


def current_connections() -> list[ChemistryConnection]:
    return chemistry_connections(_lineup.field, get_matrix().lookup)


def available_players() -> list[str]:
    return store.compute_available(_lineup, get_matrix().players)


# ---------------------------------------------------------------------------
# Assignment actions
# ---------------------------------------------------------------------------

def place_in_field(
    player: str,
    slot: int,
    source_field_slot: Optional[int] = None,
    source_batting_slot: Optional[int] = None,
) -> Lineup:
    return set_lineup(store.place_in_field(_lineup, player, slot, source_field_slot, source_batting_slot))


def place_in_batting(
    player: str,
    slot: int,
    source_field_slot: Optional[int] = None,
    source_batting_slot: Optional[int] = None,
) -> Lineup:
    return set_lineup(store.place_in_batting(_lineup, player, slot, source_field_slot, source_batting_slot))


def remove_from_field(slot: int) -> Lineup:
    return set_lineup(store.remove_from_field(_lineup, slot))


def remove_from_batting(slot: int) -> Lineup:
    return set_lineup(store.remove_from_batting(_lineup, slot))


def clear_lineup() -> Lineup:
    return set_lineup(store.clear_all())


# ---------------------------------------------------------------------------
# Archive actions
# ---------------------------------------------------------------------------

def list_saved() -> tuple[SavedLineup, ...]:
    return _archive.saved


def save_lineup(name: str) -> SavedLineup:
    try:
        snapshot = _archive.save(name, _lineup, current_chemistry())
    except LineupError as e:
        _fail(e)
        raise
    set_status("success", "Lineup saved.")
    return snapshot


def load_saved(index: int) -> Optional[Lineup]:
    """Replace the current lineup with saved lineup *index*, if it exists."""
    snapshot = _archive.get(index)
    if snapshot is None:
        return None
    return set_lineup(LineupArchive.load(snapshot))


def delete_saved(index: int) -> Optional[SavedLineup]:
    try:
        removed = _archive.delete(index)
    except LineupError as e:
        _fail(e)
        raise
    set_status("success", "Saved lineup deleted.")
    return removed


def export_lineup() -> tuple[LineupPayload, str]:
    """Build the export payload and copy its JSON text to the clipboard."""
    payload = export_payload(_lineup, current_chemistry())
    text = export_text(payload)
    try:
        _clipboard.write_text(text)
    except Exception as e:
        error = ClipboardError("Unable to copy lineup. Please try again.")
        _fail(error)
        raise error from e
    set_status("success", "Lineup copied to clipboard!")
    return payload, text


def import_lineup(raw: str) -> Lineup:
    try:
        lineup = import_payload(raw)
    except LineupError as e:
        _fail(e)
        raise
    set_status("success", "Lineup imported successfully.")
    return set_lineup(lineup)
