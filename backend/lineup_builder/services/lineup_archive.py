"""Saved lineups: a named, ordered archive behind a key-value store.

The whole archive is one JSON array stored under a single key. The store is
injected so tests can use ``MemoryStore`` instead of the JSON file on disk.
"""

from __future__ import annotations

import json
import logging
import pathlib
import time
from typing import Optional, Protocol

from pydantic import ValidationError as PydanticValidationError

from ..config import builder_config
from ..errors import FormatError, ParseError, PersistenceError, ValidationError
from ..models.lineup import Lineup, LineupPayload, SavedLineup, empty_slots

logger = logging.getLogger(__name__)


class PersistencePort(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    """In-process key-value store."""

    def __init__(self, data: Optional[dict[str, str]] = None):
        self.data: dict[str, str] = dict(data or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class JsonFileStore:
    """Key-value store kept as one JSON object file, ``{key: string}``."""

    def __init__(self, path: pathlib.Path):
        self.path = pathlib.Path(path)

    def _read_all(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r") as f:
                data = json.load(f)
        except OSError as e:
            raise PersistenceError(f"Could not read {self.path}: {e}") from e
        except json.JSONDecodeError as e:
            logger.warning(f"Ignoring unreadable store {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w") as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            raise PersistenceError(f"Could not write {self.path}: {e}") from e


def _now_millis() -> int:
    return int(time.time() * 1000)


class LineupArchive:
    """Ordered list of saved lineups; display order is save order."""

    def __init__(self, store: PersistencePort, key: Optional[str] = None):
        self.store = store
        self.key = key or builder_config.archive_key
        self._saved: list[SavedLineup] = []

    @property
    def saved(self) -> tuple[SavedLineup, ...]:
        return tuple(self._saved)

    def __len__(self) -> int:
        return len(self._saved)

    def refresh(self) -> int:
        """Reload the archive from the store.

        Stored text that is not a valid lineup list is logged and treated as
        an empty archive.
        """
        try:
            raw = self.store.get(self.key)
        except PersistenceError:
            raise
        except Exception as e:
            raise PersistenceError(f"Failed to read saved lineups: {e}") from e

        self._saved = []
        if not raw:
            return 0
        try:
            entries = json.loads(raw)
            self._saved = [SavedLineup.model_validate(entry) for entry in entries]
        except (json.JSONDecodeError, TypeError, PydanticValidationError) as e:
            logger.error(f"Failed to load saved lineups: {e}")
            self._saved = []
        return len(self._saved)

    def _persist(self) -> None:
        payload = json.dumps([s.model_dump(by_alias=True) for s in self._saved])
        try:
            self.store.set(self.key, payload)
        except PersistenceError:
            raise
        except Exception as e:
            raise PersistenceError(f"Failed to write saved lineups: {e}") from e

    def save(self, name: str, lineup: Lineup, chemistry: int) -> SavedLineup:
        """Append a snapshot and persist the archive.

        Names are trimmed and not required to be unique. If persisting fails
        the snapshot stays in the in-memory archive.
        """
        clean_name = (name or "").strip()
        if not clean_name:
            raise ValidationError("Lineup name cannot be empty.")

        field, batting = lineup.copy_slots()
        snapshot = SavedLineup(
            name=clean_name,
            players=field,
            batting_order=batting,
            chemistry=chemistry,
            timestamp=_now_millis(),
        )
        self._saved.append(snapshot)
        self._persist()
        logger.info(f"Saved lineup '{clean_name}' ({len(self._saved)} in archive)")
        return snapshot

    def get(self, index: int) -> Optional[SavedLineup]:
        if 0 <= index < len(self._saved):
            return self._saved[index]
        return None

    @staticmethod
    def load(snapshot: SavedLineup) -> Lineup:
        return Lineup(field=list(snapshot.players), batting=list(snapshot.batting_order))

    def delete(self, index: int) -> Optional[SavedLineup]:
        """Remove the snapshot at *index*; out of range is a no-op.

        The archive is persisted either way.
        """
        removed = None
        if 0 <= index < len(self._saved):
            removed = self._saved.pop(index)
        self._persist()
        return removed


def export_payload(lineup: Lineup, chemistry: int, name: Optional[str] = None) -> LineupPayload:
    field, batting = lineup.copy_slots()
    return LineupPayload(
        name=name or builder_config.export_name,
        players=field,
        batting_order=batting,
        chemistry=chemistry,
        timestamp=_now_millis(),
    )


def export_text(payload: LineupPayload) -> str:
    return json.dumps(payload.model_dump(by_alias=True), indent=2)


def import_payload(raw: str) -> Lineup:
    """Parse exported lineup text back into a ``Lineup``.

    Only ``players`` is required. A missing or null ``battingOrder`` becomes
    nine empty slots. Slot contents are taken as given, duplicates included.
    """
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as e:
        raise ParseError("Failed to import lineup. Please check the format.") from e

    if not isinstance(data, dict) or not isinstance(data.get("players"), list):
        raise FormatError("Invalid lineup format.")

    batting = data.get("battingOrder")
    if batting is None:
        batting = empty_slots()
    try:
        return Lineup(field=data["players"], batting=batting)
    except PydanticValidationError as e:
        raise FormatError("Invalid lineup format.") from e
