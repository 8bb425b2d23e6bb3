"""Client-side generation history.

Entries live most-recent-first, capped at ``MAX_HISTORY``, and are written
through a key-value store after every change. Unreadable stored data
loads as an empty history.
"""

import json
import logging
import pathlib
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence, Tuple

from pydantic import TypeAdapter, ValidationError

from ..schemas import HistoryEntry

logger = logging.getLogger(__name__)

HISTORY_KEY = "ai_content_history"
MAX_HISTORY = 10

_entries_adapter = TypeAdapter(List[HistoryEntry])


class KeyValueStore:
    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError


class InMemoryStore(KeyValueStore):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class JsonFileStore(KeyValueStore):
    """Keeps every key in one JSON object on disk so it survives restarts."""

    def __init__(self, path):
        self.path = pathlib.Path(path)

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not hold a JSON object")
        return data

    def get(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read()
        except ValueError:
            data = {}
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(data, f)
        tmp.replace(self.path)


def entry_id_for(created_at: datetime, taken: Sequence[str] = ()) -> str:
    millis = int(created_at.timestamp() * 1000)
    while str(millis) in taken:
        millis += 1
    return str(millis)


class HistoryStore:
    def __init__(self, store: KeyValueStore, key: str = HISTORY_KEY, limit: int = MAX_HISTORY):
        self.store = store
        self.key = key
        self.limit = limit
        self._entries: List[HistoryEntry] = self.load()

    @property
    def entries(self) -> Tuple[HistoryEntry, ...]:
        return tuple(self._entries)

    def load(self) -> List[HistoryEntry]:
        try:
            raw = self.store.get(self.key)
            if not raw:
                return []
            entries = _entries_adapter.validate_json(raw)
        except (ValidationError, ValueError, OSError) as exc:
            logger.warning("Discarding unreadable history under %r: %s", self.key, exc)
            return []
        return entries[: self.limit]

    def save(self, entries: Sequence[HistoryEntry]) -> None:
        self._entries = list(entries)[: self.limit]
        payload = _entries_adapter.dump_json(self._entries, by_alias=True)
        self.store.set(self.key, payload.decode("utf-8"))

    def record(self, *, text: str, content_type: str, prompt: str, now: Optional[datetime] = None) -> HistoryEntry:
        created_at = now or datetime.now(timezone.utc)
        entry = HistoryEntry(
            id=entry_id_for(created_at, [e.id for e in self._entries]),
            text=text,
            content_type=content_type,
            prompt=prompt,
            created_at=created_at,
        )
        self.save([entry] + self._entries)
        return entry

    def remove(self, entry_id: str) -> bool:
        kept = [e for e in self._entries if e.id != entry_id]
        if len(kept) == len(self._entries):
            return False
        self.save(kept)
        return True

    def clear(self) -> None:
        self.save([])


def export_entry(entry: HistoryEntry, directory, now: Optional[datetime] = None) -> Optional[pathlib.Path]:
    """Write an entry's text to ``<contentType>-content-<millis>.txt``.

    Best effort: failures are logged and return None.
    """
    stamp = int((now or datetime.now(timezone.utc)).timestamp() * 1000)
    target = pathlib.Path(directory) / f"{entry.content_type}-content-{stamp}.txt"
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(entry.text, encoding="utf-8")
    except OSError as exc:
        logger.warning("Could not export history entry %s: %s", entry.id, exc)
        return None
    return target
