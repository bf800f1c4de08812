# hitmon/persistence/log_store.py
from __future__ import annotations
import json
import re
import threading
from collections import defaultdict
from pathlib import Path
from typing import Any, Dict, List, Mapping

from hitmon.anomaly.models import Event


ACTOR_ID_RE = re.compile(r"^[A-Za-z0-9_-]{1,128}$")


class PersistenceFailure(Exception):
    """The actor log could not be written or read."""


class MalformedRecordError(PersistenceFailure):
    def __init__(self, path: Path, line_no: int, detail: str):
        super().__init__(f"{path}:{line_no}: {detail}")
        self.path = path
        self.line_no = line_no


class LogStore:
    """
    Append-only, one JSON line per hit, one file per actor: <root>/<actor_id>.log

    append_and_read() holds a per-actor lock, so the snapshot it returns always
    ends with the record that was just written. Different actors do not block
    each other.
    """

    def __init__(self, root: str | Path):
        self.root = Path(root)
        self._locks: Dict[str, threading.Lock] = defaultdict(threading.Lock)
        self._locks_guard = threading.Lock()

    def path_for(self, actor_id: str) -> Path:
        if not ACTOR_ID_RE.match(actor_id or ""):
            raise ValueError(f"invalid actor id: {actor_id!r}")
        return self.root / f"{actor_id}.log"

    def _lock(self, actor_id: str) -> threading.Lock:
        with self._locks_guard:
            return self._locks[actor_id]

    def exists(self, actor_id: str) -> bool:
        return self.path_for(actor_id).exists()

    def append(self, actor_id: str, record: Mapping[str, Any]) -> None:
        with self._lock(actor_id):
            self._append(actor_id, record)

    def read(self, actor_id: str) -> List[Event]:
        with self._lock(actor_id):
            return self._read(actor_id)

    def append_and_read(self, actor_id: str, record: Mapping[str, Any]) -> List[Event]:
        with self._lock(actor_id):
            self._append(actor_id, record)
            return self._read(actor_id)

    def _append(self, actor_id: str, record: Mapping[str, Any]) -> None:
        path = self.path_for(actor_id)
        line = json.dumps(dict(record), ensure_ascii=False, separators=(",", ":"))
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("a", encoding="utf-8") as f:
                f.write(line + "\n")
        except OSError as e:
            raise PersistenceFailure(f"could not append to {path}: {e}") from e

    def _read(self, actor_id: str) -> List[Event]:
        path = self.path_for(actor_id)
        events: List[Event] = []
        try:
            with path.open("r", encoding="utf-8") as f:
                for line_no, line in enumerate(f, start=1):
                    line = line.strip()
                    if not line:
                        continue
                    try:
                        events.append(Event.from_record(json.loads(line)))
                    except (json.JSONDecodeError, AttributeError, KeyError, TypeError, ValueError) as e:
                        raise MalformedRecordError(path, line_no, str(e)) from e
        except FileNotFoundError:
            return []
        except OSError as e:
            raise PersistenceFailure(f"could not read {path}: {e}") from e
        return events
