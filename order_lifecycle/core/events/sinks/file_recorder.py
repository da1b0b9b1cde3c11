"""
Append-only JSONL recorder for order events.
"""
from __future__ import annotations

import dataclasses
import json
from pathlib import Path
from typing import Any


def _event_record(event: Any) -> dict[str, Any]:
    if dataclasses.is_dataclass(event) and not isinstance(event, type):
        record = dataclasses.asdict(event)
    else:
        record = {"event": str(event)}
    record["event_type"] = type(event).__name__
    return record


class FileRecorderSink:
    """Writes each event as one JSON line. Datetimes are written in ISO format."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._fh = self._path.open("a", encoding="utf-8")
        self._closed = False

    @property
    def path(self) -> Path:
        return self._path

    def on_event(self, event: Any) -> None:
        line = json.dumps(_event_record(event), default=_json_default, sort_keys=True)
        self._fh.write(line + "\n")
        self._fh.flush()

    def close(self) -> None:
        if self._closed:
            return
        self._fh.flush()
        self._fh.close()
        self._closed = True


def _json_default(value: Any) -> str:
    isoformat = getattr(value, "isoformat", None)
    if callable(isoformat):
        return isoformat()
    return str(value)
