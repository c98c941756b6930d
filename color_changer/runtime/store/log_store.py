"""
LogStore: append-only logging for Color Changer runtime events.

Writes JSON lines to:

    <log_dir>/events_YYYY-MM-DD.jsonl

ConsoleLogStore is the drop-in used when no log directory is configured;
it forwards events to the standard logger instead.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path


logger = logging.getLogger(__name__)


class LogStore:
    """Date-based JSONL event log."""

    def __init__(self, log_dir: str = "runtime/data/logs"):
        self.log_dir = Path(log_dir)

    def path_for(self, when: datetime) -> Path:
        return self.log_dir / f"events_{when.strftime('%Y-%m-%d')}.jsonl"

    def log_event(self, event_type: str, payload: dict) -> None:
        """Append an event to today's log file."""
        now = datetime.now(timezone.utc)
        record = {
            "timestamp": now.isoformat(),
            "event_type": event_type,
            "payload": payload,
        }
        self.log_dir.mkdir(parents=True, exist_ok=True)
        with self.path_for(now).open("a", encoding="utf-8") as f:
            f.write(json.dumps(record, ensure_ascii=False, default=str))
            f.write("\n")


class ConsoleLogStore:
    """Very small log sink used during local development / testing."""

    def log_event(self, event_type: str, payload: dict) -> None:
        logger.info("[LOG] %s: %s", event_type, json.dumps(payload, default=str))
