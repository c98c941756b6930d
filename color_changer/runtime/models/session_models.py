"""
Session-related models for the Color Changer runtime.

These describe:
- SessionMode enum (ROLL_CALL, PLAY, EXIT)
- the typed Session record holding every attribute the skill keeps
  between requests of one voice session
"""

from enum import Enum
from typing import List, Optional
from datetime import datetime, timezone
from pathlib import PurePosixPath, PureWindowsPath
from pydantic import BaseModel, Field


MAX_DEVICES = 2


def is_safe_session_id(session_id: str) -> bool:
    """True when the id is usable as a single file name on any platform."""
    if not session_id or session_id in (".", "..") or "\x00" in session_id:
        return False
    return (
        PurePosixPath(session_id).name == session_id
        and PureWindowsPath(session_id).name == session_id
    )


class SessionMode(str, Enum):
    ROLL_CALL = "ROLL_CALL"
    PLAY = "PLAY"
    EXIT = "EXIT"


class Session(BaseModel):
    session_id: str
    mode: SessionMode = SessionMode.ROLL_CALL
    registered_device_ids: List[str] = Field(default_factory=list, max_length=MAX_DEVICES)
    button_check_in_count: int = Field(default=0, ge=0, le=MAX_DEVICES)
    active_watcher_id: Optional[str] = None
    chosen_color: Optional[str] = None
    awaiting_exit_confirmation: bool = False
    created_at: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    @property
    def is_roll_call_complete(self) -> bool:
        return self.mode != SessionMode.ROLL_CALL

    def reset(self) -> None:
        """Return every skill attribute to its roll-call default."""
        self.mode = SessionMode.ROLL_CALL
        self.registered_device_ids = []
        self.button_check_in_count = 0
        self.active_watcher_id = None
        self.chosen_color = None
        self.awaiting_exit_confirmation = False
