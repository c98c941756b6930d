"""Minimal session storage for the Color Changer runtime.

This is primarily an in-memory dict of session_id -> Session, with
optional JSON persistence under a data directory.

The design is intentionally simple:
- In-memory access is the primary source of truth during a run.
- If a data_dir is configured, sessions are also written to
  `data_dir/sessions/<session_id>.json` so that they can be reloaded
  on restart for debugging or replay.
- A session is deleted (from memory and disk) as soon as it ends.
- Session ids must be a single path component; any other id raises
  UserInputError before memory or disk is touched.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Optional
from uuid import uuid4

from pydantic import ValidationError

from color_changer.exceptions.exceptions import UserInputError

from ..models.session_models import Session, is_safe_session_id


logger = logging.getLogger(__name__)


class SessionStore:
    """In-memory + optional file-backed session store.

    Parameters
    ----------
    data_dir:
        Base directory for storing session JSON files. If provided,
        sessions will be written to and read from
        `data_dir/sessions/<session_id>.json`.

        If not provided, sessions live in memory only.
    """

    def __init__(self, data_dir: Optional[str] = None) -> None:
        # In-memory cache of sessions for fast access.
        self._sessions: Dict[str, Session] = {}

        # Optional base directory for persistence.
        self._data_dir: Optional[Path] = Path(data_dir) if data_dir else None

        # Ensure the sessions directory exists if a data_dir is configured.
        if self._data_dir is not None:
            self._sessions_dir.mkdir(parents=True, exist_ok=True)

    @property
    def _sessions_dir(self) -> Path:
        """Return the directory used to store session JSON files."""
        return self._data_dir / "sessions"

    @staticmethod
    def _check_session_id(session_id: str) -> None:
        if not is_safe_session_id(session_id):
            raise UserInputError(f"session id {session_id!r} is not a single path component")

    def _session_path(self, session_id: str) -> Path:
        return self._sessions_dir / f"{session_id}.json"

    def create_session(self, session_id: Optional[str] = None) -> Session:
        """Create a new session and return it.

        The voice platform assigns session ids, so callers normally pass
        one; a random UUID is used otherwise. A newly created session
        starts in roll call with every attribute at its default, replacing
        any previous session stored under the same id.
        """
        session_id = session_id or str(uuid4())
        self._check_session_id(session_id)
        session = Session(session_id=session_id)

        # Store in memory and persist to disk if configured.
        self._sessions[session.session_id] = session
        self._persist_session(session)
        return session

    def get_session(self, session_id: str) -> Optional[Session]:
        """Retrieve an existing session by ID.

        Lookup order:
        1. Check the in-memory cache.
        2. If not found and a data_dir is configured, attempt to
           load the session from disk.
        3. If still not found, return None.
        """
        self._check_session_id(session_id)

        # 1) Check in-memory cache first.
        if session_id in self._sessions:
            return self._sessions[session_id]

        # 2) Attempt to load from disk if persistence is configured.
        if self._data_dir is not None:
            path = self._session_path(session_id)
            if path.is_file():
                try:
                    with path.open("r", encoding="utf-8") as f:
                        data = json.load(f)
                    session = Session(**data)
                except (OSError, ValueError, ValidationError):
                    # A corrupt file is treated as not found.
                    logger.warning("[STORE] Could not load session file %s", path)
                    return None

                # Cache in memory for subsequent access.
                self._sessions[session_id] = session
                return session

        # 3) Not found anywhere.
        return None

    def save_session(self, session: Session) -> None:
        """Persist the given session in memory and to disk (if enabled).

        This should be called after every request that touched the session.
        """
        self._check_session_id(session.session_id)
        self._sessions[session.session_id] = session
        self._persist_session(session)

    def delete_session(self, session_id: str) -> None:
        """Discard a finished session. Unknown ids are ignored."""
        self._check_session_id(session_id)
        self._sessions.pop(session_id, None)
        if self._data_dir is not None:
            self._session_path(session_id).unlink(missing_ok=True)

    def _persist_session(self, session: Session) -> None:
        """Write the session to disk if a data_dir is configured.

        If no data_dir was provided, this is a no-op.
        """
        if self._data_dir is None:
            # No file-based persistence configured.
            return

        sessions_dir = self._sessions_dir
        sessions_dir.mkdir(parents=True, exist_ok=True)
        path = self._session_path(session.session_id)

        with path.open("w", encoding="utf-8") as f:
            json.dump(session.model_dump(mode="json"), f, ensure_ascii=False, indent=2)
