from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_ROLL_CALL_TIMEOUT_MS = 50000
DEFAULT_ROLL_CALL_RETRY_TIMEOUT_MS = 30000
DEFAULT_PLAY_TIMEOUT_MS = 30000


def _path_from_env(name: str) -> Optional[Path]:
    raw = os.getenv(name)
    return Path(raw) if raw else None


class Settings:
    """
    Central configuration for the Color Changer skill.

    Values are loaded once from environment variables (with sensible defaults)
    and then exposed via typed properties.
    """

    def __init__(self) -> None:
        # Watcher timeouts (milliseconds), validated lazily
        self._roll_call_timeout_ms = os.getenv(
            "COLOR_CHANGER_ROLL_CALL_TIMEOUT_MS", str(DEFAULT_ROLL_CALL_TIMEOUT_MS)
        )
        self._roll_call_retry_timeout_ms = os.getenv(
            "COLOR_CHANGER_ROLL_CALL_RETRY_TIMEOUT_MS",
            str(DEFAULT_ROLL_CALL_RETRY_TIMEOUT_MS),
        )
        self._play_timeout_ms = os.getenv(
            "COLOR_CHANGER_PLAY_TIMEOUT_MS", str(DEFAULT_PLAY_TIMEOUT_MS)
        )

        # Optional persistence / log locations
        self._session_data_dir = _path_from_env("COLOR_CHANGER_SESSION_DATA_DIR")
        self._log_dir = _path_from_env("COLOR_CHANGER_LOG_DIR")

        self._log_level = os.getenv("COLOR_CHANGER_LOG_LEVEL", "INFO").upper()

    @staticmethod
    def _timeout_ms(name: str, raw: str, default: int) -> int:
        """Parse a timeout in milliseconds, falling back to `default`.

        A non-integer or non-positive value is logged and replaced, so a
        bad environment never stops the runtime from starting.
        """
        try:
            value = int(raw)
        except ValueError:
            logger.warning(
                "[SETTINGS] %s=%r is not an integer, using %s ms", name, raw, default
            )
            return default
        if value <= 0:
            logger.warning(
                "[SETTINGS] %s=%s is not positive, using %s ms", name, value, default
            )
            return default
        return value

    # ------------------------------------------------------------------
    # Watcher timeouts
    # ------------------------------------------------------------------

    @property
    def roll_call_timeout_ms(self) -> int:
        return self._timeout_ms(
            "COLOR_CHANGER_ROLL_CALL_TIMEOUT_MS",
            self._roll_call_timeout_ms,
            DEFAULT_ROLL_CALL_TIMEOUT_MS,
        )

    @property
    def roll_call_retry_timeout_ms(self) -> int:
        return self._timeout_ms(
            "COLOR_CHANGER_ROLL_CALL_RETRY_TIMEOUT_MS",
            self._roll_call_retry_timeout_ms,
            DEFAULT_ROLL_CALL_RETRY_TIMEOUT_MS,
        )

    @property
    def play_timeout_ms(self) -> int:
        return self._timeout_ms(
            "COLOR_CHANGER_PLAY_TIMEOUT_MS",
            self._play_timeout_ms,
            DEFAULT_PLAY_TIMEOUT_MS,
        )

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    @property
    def session_data_dir(self) -> Optional[Path]:
        return self._session_data_dir

    @property
    def log_dir(self) -> Optional[Path]:
        return self._log_dir

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------

    @property
    def log_level(self) -> str:
        return self._log_level


settings = Settings()
