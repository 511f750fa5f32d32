from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from mathvillage.core.settings import Settings
from mathvillage.core.state import ProgressState, initial_state

logger = logging.getLogger(__name__)

PROGRESS_KEY = "progress"
SETTINGS_KEY = "settings"


def default_home() -> Path:
    override = os.getenv("MATHVILLAGE_HOME")
    if override:
        return Path(override)
    return Path.home() / ".mathvillage"


class ProgressStore:
    """Persists progress and settings to disk across app restarts.

    Each key lives in its own JSON file under ~/.mathvillage (or
    ``$MATHVILLAGE_HOME``). Anything unreadable falls back to the
    first-launch defaults; nothing here ever raises to the caller.
    """

    def __init__(self, base_dir: Optional[Path] = None) -> None:
        self._base_dir = Path(base_dir) if base_dir is not None else default_home()
        self._base_dir.mkdir(parents=True, exist_ok=True)

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def path_for(self, key: str) -> Path:
        return self._base_dir / f"{key}.json"

    def get(self, key: str) -> Optional[Any]:
        """Return the decoded value stored under ``key``, or ``None``."""
        file_path = self.path_for(key)
        if not file_path.exists():
            return None
        try:
            return json.loads(file_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
            logger.warning("Could not load %s from %s: %s", key, file_path, e)
            return None

    def set(self, key: str, value: Any) -> None:
        file_path = self.path_for(key)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            file_path.write_text(json.dumps(value, indent=2), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not save %s to %s: %s", key, file_path, e)

    def load_progress(self) -> ProgressState:
        payload = self.get(PROGRESS_KEY)
        if payload is None:
            return initial_state()
        try:
            return ProgressState.from_dict(payload)
        except (TypeError, ValueError) as e:
            logger.warning("Stored progress is malformed, starting fresh: %s", e)
            return initial_state()

    def save_progress(self, state: ProgressState) -> None:
        self.set(PROGRESS_KEY, state.to_dict())

    def load_settings(self) -> Settings:
        payload = self.get(SETTINGS_KEY)
        if payload is None:
            return Settings()
        try:
            return Settings.from_dict(payload)
        except ValueError as e:
            logger.warning("Stored settings are malformed, using defaults: %s", e)
            return Settings()

    def save_settings(self, settings: Settings) -> None:
        self.set(SETTINGS_KEY, settings.to_dict())

    def reset(self) -> None:
        """Erase progress and settings. Only called from the parent panel."""
        self.save_progress(initial_state())
        self.save_settings(Settings())
