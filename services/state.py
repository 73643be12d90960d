"""Local key-value state kept on the device.

Two keys survive restarts: whether onboarding was completed and which workspace
was selected last. Both are cleared on sign-out.
"""

import tomllib
from pathlib import Path
from typing import Optional

import tomli_w

from logger import get_logger

logger = get_logger()

ONBOARDING_KEY = "has_completed_onboarding"
WORKSPACE_KEY = "current_workspace_id"


class LocalStateService:
    """Reads and writes the local state file.

    Args:
        path: TOML file holding the state. Created on first write.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def has_completed_onboarding(self) -> bool:
        return bool(self._load().get(ONBOARDING_KEY, False))

    def complete_onboarding(self) -> None:
        self._set(ONBOARDING_KEY, True)

    def current_workspace_id(self) -> Optional[str]:
        return self._load().get(WORKSPACE_KEY) or None

    def set_current_workspace_id(self, workspace_id: str) -> None:
        self._set(WORKSPACE_KEY, workspace_id)

    def clear(self) -> None:
        """Forget both keys (sign-out)."""
        data = self._load()
        data.pop(ONBOARDING_KEY, None)
        data.pop(WORKSPACE_KEY, None)
        self._save(data)
        logger.debug("Cleared local state")

    def _set(self, key: str, value) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def _load(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "rb") as f:
                return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            logger.warning(f"Ignoring unreadable state file {self.path}: {e}")
            return {}

    def _save(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "wb") as f:
            tomli_w.dump(data, f)
