"""Best-effort storage for the dark mode preference.

Only one value is persisted between sessions: whether dark mode is on.
Reading falls back to light mode and writing reports failure instead of
raising, so a read-only or missing data directory never stops the app.
"""

from pathlib import Path
from typing import Union
import logging

import yaml

logger = logging.getLogger(__name__)

DARK_MODE_KEY = "design-system-dark-mode"


class PreferenceStore:
    """YAML-backed key-value cache for the dark mode boolean."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load_dark_mode(self, default: bool = False) -> bool:
        """Read the saved preference, or ``default`` if unavailable."""
        if not self.path.exists():
            return default
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Could not read preferences from {self.path}: {e}")
            return default

        value = data.get(DARK_MODE_KEY) if isinstance(data, dict) else None
        if not isinstance(value, bool):
            if value is not None:
                logger.warning(f"Ignoring non-boolean {DARK_MODE_KEY} preference: {value!r}")
            return default
        return value

    def save_dark_mode(self, dark_mode: bool) -> bool:
        """Write the preference; returns False when it could not be saved."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                yaml.safe_dump({DARK_MODE_KEY: bool(dark_mode)}, f, default_flow_style=False)
            return True
        except OSError as e:
            logger.warning(f"Could not save preferences to {self.path}: {e}")
            return False

    def toggle_dark_mode(self) -> bool:
        """Flip the stored preference and return the new value."""
        dark_mode = not self.load_dark_mode()
        self.save_dark_mode(dark_mode)
        return dark_mode
