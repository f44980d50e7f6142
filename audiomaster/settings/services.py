"""Settings persistence: whole-bundle JSON files."""

import json
import logging
from pathlib import Path

from .models import MasteringSettings
from ..core.config import FileConfig
from ..core.exceptions import SettingsFileError

logger = logging.getLogger(__name__)


def save_settings(settings: MasteringSettings, file_path: Path) -> Path:
    """Write the bundle to ``file_path`` as indented JSON."""
    file_path = Path(file_path)
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with file_path.open("w", encoding=FileConfig.SETTINGS_ENCODING) as f:
            json.dump(settings.to_dict(), f, indent=2)
            f.write("\n")
    except OSError as e:
        raise SettingsFileError(
            "Failed to save settings", file_path=str(file_path), details=str(e)
        )

    logger.info("Saved settings to %s", file_path)
    return file_path


def load_settings(file_path: Path, current: MasteringSettings = None) -> MasteringSettings:
    """Load a bundle from ``file_path``.

    A missing file is not an error: ``current`` (or the defaults) comes
    back unchanged.
    """
    file_path = Path(file_path)
    if current is None:
        current = MasteringSettings()

    if not file_path.exists():
        logger.debug("No settings file at %s, keeping current settings", file_path)
        return current

    try:
        with file_path.open("r", encoding=FileConfig.SETTINGS_ENCODING) as f:
            data = json.load(f)
        settings = MasteringSettings.from_dict(data)
    except (OSError, ValueError, TypeError) as e:
        raise SettingsFileError(
            "Failed to load settings", file_path=str(file_path), details=str(e)
        )

    logger.info("Loaded settings from %s", file_path)
    return settings
