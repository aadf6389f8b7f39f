"""
User configuration management for Image Comparator.

Each setting is looked up in order:
1. Runtime parameters (command-line options, handled by the CLI)
2. Environment variable (IMGCOMPARE_*)
3. User config file (~/.imgcompare/config.json, or $IMGCOMPARE_CONFIG_DIR)
4. Default value from config.py

Values from the environment are strings; values from the config file are
JSON. Both go through the same converter, and a value that cannot be
converted is logged and replaced by the default.

Example config.json:
{
    "default_tolerance": 2,
    "default_threshold": 0.75,
    "resolution_ladder": [16, 128, 512, 1024],
    "max_candidate_bytes": 300000000,
    "default_workers": 4,
    "max_image_pixels": 500000000
}
"""

import json
import os
from pathlib import Path
from typing import Any, Callable, Optional
import logging

from .config import (
    DEFAULT_TOLERANCE,
    DEFAULT_THRESHOLD,
    RESOLUTION_LADDER,
    MAX_CANDIDATE_BYTES,
    DEFAULT_WORKERS,
    MAX_IMAGE_PIXELS,
)

logger = logging.getLogger(__name__)


def to_ladder(value: Any) -> tuple:
    """
    Convert a ladder setting to a tuple of ints.

    Accepts a list, a single number, or a string such as "16,128" or
    "[16, 128]".
    """
    if isinstance(value, str):
        value = [part for part in value.strip('[] ').split(',') if part.strip()]
    elif isinstance(value, (int, float)):
        value = [value]
    return tuple(int(part) for part in value)


# key -> (environment variable, default, converter)
SETTINGS: dict[str, tuple[str, Any, Callable[[Any], Any]]] = {
    'default_tolerance': ('IMGCOMPARE_TOLERANCE', DEFAULT_TOLERANCE, int),
    'default_threshold': ('IMGCOMPARE_THRESHOLD', DEFAULT_THRESHOLD, float),
    'resolution_ladder': ('IMGCOMPARE_LADDER', RESOLUTION_LADDER, to_ladder),
    'max_candidate_bytes': ('IMGCOMPARE_MAX_CANDIDATE_BYTES', MAX_CANDIDATE_BYTES, int),
    'default_workers': ('IMGCOMPARE_WORKERS', DEFAULT_WORKERS, int),
    'max_image_pixels': ('IMGCOMPARE_MAX_PIXELS', MAX_IMAGE_PIXELS, int),
}


def _setting(key: str, doc: str) -> property:
    return property(lambda self: self.value(key), doc=doc)


class UserConfig:
    """Resolves settings from environment, config file and defaults."""

    def __init__(self, config_dir: Optional[Path] = None):
        self._explicit_dir = Path(config_dir) if config_dir else None
        self._file_values: Optional[dict] = None

    @property
    def config_dir(self) -> Path:
        if self._explicit_dir is not None:
            return self._explicit_dir
        env_dir = os.getenv('IMGCOMPARE_CONFIG_DIR')
        return Path(env_dir) if env_dir else Path.home() / '.imgcompare'

    @property
    def config_file_path(self) -> Path:
        return self.config_dir / 'config.json'

    def reload(self) -> None:
        """Forget the cached config file contents."""
        self._file_values = None

    def _file(self) -> dict:
        if self._file_values is not None:
            return self._file_values

        self._file_values = {}
        path = self.config_file_path
        if path.exists():
            try:
                data = json.loads(path.read_text(encoding='utf-8'))
            except (OSError, json.JSONDecodeError) as e:
                logger.warning(f"Ignoring unreadable config file {path}: {e}")
            else:
                if isinstance(data, dict):
                    self._file_values = data
                else:
                    logger.warning(f"Ignoring config file {path}: expected a JSON object")
        return self._file_values

    def source_of(self, key: str) -> str:
        """Name where a setting currently comes from: 'env', 'file' or 'default'."""
        env_var = SETTINGS[key][0]
        if os.getenv(env_var) is not None:
            return 'env'
        if key in self._file():
            return 'file'
        return 'default'

    def value(self, key: str) -> Any:
        """
        Resolve one setting.

        Raises:
            KeyError: If key is not a known setting
        """
        env_var, default, convert = SETTINGS[key]
        origin = self.source_of(key)
        if origin == 'default':
            return default

        raw = os.getenv(env_var) if origin == 'env' else self._file()[key]
        try:
            return convert(raw)
        except (TypeError, ValueError):
            where = env_var if origin == 'env' else f"{self.config_file_path} [{key}]"
            logger.warning(f"Invalid value {raw!r} for {where}, using default {default!r}")
            return default

    def as_dict(self) -> dict:
        """All settings with their resolved values."""
        return {key: self.value(key) for key in SETTINGS}

    default_tolerance = _setting('default_tolerance', "Max per-channel difference (0-255).")
    default_threshold = _setting('default_threshold', "Min fraction of matching channels (0-1).")
    resolution_ladder = _setting('resolution_ladder', "Square resolutions compared in order.")
    max_candidate_bytes = _setting('max_candidate_bytes', "Size ceiling for candidates.")
    default_workers = _setting('default_workers', "Parallel source workers (0 = one per source).")
    max_image_pixels = _setting('max_image_pixels', "Decompression bomb limit.")

    def create_example_config(self) -> bool:
        """Write a config file holding every default. Returns False on failure."""
        defaults = {
            key: list(default) if isinstance(default, tuple) else default
            for key, (_, default, _) in SETTINGS.items()
        }
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            self.config_file_path.write_text(json.dumps(defaults, indent=2), encoding='utf-8')
        except OSError as e:
            logger.error(f"Failed to create example config: {e}")
            return False
        logger.info(f"Created example config file at {self.config_file_path}")
        self.reload()
        return True


_user_config: Optional[UserConfig] = None


def get_user_config() -> UserConfig:
    """Get the process-wide UserConfig, creating it on first use."""
    global _user_config
    if _user_config is None:
        _user_config = UserConfig()
    return _user_config
