# -*- coding: utf-8 -*-
"""
src/monocam/config.py

Module for handling application configuration.

This module defines default settings for MonoCam, such as the capture hotkey,
the camera index and the OCR engine options. It loads user-defined settings
from a configuration file (config.ini), creating one with default values on
the first run. The GUI never writes settings back: choices made at runtime,
such as the active colour scheme, last only for the session.
"""

import configparser
import logging
import os
import platform
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)

# --- Constants ---
APP_NAME = "MonoCam"
DEFAULT_CONFIG_FILENAME = "config.ini"
DEFAULT_HOTKEY = "<f4>"
CONFIG_DIR_ENV = "MONOCAM_CONFIG_DIR"


def get_app_dir() -> Path:
    """
    Gets the application's data directory in a cross-platform way.

    The ``MONOCAM_CONFIG_DIR`` environment variable overrides the default.

    - Windows: %APPDATA%/MonoCam
    - macOS: ~/Library/Application Support/MonoCam
    - Linux: ~/.config/MonoCam

    Returns:
        Path: A Path object to the application's data directory.
    """
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override)
    if platform.system() == "Windows":
        return Path.home() / "AppData" / "Roaming" / APP_NAME
    if platform.system() == "Darwin":
        return Path.home() / "Library" / "Application Support" / APP_NAME
    return Path.home() / ".config" / APP_NAME


class Config:
    """
    Manages application configuration by loading defaults and overriding
    them with settings from a user-specific config file.
    """

    def __init__(self, app_dir: Optional[Path] = None):
        """
        Initializes the configuration manager.

        Args:
            app_dir (Path, optional): Directory holding config.ini. Defaults
                                      to :func:`get_app_dir`.
        """
        self.parser = configparser.ConfigParser()
        self.app_dir = Path(app_dir) if app_dir is not None else get_app_dir()
        self.config_file_path = self.app_dir / DEFAULT_CONFIG_FILENAME

        self._load_defaults()
        self._load_from_file()

    def _load_defaults(self):
        """Sets the default configuration values in the parser object."""
        self.parser["General"] = {
            "hotkey": DEFAULT_HOTKEY,
            "global_hotkey": "False",
        }
        self.parser["Camera"] = {
            "index": "0",
            "frame_interval_ms": "33",
        }
        self.parser["Display"] = {
            "color_scheme": "0",
        }
        self.parser["OCR"] = {
            "engine": "easyocr",
            "languages": "en",
            "gpu": "False",
            "confidence_threshold": "0.0",
            "page_segmentation_mode": "3",
            "max_pending": "4",
        }
        self.parser["Logging"] = {
            "level": "INFO",
        }

    def _load_from_file(self):
        """
        Loads settings from the config.ini file, overriding defaults.
        If the file doesn't exist, it will be created with default values.
        """
        if not self.config_file_path.exists():
            self._save_defaults()
        else:
            try:
                self.parser.read(self.config_file_path)
            except configparser.Error as e:
                logger.error(f"Could not parse config file {self.config_file_path}, using defaults: {e}")

    def _save_defaults(self):
        """Saves the current (default) configuration to the config file."""
        try:
            self.app_dir.mkdir(parents=True, exist_ok=True)
            with open(self.config_file_path, 'w') as configfile:
                configfile.write(f"# {APP_NAME} Configuration File\n")
                configfile.write("# You can edit these values. Restart the app for changes to take effect.\n\n")
                self.parser.write(configfile)
        except OSError as e:
            # Not fatal: the defaults are already loaded.
            logger.error(f"Could not write to config file at {self.config_file_path}: {e}")

    # --- Properties to access settings easily and with correct types ---

    @property
    def hotkey(self) -> str:
        """The hotkey combination (pynput syntax) that triggers a capture."""
        return self.parser.get("General", "hotkey", fallback=DEFAULT_HOTKEY)

    @property
    def global_hotkey(self) -> bool:
        """Whether to also listen for the hotkey system-wide."""
        return self.parser.getboolean("General", "global_hotkey", fallback=False)

    @property
    def camera_index(self) -> int:
        return self.parser.getint("Camera", "index", fallback=0)

    @property
    def frame_interval_ms(self) -> int:
        """How often the GUI polls the camera for a new frame."""
        return max(1, self.parser.getint("Camera", "frame_interval_ms", fallback=33))

    @property
    def color_scheme(self) -> int:
        """Index of the colour scheme selected at start-up."""
        return self.parser.getint("Display", "color_scheme", fallback=0)

    @property
    def ocr_engine(self) -> str:
        return self.parser.get("OCR", "engine", fallback="easyocr")

    @property
    def ocr_languages(self) -> List[str]:
        raw = self.parser.get("OCR", "languages", fallback="en")
        return [lang.strip() for lang in raw.split(",") if lang.strip()] or ["en"]

    @property
    def ocr_gpu(self) -> bool:
        return self.parser.getboolean("OCR", "gpu", fallback=False)

    @property
    def ocr_confidence_threshold(self) -> float:
        """The minimum confidence (0.0 - 1.0) for an EasyOCR fragment to be kept."""
        return self.parser.getfloat("OCR", "confidence_threshold", fallback=0.0)

    @property
    def ocr_page_segmentation_mode(self) -> int:
        return self.parser.getint("OCR", "page_segmentation_mode", fallback=3)

    @property
    def ocr_max_pending(self) -> Optional[int]:
        """Bound on outstanding OCR requests; None when unbounded (0 in the file)."""
        value = self.parser.getint("OCR", "max_pending", fallback=4)
        return value if value > 0 else None

    @property
    def log_level(self) -> str:
        return self.parser.get("Logging", "level", fallback="INFO").upper()


# --- Shared Instance ---
# Created on first use rather than at import, so importing this module never
# touches the file system.
_config: Optional[Config] = None


def get_config() -> Config:
    """Returns the process-wide Config, loading it on the first call."""
    global _config
    if _config is None:
        _config = Config()
    return _config
