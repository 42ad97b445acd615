"""
Settings Manager for PyColorCode
Handles loading and saving application settings using JSON
"""

import copy
import json
import os
import sys

from colorcode.core.palette import SLOT_NAMES
from colorcode.utils.logging_config import get_logger


logger = get_logger(__name__)

DEFAULT_SETTINGS = {
    'random_skip_slots': ['Face'],
    'emissive_intensity': 0.3,
    'show_grid': True,
}


def _valid_skip_slots(value):
    return isinstance(value, list) and all(isinstance(name, str) and name in SLOT_NAMES for name in value)


def _valid_intensity(value):
    # bool is an int subclass; NaN fails the range check
    return isinstance(value, (int, float)) and not isinstance(value, bool) and 0.0 <= value <= 1.0


def _valid_flag(value):
    return isinstance(value, bool)


SETTING_VALIDATORS = {
    'random_skip_slots': _valid_skip_slots,
    'emissive_intensity': _valid_intensity,
    'show_grid': _valid_flag,
}


class SettingsManager:
    """Manages application settings storage and retrieval"""

    def __init__(self, settings_file=None):
        self._settings_file = settings_file
        self.values = copy.deepcopy(DEFAULT_SETTINGS)

        # Last used directories for different operations
        self.last_directories = {
            'export_swatch': '',
            'import_swatch': '',
            'export_code': '',
            'import_code': '',
        }

    def get_settings_file_path(self):
        """Get the path to settings.json - next to the application script unless given"""
        if self._settings_file:
            return self._settings_file

        if hasattr(sys, '_MEIPASS'):
            # Running as PyInstaller executable
            script_dir = os.path.dirname(sys.executable)
        else:
            main_module = sys.modules['__main__']
            if hasattr(main_module, '__file__') and main_module.__file__:
                script_dir = os.path.dirname(os.path.abspath(main_module.__file__))
            else:
                script_dir = os.getcwd()

        self._settings_file = os.path.join(script_dir, 'settings.json')
        return self._settings_file

    def _get_application_directory(self):
        return os.path.dirname(self.get_settings_file_path())

    def load_settings(self):
        """Load settings from settings.json, falling back to defaults"""
        settings_file = self.get_settings_file_path()

        if not os.path.exists(settings_file):
            logger.info(f"Settings file not found at {settings_file}, using defaults")
            return self.values

        try:
            with open(settings_file, 'r', encoding='utf-8') as f:
                settings_data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Error loading settings from {settings_file}: {e}")
            return self.values

        if not isinstance(settings_data, dict):
            logger.warning(f"Ignoring settings file {settings_file}: not a JSON object")
            return self.values

        for key, is_valid in SETTING_VALIDATORS.items():
            if key not in settings_data:
                continue
            value = settings_data[key]
            if is_valid(value):
                self.values[key] = value
            else:
                logger.warning(f"Ignoring invalid {key} in {settings_file}: {value!r}, "
                               f"keeping {self.values[key]!r}")

        last_directories = settings_data.get('last_directories', {})
        if isinstance(last_directories, dict):
            for operation, directory in last_directories.items():
                if operation in self.last_directories and isinstance(directory, str):
                    self.last_directories[operation] = directory
        else:
            logger.warning(f"Ignoring invalid last_directories in {settings_file}")

        logger.info(f"Loaded settings from {settings_file}")
        return self.values

    def save_settings(self):
        """Save all settings to settings.json"""
        settings_file = self.get_settings_file_path()

        settings_data = dict(self.values)
        settings_data['last_directories'] = self.last_directories

        try:
            with open(settings_file, 'w', encoding='utf-8') as f:
                json.dump(settings_data, f, indent=2, ensure_ascii=False)
        except OSError as e:
            logger.warning(f"Error saving settings to {settings_file}: {e}")
            return False

        logger.debug(f"Saved settings to {settings_file}")
        return True

    def get(self, key):
        return self.values.get(key, DEFAULT_SETTINGS.get(key))

    def set(self, key, value):
        self.values[key] = value

    def set_last_directory(self, operation, directory):
        """Set the last used directory for a specific operation"""
        if operation in self.last_directories:
            self.last_directories[operation] = directory
            logger.debug(f"Updated last directory for {operation}: {directory}")

    def get_last_directory(self, operation):
        """Get the last used directory for an operation, the application directory if unset"""
        directory = self.last_directories.get(operation, '')

        if not directory or not os.path.exists(directory):
            directory = self._get_application_directory()

        return directory

    def save_last_directory(self, operation, filepath):
        """Save the directory of a file for future use"""
        self.set_last_directory(operation, os.path.dirname(filepath))
        self.save_settings()
