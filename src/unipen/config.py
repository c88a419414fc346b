"""Configuration and data management for the UniPen reader"""

import json
import os
import platform
import shutil
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .utils.logging import UniPenLogger

SETTINGS_FILE = "parser-settings.yaml"


@dataclass(frozen=True)
class ParserSettings:
    """Knobs of one parse session"""

    max_include_depth: int = 64
    encoding: str = "utf-8"
    strict_ranges: bool = False
    strict_component_refs: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserSettings":
        """Build settings from a mapping, rejecting unknown keys and wrong types"""
        known = {f.name: f for f in fields(cls)}
        unknown = sorted(set(data) - set(known))
        if unknown:
            raise ValueError(f"Unknown parser settings: {', '.join(unknown)}")

        defaults = asdict(cls())
        for name, value in data.items():
            expected = type(defaults[name])
            if expected is int and (isinstance(value, bool) or not isinstance(value, int)):
                raise ValueError(f"Setting '{name}' must be an integer, got {value!r}")
            if expected is not int and not isinstance(value, expected):
                raise ValueError(f"Setting '{name}' must be {expected.__name__}, got {value!r}")

        settings = cls(**data)
        if settings.max_include_depth < 0:
            raise ValueError("Setting 'max_include_depth' must not be negative")
        return settings


class DataManager:
    """Manages UniPen data files with user override support"""

    def __init__(self):
        # Package data directory (built-in defaults)
        self.package_data_dir = Path(__file__).parent / "data"

        # User data directory (overrides), created on first write
        self.user_data_dir = self._get_user_data_dir()

    def _get_user_data_dir(self) -> Path:
        """Get user data directory based on OS or environment variable"""
        if custom_dir := os.environ.get("UNIPEN_DATA_DIR"):
            return Path(custom_dir).expanduser()

        system = platform.system()

        if system == "Darwin":  # macOS
            return Path.home() / "Library" / "Application Support" / "unipen"
        elif system == "Windows":
            app_data = os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming")
            return Path(app_data) / "unipen"
        else:  # Linux and others
            xdg_config = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
            return Path(xdg_config) / "unipen"

    def load_data_file(self, filename: str) -> Dict[str, Any]:
        """Load data file with user override priority"""
        user_file = self.user_data_dir / filename
        if user_file.exists():
            return self._load_file(user_file)

        package_file = self.package_data_dir / filename
        if package_file.exists():
            return self._load_file(package_file)

        return {}

    def _load_file(self, filepath: Path) -> Dict[str, Any]:
        """Load JSON or YAML file based on extension"""
        try:
            return read_mapping(filepath)
        except (OSError, ValueError, yaml.YAMLError) as e:
            UniPenLogger.warning(f"Error loading {filepath}: {e}")
            return {}

    def reset_to_defaults(self, filename: Optional[str] = None) -> int:
        """Remove user override files; returns how many were removed"""
        if filename:
            user_file = self.user_data_dir / filename
            if user_file.exists():
                user_file.unlink()
                UniPenLogger.info(f"Reset {filename} to defaults")
                return 1
            UniPenLogger.info(f"{filename} was already using defaults")
            return 0

        count = 0
        if self.user_data_dir.exists():
            for user_file in self.user_data_dir.glob("*"):
                if user_file.is_file():
                    user_file.unlink()
                    count += 1
        UniPenLogger.info(f"Reset {count} file(s) to defaults")
        return count

    def get_data_info(self) -> Dict[str, Any]:
        """Get information about data files"""
        package_files = []
        if self.package_data_dir.exists():
            package_files = [f.name for f in self.package_data_dir.glob("*") if f.is_file()]

        user_files = []
        if self.user_data_dir.exists():
            user_files = [f.name for f in self.user_data_dir.glob("*") if f.is_file()]

        return {
            "package_data_dir": str(self.package_data_dir),
            "user_data_dir": str(self.user_data_dir),
            "package_files": sorted(package_files),
            "user_files": sorted(user_files),
        }

    def copy_package_to_user(self, filename: str) -> bool:
        """Copy a package data file to user directory for editing"""
        package_file = self.package_data_dir / filename
        user_file = self.user_data_dir / filename

        if not package_file.exists():
            UniPenLogger.error(f"Package file {filename} not found")
            return False

        if user_file.exists():
            UniPenLogger.warning(f"User file {filename} already exists")
            return False

        self.user_data_dir.mkdir(parents=True, exist_ok=True)
        shutil.copy2(package_file, user_file)
        UniPenLogger.info(f"Copied {filename} to user directory")
        return True


def read_mapping(filepath: Path) -> Dict[str, Any]:
    """Read a YAML or JSON mapping; raises on unreadable or non-mapping content"""
    with open(filepath, encoding="utf-8") as f:
        if filepath.suffix == ".json":
            data = json.load(f)
        else:
            data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{filepath} does not contain a mapping")
    return data


def get_data_manager() -> DataManager:
    """Data manager for the current environment (re-reads UNIPEN_DATA_DIR)"""
    return DataManager()


def load_settings(path: Optional[str] = None) -> ParserSettings:
    """
    Load parser settings.

    Args:
        path: Explicit YAML/JSON settings file. When omitted, the user
              override of parser-settings.yaml is used if present, else the
              packaged defaults.
    """
    if path is not None:
        return ParserSettings.from_dict(read_mapping(Path(path)))
    return ParserSettings.from_dict(get_data_manager().load_data_file(SETTINGS_FILE))
