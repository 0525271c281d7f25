"""
Configuration management for cmdx.
Reads user defaults from ~/.cmdx/config.json and the environment.
"""

import json
import os
from pathlib import Path
from typing import Dict, Any, Optional

from dotenv import load_dotenv, find_dotenv

from cmdx.platforms import OperatingSystem, detect_os


class Config:
    """Read-only view of cmdx settings: defaults < config file < environment."""

    DEFAULT_CONFIG = {
        "from_os": None,  # Auto-detected
        "to_os": None,
        "verbose": False,
        "json_output": False,
        "color": True,
        "compound": True,  # Split on && / || / ; / |
    }

    ENV_OVERRIDES = {
        "CMDX_FROM": "from_os",
        "CMDX_TO": "to_os",
        "CMDX_VERBOSE": "verbose",
    }

    def __init__(self, config_dir: Optional[str] = None):
        """
        Initialize config system.

        Args:
            config_dir: Override default config directory
        """
        if config_dir:
            self.config_dir = Path(config_dir).expanduser()
        else:
            self.config_dir = Path.home() / ".cmdx"

        self.config_file = self.config_dir / "config.json"

        dotenv_path = find_dotenv(usecwd=True)
        if dotenv_path:
            load_dotenv(dotenv_path)

        self.settings = self._load_config()
        self._load_env_vars()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from file, falling back to defaults."""
        config = self.DEFAULT_CONFIG.copy()
        if not self.config_file.exists():
            return config
        try:
            with open(self.config_file, 'r') as f:
                loaded = json.load(f)
        except json.JSONDecodeError:
            print("[Warning] Config file corrupted, using defaults")
            return config
        if isinstance(loaded, dict):
            config.update(loaded)
        return config

    def _load_env_vars(self):
        """Apply CMDX_* environment overrides."""
        for env_name, key in self.ENV_OVERRIDES.items():
            value = os.getenv(env_name)
            if value is None or value == "":
                continue
            if key == "verbose":
                self.settings[key] = value.strip().lower() in ("1", "true", "yes", "on")
            else:
                self.settings[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        return self.settings.get(key, default)

    def default_from_os(self) -> OperatingSystem:
        """Configured source OS, or the running OS."""
        configured = self.settings.get("from_os")
        if configured:
            parsed = OperatingSystem.parse(configured)
            if parsed is not None:
                return parsed
        return detect_os()

    def default_to_os(self) -> Optional[OperatingSystem]:
        """Configured target OS, or ``None`` when unset or unparseable."""
        configured = self.settings.get("to_os")
        if not configured:
            return None
        return OperatingSystem.parse(configured)
