"""
Configuration management for BTU.

Provides a hierarchical configuration system with sensible defaults.
Supports both global (~/.config/btu/config.toml) and local (btu.toml)
configurations. Saved hunt/test time ranges live here too, so a recurring
window does not have to be typed on every run:

    timezone = "UTC"

    [hunts.Hunt3]
    start = "2024-01-01T00:00"
    end = "2024-01-02T00:00"
"""
import os
import tomli
import tomli_w
from pathlib import Path
from typing import Dict, Any, Optional, Tuple
from dataclasses import dataclass, field, asdict

from btu.constants import DEFAULT_OUTPUT_TEMPLATE
from btu.models import SlotGroup


@dataclass
class BtuConfig:
    """
    BTU configuration with sensible defaults.

    Configuration hierarchy (highest to lowest priority):
    1. Command-line arguments
    2. Environment variables (BTU_*)
    3. Explicit config file (--config)
    4. Local config file (./btu.toml, ./.bturc or ./.btu/config.toml)
    5. User config file (~/.config/btu/config.toml)
    6. System defaults
    """

    # Time handling
    timezone: Optional[str] = field(default=None)  # None = host local time
    strict_slots: bool = field(default=False)  # Hunt1 must not match Hunt11

    # Output
    output_dir: str = field(default=".")
    output_template: str = field(default=DEFAULT_OUTPUT_TEMPLATE)

    # Display settings
    output_format: str = field(default="table")  # table, json, plain, urls
    color_output: bool = field(default=True)

    # Saved time ranges: slot key -> {"start": ..., "end": ...}
    hunts: Dict[str, Dict[str, str]] = field(default_factory=dict)
    tests: Dict[str, Dict[str, str]] = field(default_factory=dict)

    # Advanced
    log_level: str = field(default="WARNING")

    @classmethod
    def load(cls, config_file: Optional[Path] = None) -> "BtuConfig":
        """
        Load configuration from files and environment.

        Args:
            config_file: Specific config file to load (overrides search)

        Returns:
            Merged configuration object
        """
        config = cls()

        user_config_path = Path.home() / ".config" / "btu" / "config.toml"
        if user_config_path.exists():
            config._merge(cls._load_toml(user_config_path))

        # First local config found wins
        local_paths = [
            Path.cwd() / "btu.toml",
            Path.cwd() / ".bturc",
            Path.cwd() / ".btu" / "config.toml"
        ]

        for path in local_paths:
            if path.exists():
                config._merge(cls._load_toml(path))
                break

        if config_file and config_file.exists():
            config._merge(cls._load_toml(config_file))

        config._apply_env_vars()
        config._expand_paths()

        return config

    @staticmethod
    def _load_toml(path: Path) -> Dict[str, Any]:
        """Load TOML configuration file."""
        with open(path, "rb") as f:
            return tomli.load(f)

    def _merge(self, data: Dict[str, Any]):
        """Merge configuration data into this instance."""
        for key, value in data.items():
            if hasattr(self, key):
                if isinstance(getattr(self, key), dict) and isinstance(value, dict):
                    # Slot tables merge per slot
                    getattr(self, key).update(value)
                else:
                    setattr(self, key, value)

    def _apply_env_vars(self):
        """Apply environment variables with BTU_ prefix."""
        prefix = "BTU_"
        for key, value in os.environ.items():
            if key.startswith(prefix):
                config_key = key[len(prefix):].lower()
                if hasattr(self, config_key):
                    current_value = getattr(self, config_key)
                    if isinstance(current_value, bool):
                        setattr(self, config_key, value.lower() in ("true", "1", "yes"))
                    elif isinstance(current_value, dict):
                        continue  # slot tables only come from files
                    else:
                        setattr(self, config_key, value)

    def _expand_paths(self):
        """Expand ~ and environment variables in paths."""
        value = self.output_dir
        if isinstance(value, str):
            self.output_dir = os.path.expanduser(os.path.expandvars(value))

    def save(self, path: Optional[Path] = None):
        """
        Save current configuration to TOML file.

        Args:
            path: Path to save to (defaults to user config)
        """
        if path is None:
            path = Path.home() / ".config" / "btu" / "config.toml"

        path.parent.mkdir(parents=True, exist_ok=True)

        # TOML has no null; unset values are left out
        data = {k: v for k, v in asdict(self).items() if v is not None}
        with open(path, "wb") as f:
            tomli_w.dump(data, f)

    def slot_groups(self) -> Tuple[SlotGroup, SlotGroup]:
        """
        Build hunt and test slot groups from the saved ranges.

        Raises:
            KeyError: If the config names a slot outside Hunt1-7 / Test1-2
        """
        hunts = SlotGroup.hunts()
        tests = SlotGroup.tests()
        hunts.update_from(self.hunts)
        tests.update_from(self.tests)
        return hunts, tests

    def get_output_path(self, file_name: str) -> Path:
        """Resolve an output file name against output_dir."""
        return Path(self.output_dir) / file_name


# Global configuration instance
_config: Optional[BtuConfig] = None


def get_config(reload: bool = False, config_file: Optional[Path] = None) -> BtuConfig:
    """
    Get the global configuration instance.

    Args:
        reload: Force reload configuration from files
        config_file: Specific config file to load

    Returns:
        Global configuration instance
    """
    global _config
    if _config is None or reload:
        _config = BtuConfig.load(config_file)
    return _config


def init_config(config_file: Optional[Path] = None, **kwargs) -> BtuConfig:
    """
    Initialize configuration with command-line overrides.

    Args:
        config_file: Config file given on the command line
        **kwargs: Other configuration overrides; None values are ignored

    Returns:
        Configured instance
    """
    config = get_config(reload=config_file is not None, config_file=config_file)

    for key, value in kwargs.items():
        if hasattr(config, key) and value is not None:
            setattr(config, key, value)

    return config
