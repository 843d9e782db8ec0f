"""Configuration management for the CLI."""

import os
from pathlib import Path
from typing import Any

import yaml

DEFAULTS: dict[str, Any] = {
    "data_dir": str(Path.home() / "Zotero"),
    "zotero_command": "zotero",
    "max_rows": 18,
    "snapshot": True,
}


class Config:
    """Configuration management for the CLI application."""

    @staticmethod
    def from_file(path: Path) -> dict[str, Any]:
        """Load configuration from a YAML file."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file: {e}")
        except OSError as e:
            raise ValueError(f"Error reading config file: {e}")

        if not isinstance(data, dict):
            raise ValueError(f"Config file must contain a mapping: {path}")
        return data

    @staticmethod
    def get_config_paths() -> list[Path]:
        """Get the default configuration file paths to check."""
        paths = []

        # User config
        xdg_config_home = Path(
            os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
        )
        paths.append(xdg_config_home / "zotfind" / "config.yaml")

        # Project config
        paths.append(Path(".zotfind.yaml"))
        paths.append(Path("zotfind.yaml"))

        return paths

    @staticmethod
    def merge_configs(*configs: dict[str, Any]) -> dict[str, Any]:
        """Merge configuration dictionaries; later keys replace earlier ones."""
        result: dict[str, Any] = {}
        for config in configs:
            result.update(config)
        return result


def get_config_paths() -> list[Path]:
    """Get configuration paths in precedence order."""
    return Config.get_config_paths()


def load_config(extra: Path | None = None) -> dict[str, Any]:
    """Load configuration from defaults, files and environment variables.

    Args:
        extra: Additional config file, applied after the default locations

    Raises:
        ValueError: If a config file exists but cannot be parsed
    """
    config = dict(DEFAULTS)

    # Last one wins for conflicting keys
    paths = [path for path in get_config_paths() if path.exists()]
    if extra is not None:
        paths.append(extra)

    for path in paths:
        config = Config.merge_configs(config, Config.from_file(path))

    # Override with environment variables
    env_overrides: dict[str, Any] = {}
    if data_dir := os.environ.get("ZOTFIND_DATA_DIR"):
        env_overrides["data_dir"] = data_dir
    if command := os.environ.get("ZOTFIND_ZOTERO_COMMAND"):
        env_overrides["zotero_command"] = command

    return Config.merge_configs(config, env_overrides)


def get_data_dir(data_dir: Path | None, config: dict[str, Any]) -> Path:
    """Get the Zotero data directory.

    A directory given on the command line wins over the configuration.
    """
    if data_dir:
        return Path(data_dir).expanduser()
    return Path(config.get("data_dir") or DEFAULTS["data_dir"]).expanduser()

