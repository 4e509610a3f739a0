from collections.abc import Mapping
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from config.loader import load_config
from config.models import Config
from utils.errors import ConfigError
from utils.logger import logger

DEFAULT_CONFIG_PATH = Path(__file__).parent / "default.yaml"
USER_CONFIG_PATH = Path.home() / ".commitctx" / "config.yaml"
PROJECT_CONFIG_FILENAME = ".commitctx.yaml"


def deep_merge(target: Dict[str, Any], source: Mapping) -> Dict[str, Any]:
    """
    Merges ``source`` into ``target`` key by key, recursing into nested
    mappings. Any other value in ``source`` (lists included) replaces the
    one in ``target``.
    """
    for key, value in source.items():
        current = target.get(key)
        if isinstance(value, Mapping) and isinstance(current, Mapping):
            value = deep_merge(dict(current), value)
        target[key] = value
    return target


def find_project_root(start_dir: Union[str, Path] = ".") -> Optional[Path]:
    """Walks up from ``start_dir`` to the first directory holding a .git entry."""
    start = Path(start_dir).resolve()
    for candidate in (start, *start.parents):
        # Worktrees and submodules use a .git file instead of a directory.
        if (candidate / ".git").exists():
            return candidate
    return None


def find_project_config(start_dir: Union[str, Path] = ".") -> Optional[Path]:
    root = find_project_root(start_dir)
    if root is None:
        return None
    path = root / PROJECT_CONFIG_FILENAME
    return path if path.is_file() else None


def config_layers(custom_config_path: Optional[str] = None, start_dir: Union[str, Path] = ".") -> List[Path]:
    """
    Lists the configuration files to merge, lowest precedence first.

    The packaged defaults come first, then the user file, then the project
    file. A custom path replaces the user and project files.
    """
    if not DEFAULT_CONFIG_PATH.is_file():
        raise ConfigError("Default configuration file not found.")

    if custom_config_path:
        custom = Path(custom_config_path)
        if not custom.is_file():
            raise ConfigError(f"Custom config file not found at: {custom_config_path}")
        logger.info(f"Using custom configuration from: {custom}")
        return [DEFAULT_CONFIG_PATH, custom]

    layers = [DEFAULT_CONFIG_PATH]
    if USER_CONFIG_PATH.is_file():
        layers.append(USER_CONFIG_PATH)
    project_config = find_project_config(start_dir)
    if project_config:
        layers.append(project_config)
    return layers


def _read_layer(path: Path, required: bool) -> Dict[str, Any]:
    logger.info(f"Loading configuration from: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            return load_config(f)
    except (OSError, ConfigError) as e:
        if required:
            raise ConfigError(f"Could not load config at {path}: {e}") from e
        logger.warning(f"Skipping unreadable config at {path}: {e}")
        return {}


def load_and_merge_configs(custom_config_path: Optional[str] = None, start_dir: Union[str, Path] = ".") -> Config:
    """
    Builds the effective configuration from every layer found for ``start_dir``.

    Raises:
        ConfigError: If a required file is missing or unreadable, or if the
            merged values do not validate.
    """
    merged: Dict[str, Any] = {}
    for path in config_layers(custom_config_path, start_dir):
        required = path == DEFAULT_CONFIG_PATH or custom_config_path is not None
        merged = deep_merge(merged, _read_layer(path, required))

    try:
        config = Config(**merged)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Configuration validation failed: {e}") from e
    logger.debug(f"Merged config: {config.model_dump_json(exclude={'model'})}")
    return config
