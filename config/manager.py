from typing import Any, Optional, TypeVar

from config.logic import load_and_merge_configs
from config.models import Config

T = TypeVar("T")


class ConfigKeys:
    INCLUDE_REPO_CONTEXT = "context.include_repo_context"
    EXCLUDE_LOCKFILES = "context.exclude_lockfiles"
    MAX_DIFF_CHARS = "context.max_diff_chars"
    RECENT_COMMITS = "context.recent_commits"
    COMMIT_PROMPT = "prompt.template"
    API_KEY = "model.api_key"


class ConfigurationManager:
    """
    Process-wide access to the merged configuration.

    The configuration is loaded from disk the first time a value is read,
    unless one was handed in explicitly.
    """

    _instance: Optional["ConfigurationManager"] = None

    def __init__(self, config: Optional[Config] = None):
        self._config = config

    @classmethod
    def get_instance(cls) -> "ConfigurationManager":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drops the process-wide instance so the next access reloads."""
        cls._instance = None

    @property
    def config(self) -> Config:
        if self._config is None:
            self._config = load_and_merge_configs()
        return self._config

    def load(self, custom_config_path: Optional[str] = None, start_dir: str = ".") -> Config:
        self._config = load_and_merge_configs(custom_config_path=custom_config_path, start_dir=start_dir)
        return self._config

    def get_config(self, key: str, default: Optional[T] = None) -> Any:
        """
        Looks up a dotted key such as ``context.max_diff_chars``.

        Returns ``default`` when the key is unknown or its value is unset.
        """
        node: Any = self.config
        for part in key.split("."):
            node = getattr(node, part, None)
            if node is None:
                return default
        return node
