"""
Configuration Service

JSON-backed store for the resolver's tunables. The file is organized in
sections ("matching", "extraction", "suggestions") and values are
addressed as ``"section.key"``.

The file location is, in order: the path passed in, the
``ACTIONRESOLVER_CONFIG`` environment variable, ``~/.actionresolver/config.json``.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

logger = logging.getLogger("ActionResolver.ConfigService")

CONFIG_ENV_VAR = "ACTIONRESOLVER_CONFIG"
DEFAULT_CONFIG_PATH = Path.home() / ".actionresolver" / "config.json"


def default_config_path() -> Path:
    override = os.environ.get(CONFIG_ENV_VAR)
    return Path(override).expanduser() if override else DEFAULT_CONFIG_PATH


class ConfigService:
    """
    Reads and writes one JSON config file.

    Nothing is read at construction time; call ``load()`` explicitly so a
    broken file surfaces as an error where the caller can report it.
    """

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        self.config_path = Path(config_path) if config_path else default_config_path()
        self._data: Dict[str, Any] = {}

    def exists(self) -> bool:
        return self.config_path.is_file()

    def load(self) -> Dict[str, Any]:
        """
        Read the file into memory.

        Returns:
            Copy of the decoded document

        Raises:
            FileNotFoundError: If there is no file at ``config_path``
            ValueError: If the file is not a JSON object
        """
        if not self.exists():
            raise FileNotFoundError(f"Config file not found at: {self.config_path}")

        text = self.config_path.read_text(encoding="utf-8")
        try:
            document = json.loads(text) if text.strip() else {}
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in {self.config_path}: {e}")
            raise ValueError(f"Invalid JSON in {self.config_path}: {e}") from e
        if not isinstance(document, dict):
            raise ValueError(f"{self.config_path} must hold a JSON object, got {type(document).__name__}")

        self._data = document
        logger.debug(f"Loaded config sections {sorted(document)} from {self.config_path}")
        return dict(self._data)

    def save(self, data: Optional[Dict[str, Any]] = None) -> bool:
        """
        Write the in-memory document (or ``data``, which replaces it).

        Returns:
            False if the file could not be written
        """
        if data is not None:
            self._data = data
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            self.config_path.write_text(json.dumps(self._data, indent=4) + "\n", encoding="utf-8")
        except OSError as e:
            logger.error(f"Could not write {self.config_path}: {e}")
            return False
        logger.info(f"Saved config to {self.config_path}")
        return True

    def get(self, key: str, default: Any = None) -> Any:
        """Value at a dotted path such as ``"matching.fuzzy_min_score"``."""
        node: Any = self._data
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return default if node is None else node

    def set(self, key: str, value: Any) -> None:
        """Store ``value`` at a dotted path, creating sections as needed."""
        *sections, leaf = key.split(".")
        node = self._data
        for part in sections:
            child = node.get(part)
            if not isinstance(child, dict):
                child = node[part] = {}
            node = child
        node[leaf] = value

    def get_all(self) -> Dict[str, Any]:
        return dict(self._data)
