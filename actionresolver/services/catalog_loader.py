"""
Catalog Loader

Builds an ActionCatalog from a YAML file, for hosts (and the CLI) that
declare their actions as data instead of registering them in code.

Example catalog.yaml::

    containers:
      Blog: /blog

    actions:
      - id: open_blog
        name: open blog
        description: Navigate to the blog
        examples: ["open blog", "go to blog"]
        category: navigation
        route: /blog
      - id: search_posts
        name: search posts
        examples: ["search posts {query}"]
        scope: Blog
        handler: "myapp.blog:search_posts"
"""

import importlib
import logging
from dataclasses import fields
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

import yaml

from actionresolver.core.actions import ActionDescriptor
from actionresolver.core.catalog import ActionCatalog, CatalogError

logger = logging.getLogger("ActionResolver.CatalogLoader")

# Fields that cannot come from a data file.
_RUNTIME_FIELDS = {"instance", "invocation"}
_LIST_FIELDS = {"examples", "pages", "keywords"}


def load_handler(dotted: str) -> Callable[..., Any]:
    """
    Resolve a ``"package.module:attr.path"`` string to a callable.

    Raises:
        CatalogError: If the module or attribute cannot be found, or is
            not callable
    """
    module_name, sep, attr_path = dotted.partition(":")
    if not sep or not module_name or not attr_path:
        raise CatalogError(f"Invalid handler '{dotted}'; expected 'module:attribute'")
    try:
        target: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise CatalogError(f"Cannot import handler module '{module_name}': {e}") from e
    for part in attr_path.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as e:
            raise CatalogError(f"Handler '{dotted}' not found: {e}") from e
    if not callable(target):
        raise CatalogError(f"Handler '{dotted}' is not callable")
    return target


def action_from_dict(data: Dict[str, Any]) -> ActionDescriptor:
    """
    Build a descriptor from one ``actions`` entry.

    Raises:
        CatalogError: If the entry is not a mapping, lacks ``id``/``name``,
            or holds an invalid value
    """
    if not isinstance(data, dict):
        raise CatalogError(f"Action entry must be a mapping, got {type(data).__name__}")
    if not data.get("id") or not data.get("name"):
        raise CatalogError(f"Action entry needs 'id' and 'name': {data!r}")

    known = {f.name for f in fields(ActionDescriptor)} - _RUNTIME_FIELDS
    values: Dict[str, Any] = {}
    for key, value in data.items():
        if key not in known:
            logger.warning(f"Ignoring unknown field '{key}' in action {data['id']}")
            continue
        if key in _LIST_FIELDS and isinstance(value, str):
            value = [value]
        values[key] = value

    handler = values.get("handler")
    if isinstance(handler, str):
        values["handler"] = load_handler(handler)

    try:
        return ActionDescriptor(**values)
    except ValueError as e:
        raise CatalogError(f"Invalid action {data['id']}: {e}") from e


def parse_catalog(data: Any, catalog: Optional[ActionCatalog] = None) -> ActionCatalog:
    """
    Register the containers and actions of a decoded catalog document.

    Args:
        data: Decoded YAML (mapping with ``actions`` and ``containers``)
        catalog: Catalog to fill (a new one when None)

    Returns:
        The filled catalog
    """
    catalog = catalog if catalog is not None else ActionCatalog()
    if data is None:
        return catalog
    if not isinstance(data, dict):
        raise CatalogError("Catalog file must contain a mapping")

    containers = data.get("containers") or {}
    if not isinstance(containers, dict):
        raise CatalogError("'containers' must map container ids to routes")
    for container_id, route in containers.items():
        catalog.register_container(str(container_id), str(route))

    actions = data.get("actions") or []
    if not isinstance(actions, list):
        raise CatalogError("'actions' must be a list")
    for entry in actions:
        catalog.register(action_from_dict(entry))
    return catalog


def load_catalog_file(
    path: Union[str, Path], catalog: Optional[ActionCatalog] = None
) -> ActionCatalog:
    """
    Load a YAML catalog file.

    Raises:
        FileNotFoundError: If the file does not exist
        CatalogError: If the file is not valid YAML or holds bad entries
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Catalog file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise CatalogError(f"Catalog file is not valid YAML: {e}") from e

    catalog = parse_catalog(data, catalog)
    logger.info(f"Loaded {len(catalog)} action(s) from {path}")
    return catalog
