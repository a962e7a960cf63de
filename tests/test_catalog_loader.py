"""
Tests for loading action catalogs from YAML.
"""

import json
import textwrap

import pytest

from actionresolver.core.actions import DangerLevel, DirectCall, Navigation
from actionresolver.core.catalog import ActionCatalog, CatalogError
from actionresolver.services.catalog_loader import (
    action_from_dict,
    load_catalog_file,
    load_handler,
    parse_catalog,
)


CATALOG_YAML = textwrap.dedent("""
    containers:
      Blog: /blog

    actions:
      - id: open_blog
        name: open blog
        description: Navigate to the blog
        examples: ["open blog", "go to blog"]
        category: navigation
        route: /blog
      - id: dump_json
        name: dump json
        examples: dump json {value}
        scope: Blog
        handler: "json:dumps"
      - id: purge_cache
        name: purge cache
        handler: "json:dumps"
        danger_level: destructive
""")


def write(tmp_path, text, name="catalog.yaml"):
    path = tmp_path / name
    path.write_text(text)
    return path


def test_load_catalog_file(tmp_path):
    catalog = load_catalog_file(write(tmp_path, CATALOG_YAML))

    assert len(catalog) == 3
    assert catalog.route_for("Blog") == "/blog"

    open_blog = catalog.get("open_blog")
    assert isinstance(open_blog.invocation, Navigation)
    assert open_blog.invocation.target == "/blog"

    dump = catalog.get("dump_json")
    assert dump.handler is json.dumps
    assert isinstance(dump.invocation, DirectCall)
    assert dump.examples == ["dump json {value}"]

    purge = catalog.get("purge_cache")
    assert purge.danger_level is DangerLevel.DESTRUCTIVE
    assert purge.effective_requires_approval


def test_load_into_existing_catalog(tmp_path):
    catalog = ActionCatalog()
    result = load_catalog_file(write(tmp_path, CATALOG_YAML), catalog)
    assert result is catalog
    assert "open_blog" in catalog


def test_empty_file_gives_empty_catalog(tmp_path):
    assert len(load_catalog_file(write(tmp_path, ""))) == 0


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_catalog_file(tmp_path / "missing.yaml")


def test_invalid_yaml(tmp_path):
    with pytest.raises(CatalogError):
        load_catalog_file(write(tmp_path, "actions: [unclosed"))


def test_document_must_be_mapping():
    with pytest.raises(CatalogError):
        parse_catalog(["not", "a", "mapping"])
    with pytest.raises(CatalogError):
        parse_catalog({"actions": {"id": "x"}})


def test_action_needs_id_and_name():
    with pytest.raises(CatalogError):
        action_from_dict({"name": "no id"})
    with pytest.raises(CatalogError):
        action_from_dict({"id": "no_name"})


def test_invalid_danger_level():
    with pytest.raises(CatalogError):
        action_from_dict({"id": "x", "name": "x", "danger_level": "spicy"})


def test_unknown_fields_are_ignored():
    action = action_from_dict({"id": "x", "name": "x", "colour": "red", "instance": object()})
    assert action.instance is None
    assert not hasattr(action, "colour")


def test_load_handler_errors():
    assert load_handler("json:dumps") is json.dumps
    with pytest.raises(CatalogError):
        load_handler("json")
    with pytest.raises(CatalogError):
        load_handler("json:no_such_function")
    with pytest.raises(CatalogError):
        load_handler("no_such_module_for_tests:run")
    with pytest.raises(CatalogError):
        load_handler("json:__name__")
