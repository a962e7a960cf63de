"""
Tests for ConfigService and ResolverSettings loading.
"""

import json
import logging

import pytest

from actionresolver.config.settings import (
    DEFAULT_SETTINGS,
    ResolverSettings,
    load_settings,
    save_settings,
    settings_from_dict,
)
from actionresolver.services.config_service import ConfigService


def test_missing_file_gives_defaults(tmp_path):
    assert load_settings(tmp_path / "missing.json") == DEFAULT_SETTINGS


def test_defaults_match_documented_values():
    s = ResolverSettings()
    assert (s.fuzzy_min_score, s.pattern_base_score, s.pattern_weight) == (0.5, 0.85, 0.10)
    assert (s.extraction_min_confidence, s.candidate_limit) == (60, 5)
    assert (s.typo_max_distance, s.category_confidence, s.category_limit) == (3, 60, 3)


def test_sectioned_values_are_loaded(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "matching": {"fuzzy_min_score": 0.6, "candidate_limit": 3},
        "extraction": {"min_confidence": 75},
        "suggestions": {"failure_limit": 2},
    }))

    settings = load_settings(path)
    assert settings.fuzzy_min_score == 0.6
    assert settings.candidate_limit == 3
    assert settings.extraction_min_confidence == 75
    assert settings.failure_suggestion_limit == 2
    assert settings.max_suggestions == DEFAULT_SETTINGS.max_suggestions


def test_unknown_keys_are_ignored_with_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="ActionResolver.Settings"):
        settings = settings_from_dict({"matching": {"shiny": 1}, "colors": {}})
    assert settings == DEFAULT_SETTINGS
    assert "matching.shiny" in caplog.text
    assert "colors" in caplog.text


def test_wrong_types_raise_value_error():
    with pytest.raises(ValueError, match="fuzzy_min_score"):
        settings_from_dict({"matching": {"fuzzy_min_score": "high"}})
    with pytest.raises(ValueError, match="candidate_limit"):
        settings_from_dict({"matching": {"candidate_limit": 2.5}})
    with pytest.raises(ValueError):
        settings_from_dict({"matching": {"candidate_limit": True}})


def test_integer_like_floats_are_accepted():
    assert settings_from_dict({"matching": {"candidate_limit": 4.0}}).candidate_limit == 4


def test_invalid_json_raises(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{broken")
    with pytest.raises(ValueError):
        load_settings(path)


def test_save_then_load(tmp_path):
    path = tmp_path / "nested" / "config.json"
    custom = ResolverSettings(fuzzy_min_score=0.7, max_suggestions=8)
    assert save_settings(custom, path) is True
    assert load_settings(path) == custom


def test_config_service_dot_notation(tmp_path):
    service = ConfigService(config_path=tmp_path / "c.json")
    service.set("matching.fuzzy_min_score", 0.4)
    assert service.get("matching.fuzzy_min_score") == 0.4
    assert service.get("matching.unknown", "dflt") == "dflt"
    assert service.save() is True

    reloaded = ConfigService(config_path=tmp_path / "c.json")
    assert reloaded.load() == {"matching": {"fuzzy_min_score": 0.4}}


def test_config_service_rejects_non_object(tmp_path):
    path = tmp_path / "c.json"
    path.write_text("[1, 2]")
    with pytest.raises(ValueError):
        ConfigService(config_path=path).load()


def test_config_service_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        ConfigService(config_path=tmp_path / "nope.json").load()


def test_config_path_from_environment(tmp_path, monkeypatch):
    path = tmp_path / "env.json"
    path.write_text(json.dumps({"suggestions": {"max_suggestions": 2}}))
    monkeypatch.setenv("ACTIONRESOLVER_CONFIG", str(path))

    assert ConfigService().config_path == path
    assert load_settings().max_suggestions == 2


def test_empty_config_file_gives_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("")
    assert load_settings(path) == DEFAULT_SETTINGS
