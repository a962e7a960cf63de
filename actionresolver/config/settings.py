"""
Resolver Settings

Tunable thresholds of the resolution pipeline, loaded from a JSON config
file through ConfigService.

The defaults are empirically chosen values carried over unchanged; they
have not been calibrated against a test corpus.

Example config.json::

    {
        "matching": {"fuzzy_min_score": 0.5, "candidate_limit": 5},
        "extraction": {"min_confidence": 60},
        "suggestions": {"max_suggestions": 5, "typo_max_distance": 3}
    }
"""

import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from actionresolver.services.config_service import ConfigService

logger = logging.getLogger("ActionResolver.Settings")


@dataclass(frozen=True)
class ResolverSettings:
    # matching
    fuzzy_min_score: float = 0.5
    pattern_base_score: float = 0.85
    pattern_weight: float = 0.10
    candidate_limit: int = 5
    # extraction
    extraction_min_confidence: int = 60
    # suggestions
    max_suggestions: int = 5
    typo_max_distance: int = 3
    category_confidence: int = 60
    category_limit: int = 3
    failure_suggestion_limit: int = 3


# config.json section -> {json key: settings field}
SECTIONS: Dict[str, Dict[str, str]] = {
    "matching": {
        "fuzzy_min_score": "fuzzy_min_score",
        "pattern_base_score": "pattern_base_score",
        "pattern_weight": "pattern_weight",
        "candidate_limit": "candidate_limit",
    },
    "extraction": {
        "min_confidence": "extraction_min_confidence",
    },
    "suggestions": {
        "max_suggestions": "max_suggestions",
        "typo_max_distance": "typo_max_distance",
        "category_confidence": "category_confidence",
        "category_limit": "category_limit",
        "failure_limit": "failure_suggestion_limit",
    },
}

DEFAULT_SETTINGS = ResolverSettings()


def _coerce(name: str, value: Any) -> Any:
    expected = type(getattr(DEFAULT_SETTINGS, name))
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Setting '{name}' must be a number, got {value!r}")
    if expected is int:
        if isinstance(value, float) and not value.is_integer():
            raise ValueError(f"Setting '{name}' must be an integer, got {value!r}")
        return int(value)
    return float(value)


def settings_from_dict(data: Dict[str, Any]) -> ResolverSettings:
    """
    Build settings from a config dictionary (sectioned as in config.json).

    Raises:
        ValueError: If a known key has a non-numeric value
    """
    values: Dict[str, Any] = {}
    for section, body in data.items():
        mapping = SECTIONS.get(section)
        if mapping is None or not isinstance(body, dict):
            logger.warning(f"Ignoring unknown config section '{section}'")
            continue
        for key, value in body.items():
            name = mapping.get(key)
            if name is None:
                logger.warning(f"Ignoring unknown config key '{section}.{key}'")
                continue
            values[name] = _coerce(name, value)
    return ResolverSettings(**values)


def settings_to_dict(settings: ResolverSettings) -> Dict[str, Any]:
    flat = asdict(settings)
    return {
        section: {key: flat[name] for key, name in mapping.items()}
        for section, mapping in SECTIONS.items()
    }


def load_settings(config_path: Optional[Union[str, Path]] = None) -> ResolverSettings:
    """
    Load settings from a JSON config file; a missing file gives defaults.

    Raises:
        ValueError: If the file is not valid JSON or holds bad values
    """
    service = ConfigService(config_path=Path(config_path) if config_path else None)
    if not service.exists():
        logger.debug(f"No config at {service.config_path}; using defaults")
        return DEFAULT_SETTINGS
    return settings_from_dict(service.load())


def save_settings(settings: ResolverSettings, config_path: Union[str, Path]) -> bool:
    service = ConfigService(config_path=Path(config_path))
    return service.save(settings_to_dict(settings))


__all__ = [
    "DEFAULT_SETTINGS",
    "ResolverSettings",
    "load_settings",
    "save_settings",
    "settings_from_dict",
    "settings_to_dict",
]
