"""Schema helpers for the application settings file."""

from __future__ import annotations

import os
from copy import deepcopy
from typing import Any

from jsonschema import Draft202012Validator

SETTINGS_SCHEMA: dict[str, Any] = {
    "$id": "bibliodesk/settings.schema.json",
    "type": "object",
    "required": ["schema", "api", "ui", "logging"],
    "properties": {
        "schema": {"const": "bibliodesk/settings@1"},
        "api": {
            "type": "object",
            "properties": {
                "base_url": {"type": "string"},
                "use_mock": {"type": "boolean"},
            },
            "additionalProperties": True,
        },
        "ui": {
            "type": "object",
            "properties": {
                "page_size": {"type": "integer", "minimum": 1},
                "window_width": {"type": "number", "minimum": 320},
                "window_height": {"type": "number", "minimum": 240},
                "maximize": {"type": "boolean"},
                "styles_dirs": {"type": "array", "items": {"type": "string"}},
            },
            "additionalProperties": True,
        },
        "logging": {
            "type": "object",
            "properties": {
                "level": {
                    "type": "string",
                    "enum": ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                },
            },
            "additionalProperties": True,
        },
    },
    "additionalProperties": True,
}

DEFAULT_SETTINGS: dict[str, Any] = {
    "schema": "bibliodesk/settings@1",
    "api": {
        "base_url": "http://localhost:8080",
        "use_mock": True,
    },
    "ui": {
        "page_size": 10,
        "window_width": 1000,
        "window_height": 600,
        "maximize": False,
        "styles_dirs": [],
    },
    "logging": {
        "level": "INFO",
    },
}

_validator = Draft202012Validator(SETTINGS_SCHEMA)

_SECTIONS = ("api", "ui", "logging")


def _normalise_dirs(entries: list[Any]) -> list[str]:
    normalised: list[str] = []
    for entry in entries:
        try:
            path = os.fspath(entry)
        except TypeError:
            continue
        normalised.append(str(path))
    return normalised


def merge_with_defaults(data: dict[str, Any] | None) -> dict[str, Any]:
    """Merge *data* with :data:`DEFAULT_SETTINGS` and validate the result."""

    merged = deepcopy(DEFAULT_SETTINGS)
    if data:
        for key, value in data.items():
            if key in _SECTIONS and isinstance(value, dict):
                target = merged.setdefault(key, {})
                for sub_key, sub_value in value.items():
                    if key == "ui" and sub_key == "styles_dirs" and isinstance(sub_value, list):
                        sub_value = _normalise_dirs(sub_value)
                    target[sub_key] = sub_value
                continue
            merged[key] = value
    _validator.validate(merged)
    return merged


def validate_settings(data: dict[str, Any]) -> None:
    """Validate *data* against the settings schema."""

    _validator.validate(data)


__all__ = ["DEFAULT_SETTINGS", "SETTINGS_SCHEMA", "merge_with_defaults", "validate_settings"]
