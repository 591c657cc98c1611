"""Settings loading and validation for the YAML settings file."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterable
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from jsonschema import ValidationError, validators

from btlockctl.core.errors import ConfigLoadError, ConfigValidationError
from btlockctl.core.model import DEFAULT_CONNECT_TIMEOUT_S, DEFAULT_LOG_LEVEL, Settings

LOGGER = logging.getLogger(__name__)


class UniqueKeyLoader(yaml.SafeLoader):
    """YAML loader that rejects duplicate mapping keys."""


def _construct_mapping(loader: UniqueKeyLoader, node: yaml.Node, deep: bool = False) -> dict[str, Any]:
    mapping: dict[str, Any] = {}
    for key_node, value_node in node.value:
        key = loader.construct_object(key_node, deep=deep)
        if key in mapping:
            raise ConfigValidationError(f"Duplicate key '{key}' in YAML document")
        mapping[key] = loader.construct_object(value_node, deep=deep)
    return mapping


UniqueKeyLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG,
    _construct_mapping,
)


def _load_schema_validator() -> Any:
    schema_text = resources.files("btlockctl.schemas").joinpath("config.schema.json").read_text(
        encoding="utf-8"
    )
    schema = json.loads(schema_text)
    validator_cls = validators.validator_for(schema)
    validator_cls.check_schema(schema)
    return validator_cls(schema)


def config_path() -> Path:
    xdg_config = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return xdg_config / "btlockctl/config.yaml"


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigLoadError(f"Could not read settings file {path}: {exc}") from exc

    try:
        loaded = yaml.load(content, Loader=UniqueKeyLoader)
    except yaml.YAMLError as exc:
        raise ConfigValidationError(f"Invalid YAML in {path}: {exc}") from exc

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigValidationError(f"Settings file {path} must contain a mapping at root")
    return loaded


def _build_settings(doc: dict[str, Any], source: Path) -> Settings:
    validator = _load_schema_validator()
    try:
        validator.validate(doc)
    except ValidationError as exc:
        path = ".".join(str(p) for p in exc.path)
        where = f" ({path})" if path else ""
        raise ConfigValidationError(f"Schema validation failed for {source}{where}: {exc.message}") from exc

    return Settings(
        patterns=merge_patterns(doc.get("devices", [])),
        connect_timeout_s=int(doc.get("connect_timeout_s", DEFAULT_CONNECT_TIMEOUT_S)),
        require_authentication=bool(doc.get("require_authentication", True)),
        log_level=doc.get("log_level", DEFAULT_LOG_LEVEL),
    )


def merge_patterns(*groups: Iterable[str]) -> tuple[str, ...]:
    """Concatenate pattern groups, dropping empties and later duplicates."""
    merged: list[str] = []
    for group in groups:
        for pattern in group:
            if pattern and pattern not in merged:
                merged.append(pattern)
    return tuple(merged)


def load_settings(path: Path | None = None) -> Settings:
    source = path or config_path()
    if not source.exists():
        LOGGER.debug("No settings file at %s; using defaults", source)
        return Settings()
    return _build_settings(_read_yaml(source), source)
