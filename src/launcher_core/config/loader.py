"""Layered configuration: YAML file, then ``.env``, then ``LAUNCHER__`` environment variables."""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import Any, Iterator, Mapping, MutableMapping, Optional, get_origin

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel

from launcher_core.config.models import AppConfig, ConfigLoadRequest

logger = logging.getLogger(__name__)

KeyPath = tuple[str, ...]


def _iter_leaf_fields(model: type[BaseModel], prefix: KeyPath = ()) -> Iterator[tuple[KeyPath, Any]]:
    for name, field in model.model_fields.items():
        annotation = field.annotation
        if isinstance(annotation, type) and issubclass(annotation, BaseModel):
            yield from _iter_leaf_fields(annotation, (*prefix, name))
        else:
            yield (*prefix, name), annotation


_LEAF_FIELDS: dict[KeyPath, Any] = dict(_iter_leaf_fields(AppConfig))
KNOWN_KEY_PATHS: frozenset[KeyPath] = frozenset(_LEAF_FIELDS)
# Dict-typed fields such as logging.loggers accept one extra key segment.
MAPPING_KEY_PATHS: frozenset[KeyPath] = frozenset(
    path for path, annotation in _LEAF_FIELDS.items() if get_origin(annotation) is dict
)


def _load_yaml(path: Path, example_path: Path) -> dict[str, Any]:
    if not path.exists() and example_path.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(example_path, path)
        logger.info("Default config written. path=%s source=%s", path, example_path)

    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise FileNotFoundError(f"Config file not found: {path}") from e

    data = yaml.safe_load(raw) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Top-level YAML must be a mapping, got: {type(data).__name__}")
    return data


def _override_key_path(env_var_name: str, env_prefix: str) -> KeyPath:
    segments = tuple(part.lower() for part in env_var_name[len(env_prefix) :].split("__") if part)
    if segments not in KNOWN_KEY_PATHS and segments[:-1] not in MAPPING_KEY_PATHS:
        raise KeyError(f"Unknown configuration key path: {'.'.join(segments) or env_var_name}")
    return segments


def _assign(config: MutableMapping[str, Any], path: KeyPath, value: str) -> None:
    section = config
    for segment in path[:-1]:
        # Sections missing from the YAML can still be overridden from the environment.
        section = section.setdefault(segment, {})
        if not isinstance(section, dict):
            raise TypeError(f"Configuration key path does not point to a mapping: {'.'.join(path)}")
    section[path[-1]] = value


def apply_env_overrides(
    config: MutableMapping[str, Any],
    env_prefix: str,
    environ: Optional[Mapping[str, str]] = None,
) -> None:
    """Write every ``<prefix>SECTION__KEY`` variable into ``config``; values stay strings until validation."""
    environ = os.environ if environ is None else environ
    for name, value in environ.items():
        if name.startswith(env_prefix):
            _assign(config, _override_key_path(name, env_prefix), value)


class YamlConfigLoader:
    async def load(self, request: ConfigLoadRequest = ConfigLoadRequest()) -> AppConfig:
        config = _load_yaml(Path(request.yaml_path), Path(request.example_path))

        if request.dotenv_path is not None and Path(request.dotenv_path).exists():
            load_dotenv(dotenv_path=request.dotenv_path, override=False)

        apply_env_overrides(config, request.env_prefix)
        return AppConfig.model_validate(config)
