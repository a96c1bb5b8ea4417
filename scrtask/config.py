"""Configuration loading for scrtask (.scrtask.yml)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .errors import ConfigurationError

CONFIG_FILENAME = ".scrtask.yml"
DEFAULT_FINAL_NAME = "serviceComponents.xml"
DEFAULT_METATYPE_NAME = "metatype.xml"


@dataclass
class TaskConfig:
    """Task settings read from .scrtask.yml."""

    root: Path
    srcdir: Optional[Path] = None
    destdir: Optional[Path] = None
    classpath: List[Path] = field(default_factory=list)
    final_name: str = DEFAULT_FINAL_NAME
    metatype_name: str = DEFAULT_METATYPE_NAME
    generate_accessors: bool = True
    strict_mode: bool = False
    spec_version: Optional[str] = None
    annotation_processors: List[str] = field(default_factory=list)
    includes: List[str] = field(default_factory=list)
    excludes: List[str] = field(default_factory=list)
    default_excludes: bool = True
    properties: Dict[str, str] = field(default_factory=dict)
    generator: Optional[str] = None


def load_config(config_path: Path) -> TaskConfig:
    """Load configuration from disk; a missing file yields defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent

    if not config_file.exists():
        return TaskConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigurationError(f"{config_file.name} must contain a mapping at the root")

    final_name = _as_str(data.get("final_name"))
    metatype_name = _as_str(data.get("metatype_name"))
    generate_accessors = _as_bool(data.get("generate_accessors"))
    strict_mode = _as_bool(data.get("strict_mode"))
    default_excludes = _as_bool(data.get("default_excludes"))

    return TaskConfig(
        root=root,
        srcdir=_as_path(root, data.get("srcdir")),
        destdir=_as_path(root, data.get("destdir")),
        classpath=_as_path_list(root, data.get("classpath")),
        final_name=final_name or DEFAULT_FINAL_NAME,
        metatype_name=metatype_name or DEFAULT_METATYPE_NAME,
        generate_accessors=True if generate_accessors is None else generate_accessors,
        strict_mode=False if strict_mode is None else strict_mode,
        spec_version=_as_str(data.get("spec_version")),
        annotation_processors=_as_str_list(data.get("annotation_processors")),
        includes=_as_str_list(data.get("includes")),
        excludes=_as_str_list(data.get("excludes")),
        default_excludes=True if default_excludes is None else default_excludes,
        properties=_as_str_dict(data.get("properties")),
        generator=_as_str(data.get("generator")),
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_path(root: Path, value: Any) -> Optional[Path]:
    text = _as_str(value)
    if not text:
        return None
    return root / Path(text).expanduser()


def _as_path_list(root: Path, value: Any) -> List[Path]:
    paths: List[Path] = []
    for entry in _as_str_list(value):
        for part in entry.split(os.pathsep):
            if part.strip():
                paths.append(root / Path(part.strip()).expanduser())
    return paths


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "on", "1"}:
            return True
        if lowered in {"false", "no", "off", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


def _as_str_dict(value: Any) -> Dict[str, str]:
    if not isinstance(value, dict):
        return {}
    return {
        str(key): str(item)
        for key, item in value.items()
        if isinstance(item, (str, int, float, bool))
    }


__all__ = ["CONFIG_FILENAME", "TaskConfig", "load_config"]
