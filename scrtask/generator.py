"""Descriptor generator contract and discovery utilities."""

from __future__ import annotations

import importlib
import inspect
from importlib import metadata
from pathlib import Path
from typing import Iterable, List, Protocol, runtime_checkable

from .errors import ConfigurationError
from .logging import TaskLog
from .options import GenerationOptions
from .project import ProjectDescriptor

_ENTRY_POINT_GROUP = "scrtask.generators"


@runtime_checkable
class DescriptorGenerator(Protocol):
    """Writes the component descriptor and metatype file for a project.

    Implementations raise ``DescriptorError`` for problems in the scanned
    sources and ``DescriptorFailure`` when generation cannot be attempted.
    """

    def generate(
        self,
        project: ProjectDescriptor,
        options: GenerationOptions,
        output_directory: Path,
        descriptor_file_name: str,
        metadata_file_name: str,
    ) -> None:
        """Generate descriptor files into ``output_directory``."""


def load_generator(reference: str | None = None, log: TaskLog | None = None) -> DescriptorGenerator:
    """Return a generator from a ``module:attr`` reference or the installed entry point."""
    if reference:
        obj = _import_reference(reference)
        return _coerce_generator(obj, reference, log)

    entries = list(_iter_entry_points())
    if not entries:
        raise ConfigurationError(
            f"No descriptor generator installed (entry point group '{_ENTRY_POINT_GROUP}')"
        )
    if len(entries) > 1:
        names = ", ".join(sorted(entry.name for entry in entries))
        raise ConfigurationError(f"Multiple descriptor generators installed: {names}")

    entry = entries[0]
    try:
        loaded = entry.load()
    except Exception as exc:  # pragma: no cover - depends on installed plugins
        raise ConfigurationError(f"Failed to load generator entry point '{entry.name}': {exc}") from exc
    return _coerce_generator(loaded, entry.name, log)


def _import_reference(reference: str) -> object:
    module_name, sep, attr = reference.partition(":")
    if not sep or not module_name or not attr:
        raise ConfigurationError(f"Generator reference must look like 'module:attr': {reference}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigurationError(f"Unable to import generator module '{module_name}': {exc}") from exc
    obj: object = module
    for part in attr.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise ConfigurationError(f"Generator '{reference}' not found") from exc
    return obj


def _coerce_generator(obj: object, name: str, log: TaskLog | None) -> DescriptorGenerator:
    if isinstance(obj, DescriptorGenerator) and not isinstance(obj, type):
        return obj
    if callable(obj):
        instance = obj(log=log) if _accepts_log(obj) else obj()
        if isinstance(instance, DescriptorGenerator):
            return instance
    raise ConfigurationError(f"Generator '{name}' must be a DescriptorGenerator or a factory for one")


def _accepts_log(factory: object) -> bool:
    try:
        signature = inspect.signature(factory)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return False
    return "log" in signature.parameters


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points(group=_ENTRY_POINT_GROUP)


def available_generators() -> List[str]:
    return sorted(entry.name for entry in _iter_entry_points())


__all__ = ["DescriptorGenerator", "available_generators", "load_generator"]
