"""Classpath handling: dependency resolution and class-loading contexts."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from .logging import get_logger
from .models import DependencyArtifact

_LOGGER = get_logger("classpath")

PathLike = Union[str, os.PathLike]


class Classpath:
    """Ordered, de-duplicated list of classpath entries."""

    def __init__(self, entries: Iterable[PathLike] | None = None) -> None:
        self._entries: List[Path] = []
        if entries is not None:
            for entry in entries:
                self.add(entry)

    @classmethod
    def parse(cls, value: str) -> "Classpath":
        """Build a classpath from an ``os.pathsep`` separated string."""
        classpath = cls()
        classpath.add(value)
        return classpath

    def add(self, entry: "PathLike | Classpath") -> None:
        if isinstance(entry, Classpath):
            for item in entry:
                self._append(item)
            return
        if isinstance(entry, str):
            for part in entry.split(os.pathsep):
                if part.strip():
                    self._append(Path(part.strip()))
            return
        self._append(Path(entry))

    def _append(self, path: Path) -> None:
        path = path.expanduser().absolute()
        if path not in self._entries:
            self._entries.append(path)

    def entries(self) -> List[Path]:
        return list(self._entries)

    def __iter__(self) -> Iterator[Path]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __str__(self) -> str:
        return os.pathsep.join(str(entry) for entry in self._entries)


def resolve_dependencies(entries: Iterable[PathLike]) -> List[DependencyArtifact]:
    """Return the entries that currently exist as regular files, in order."""
    return [DependencyArtifact(path=Path(entry)) for entry in entries if Path(entry).is_file()]


@dataclass(eq=False)
class ClassLoadingContext:
    """Artifact locations a generator may load compiled classes from.

    The context is opaque to scrtask; it is handed to the generator as-is and
    closed once generation is over.
    """

    locations: Tuple[Path, ...] = ()
    parent: Optional["ClassLoadingContext"] = None
    closed: bool = field(default=False, init=False)

    @classmethod
    def system(cls) -> "ClassLoadingContext":
        """Context of the running interpreter, built from ``sys.path``."""
        locations = tuple(Path(entry) for entry in sys.path if entry)
        return cls(locations=locations)

    def search_path(self) -> List[Path]:
        """Locations in lookup order, parent first."""
        if self.closed:
            raise RuntimeError("Class-loading context has been closed")
        inherited = self.parent.search_path() if self.parent is not None else []
        return inherited + [location for location in self.locations if location not in inherited]

    def close(self) -> None:
        self.locations = ()
        self.parent = None
        self.closed = True

    def __enter__(self) -> "ClassLoadingContext":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def create_class_loader(
    classpath: Classpath, parent: ClassLoadingContext | None = None
) -> ClassLoadingContext:
    """Build a context over the existing classpath entries, files and directories alike."""
    _LOGGER.debug("Using classes from: %s", classpath)
    locations = tuple(entry for entry in classpath if entry.exists())
    return ClassLoadingContext(locations=locations, parent=parent)


__all__ = [
    "ClassLoadingContext",
    "Classpath",
    "create_class_loader",
    "resolve_dependencies",
]
