"""Project model handed to the descriptor generator."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence, Tuple

from .classpath import ClassLoadingContext
from .errors import ConfigurationError
from .models import DependencyArtifact, SourceUnit


@dataclass(frozen=True)
class ProjectDescriptor:
    """Everything the generator needs to know about the project being built."""

    dependencies: Tuple[DependencyArtifact, ...]
    sources: Tuple[SourceUnit, ...]
    classes_directory: Path
    class_loader: ClassLoadingContext


def build_project(
    dependencies: Sequence[DependencyArtifact],
    sources: Sequence[SourceUnit],
    classes_directory: Path | str | None,
    class_loader: ClassLoadingContext,
) -> ProjectDescriptor:
    if classes_directory is None or not str(classes_directory):
        raise ConfigurationError("destdir attribute must be set!")
    return ProjectDescriptor(
        dependencies=tuple(dependencies),
        sources=tuple(sources),
        classes_directory=Path(os.path.abspath(os.path.expanduser(str(classes_directory)))),
        class_loader=class_loader,
    )


__all__ = ["ProjectDescriptor", "build_project"]
