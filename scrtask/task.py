"""Build task that runs descriptor generation over a source tree."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, List, Optional

from .classpath import ClassLoadingContext, Classpath, PathLike, create_class_loader, resolve_dependencies
from .config import DEFAULT_FINAL_NAME, DEFAULT_METATYPE_NAME, TaskConfig
from .errors import BuildFailure, ConfigurationError, GeneratorError, Location
from .generator import DescriptorGenerator, load_generator
from .logging import TaskLog, get_logger
from .models import GenerationOutcome
from .options import assemble_options
from .project import build_project
from .sources import FileSet, collect_sources


def map_generator_error(exc: GeneratorError) -> GenerationOutcome:
    """Translate a generator error into a failed outcome.

    Fatal failures never report a location, even when one is attached.
    """
    if exc.kind == "fatal":
        return GenerationOutcome.failure(exc.message, cause=exc.cause, fatal=True)
    return GenerationOutcome.failure(
        exc.message,
        cause=exc.cause,
        source_path=exc.source_location,
        line=exc.line_number or 0,
    )


def failure_from_outcome(outcome: GenerationOutcome) -> BuildFailure:
    location = None
    if outcome.source_path is not None and not outcome.fatal:
        location = Location(outcome.source_path, outcome.line, 0)
    return BuildFailure(outcome.message or "Descriptor generation failed", outcome.cause, location)


class DescriptorTask:
    """Generates a service component descriptor from annotations in the sources."""

    def __init__(
        self,
        generator: DescriptorGenerator | None = None,
        *,
        generator_reference: str | None = None,
        log: TaskLog | None = None,
    ) -> None:
        self.fileset = FileSet()
        self.classpath = Classpath()
        self.final_name = DEFAULT_FINAL_NAME
        self.metatype_name = DEFAULT_METATYPE_NAME
        self.generate_accessors = True
        self.strict_mode = False
        self.spec_version: Optional[str] = None
        self.annotation_processors: List[str] = []
        self.properties: Dict[str, str] = {}
        self.generator_reference = generator_reference
        self.logger = get_logger("task")
        self.log = log or TaskLog()
        self._generator = generator
        self._destdir: Optional[Path] = None

    @classmethod
    def from_config(
        cls, config: TaskConfig, generator: DescriptorGenerator | None = None
    ) -> "DescriptorTask":
        task = cls(generator, generator_reference=config.generator)
        task.srcdir = config.srcdir
        task.fileset.includes = tuple(config.includes)
        task.fileset.excludes = tuple(config.excludes)
        task.fileset.default_excludes = config.default_excludes
        for entry in config.classpath:
            task.add_classpath(entry)
        task.destdir = config.destdir
        task.final_name = config.final_name
        task.metatype_name = config.metatype_name
        task.generate_accessors = config.generate_accessors
        task.strict_mode = config.strict_mode
        task.spec_version = config.spec_version
        task.annotation_processors = list(config.annotation_processors)
        task.properties = dict(config.properties)
        return task

    @property
    def srcdir(self) -> Optional[Path]:
        return self.fileset.directory

    @srcdir.setter
    def srcdir(self, value: PathLike | None) -> None:
        self.fileset.directory = Path(value) if value is not None else None

    @property
    def destdir(self) -> Optional[Path]:
        return self._destdir

    @destdir.setter
    def destdir(self, value: PathLike | None) -> None:
        # The output directory doubles as a classpath entry for compiled classes.
        self._destdir = Path(value) if value is not None else None
        if self._destdir is not None:
            self.classpath.add(self._destdir)

    def add_classpath(self, entry: "PathLike | Classpath") -> None:
        self.classpath.add(entry)

    def execute(self) -> None:
        """Run generation, raising ``BuildFailure`` when it does not succeed."""
        outcome = self.generate()
        if not outcome.succeeded:
            raise failure_from_outcome(outcome)

    def generate(self) -> GenerationOutcome:
        """Run one generation pass and report its outcome.

        Configuration problems raise ``ConfigurationError`` before the
        generator is called; errors the generator raises other than
        ``GeneratorError`` propagate unchanged.
        """
        self.fileset.root()
        self._log_configuration()

        if self.destdir is None:
            raise ConfigurationError("destdir attribute must be set!")
        options = assemble_options(
            self.spec_version,
            strict_mode=self.strict_mode,
            generate_accessors=self.generate_accessors,
            annotation_processors=self.annotation_processors,
            properties=self.properties,
        )
        generator = self._resolve_generator()

        dependencies = resolve_dependencies(self.classpath)
        self.logger.debug("Resolved %d dependencies", len(dependencies))

        with create_class_loader(self.classpath, parent=ClassLoadingContext.system()) as class_loader:
            sources = collect_sources(self.fileset)
            self.logger.debug("Collected %d source files", len(sources))
            project = build_project(dependencies, sources, self.destdir, class_loader)

            try:
                generator.generate(
                    project,
                    options,
                    project.classes_directory,
                    self.final_name,
                    self.metatype_name,
                )
            except GeneratorError as exc:
                self.logger.debug("Generator reported %s error: %s", exc.kind, exc.message)
                return map_generator_error(exc)

        self.logger.info(
            "Generated %s in %s", self.final_name, project.classes_directory
        )
        return GenerationOutcome.success()

    def _resolve_generator(self) -> DescriptorGenerator:
        if self._generator is None:
            self._generator = load_generator(self.generator_reference, log=self.log)
        return self._generator

    def _log_configuration(self) -> None:
        self.logger.debug("Descriptor task configuration")
        self.logger.debug("  sources: %s", self.fileset)
        self.logger.debug("  destdir: %s", self.destdir)
        self.logger.debug("  classpath: %s", self.classpath)
        self.logger.debug("  final_name: %s", self.final_name)
        self.logger.debug("  metatype_name: %s", self.metatype_name)
        self.logger.debug("  generate_accessors: %s", self.generate_accessors)
        self.logger.debug("  strict_mode: %s", self.strict_mode)
        self.logger.debug("  spec_version: %s", self.spec_version)
        self.logger.debug("  annotation_processors: %s", self.annotation_processors)


def descriptor_path(task: DescriptorTask) -> Path:
    """Location the descriptor is written to on success."""
    assert task.destdir is not None
    return Path(os.path.abspath(task.destdir)) / task.final_name


__all__ = ["DescriptorTask", "descriptor_path", "failure_from_outcome", "map_generator_error"]
