"""Exception types raised while configuring and running descriptor generation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional


class ConfigurationError(RuntimeError):
    """Raised when the task configuration is incomplete or invalid."""


@dataclass(frozen=True)
class Location:
    """Position in a source file that a build failure refers to."""

    file_name: str
    line_number: int = 0
    column_number: int = 0

    def __str__(self) -> str:
        if self.line_number:
            return f"{self.file_name}:{self.line_number}"
        return self.file_name


class BuildFailure(RuntimeError):
    """Terminates the build step with a human-readable message."""

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        location: Location | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.location = location
        self.__cause__ = cause

    @property
    def cause(self) -> BaseException | None:
        return self.__cause__

    def __str__(self) -> str:
        if self.location is not None:
            return f"{self.location}: {self.message}"
        return self.message


class GeneratorError(Exception):
    """Base for errors raised by a descriptor generator.

    ``kind`` tags the variant: ``"domain"`` errors describe a problem in the
    scanned sources and may point at the offending file, ``"fatal"`` errors
    mean the generator could not attempt generation at all.
    """

    kind: ClassVar[str] = "domain"

    def __init__(
        self,
        message: str,
        source_location: Optional[str] = None,
        line_number: Optional[int] = 0,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.source_location = source_location
        self.line_number = line_number or 0
        if cause is not None:
            self.__cause__ = cause

    @property
    def cause(self) -> BaseException | None:
        return self.__cause__


class DescriptorError(GeneratorError):
    """Recoverable generation problem, e.g. a malformed annotation."""

    kind = "domain"


class DescriptorFailure(GeneratorError):
    """Unrecoverable generator-side problem."""

    kind = "fatal"


__all__ = [
    "BuildFailure",
    "ConfigurationError",
    "DescriptorError",
    "DescriptorFailure",
    "GeneratorError",
    "Location",
]
