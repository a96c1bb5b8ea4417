"""Core data models shared across scrtask components."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class SourceUnit:
    """A source file selected for scanning and its fully-qualified class name."""

    file: Path
    class_name: str


@dataclass(frozen=True)
class DependencyArtifact:
    """Classpath entry that resolved to an existing regular file."""

    path: Path


@dataclass(frozen=True)
class GenerationOutcome:
    """Result of a single generator invocation."""

    succeeded: bool
    message: Optional[str] = None
    cause: Optional[BaseException] = None
    source_path: Optional[str] = None
    line: int = 0
    fatal: bool = False

    @classmethod
    def success(cls) -> "GenerationOutcome":
        return cls(succeeded=True)

    @classmethod
    def failure(
        cls,
        message: str,
        *,
        cause: BaseException | None = None,
        source_path: str | None = None,
        line: int = 0,
        fatal: bool = False,
    ) -> "GenerationOutcome":
        return cls(
            succeeded=False,
            message=message,
            cause=cause,
            source_path=source_path,
            line=line,
            fatal=fatal,
        )
