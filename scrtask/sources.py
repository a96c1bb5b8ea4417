"""Source file discovery for descriptor generation."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional, Pattern, Sequence, Tuple

from .errors import ConfigurationError
from .models import SourceUnit

SOURCE_SUFFIX = ".java"

_DEFAULT_EXCLUDED_DIRS = {
    "CVS",
    "SCCS",
    ".svn",
    ".git",
    ".hg",
    ".bzr",
}

_DEFAULT_EXCLUDED_FILES = (
    "*~",
    "#*#",
    ".#*",
    "%*%",
    "._*",
    ".cvsignore",
    "vssver.scc",
    ".DS_Store",
    ".gitattributes",
    ".gitignore",
    ".gitmodules",
    ".hgignore",
    ".hgsub",
    ".hgsubstate",
    ".hgtags",
    ".bzrignore",
)


@dataclass(frozen=True)
class PatternRule:
    """Ant-style include/exclude pattern matched against ``/`` separated relative paths."""

    pattern: str
    regex: Pattern[str]

    def matches(self, rel_path: str) -> bool:
        return self.regex.fullmatch(rel_path) is not None


def _build_pattern_rule(pattern: str) -> PatternRule | None:
    pattern = pattern.strip().replace("\\", "/")
    if not pattern:
        return None
    if pattern.endswith("/"):
        pattern += "**"
    pattern = pattern.lstrip("/")

    parts: List[str] = []
    index = 0
    while index < len(pattern):
        if pattern.startswith("**/", index):
            parts.append("(?:.*/)?")
            index += 3
        elif pattern.startswith("/**", index) and index + 3 == len(pattern):
            parts.append("(?:/.*)?")
            index += 3
        elif pattern.startswith("**", index):
            parts.append(".*")
            index += 2
        elif pattern[index] == "*":
            parts.append("[^/]*")
            index += 1
        elif pattern[index] == "?":
            parts.append("[^/]")
            index += 1
        else:
            parts.append(re.escape(pattern[index]))
            index += 1
    return PatternRule(pattern=pattern, regex=re.compile("".join(parts)))


def _build_rules(patterns: Sequence[str]) -> Tuple[PatternRule, ...]:
    rules = (_build_pattern_rule(pattern) for pattern in patterns)
    return tuple(rule for rule in rules if rule is not None)


_DEFAULT_FILE_RULES = _build_rules([f"**/{name}" for name in _DEFAULT_EXCLUDED_FILES])


@dataclass
class FileSet:
    """Files below ``directory`` selected by include and exclude patterns.

    With no include patterns every file is included. Excludes win over
    includes.
    """

    directory: Optional[Path] = None
    includes: Sequence[str] = field(default_factory=tuple)
    excludes: Sequence[str] = field(default_factory=tuple)
    default_excludes: bool = True

    def root(self) -> Path:
        """Return the absolute root directory, rejecting an unset or missing one."""
        if self.directory is None:
            raise ConfigurationError("srcdir attribute must be set!")
        root = Path(os.path.abspath(os.path.expanduser(str(self.directory))))
        if not root.exists():
            raise ConfigurationError(f"srcdir {root} does not exist!")
        if not root.is_dir():
            raise ConfigurationError(f"srcdir {root} is not a directory!")
        return root

    def iter_files(self) -> Iterator[Path]:
        root = self.root()
        include_rules = _build_rules(self.includes)
        exclude_rules = _build_rules(self.excludes)

        for dirpath, dirnames, filenames in os.walk(root):
            current_dir = Path(dirpath)
            rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

            if self.default_excludes:
                dirnames[:] = [name for name in dirnames if name not in _DEFAULT_EXCLUDED_DIRS]
            dirnames.sort()

            for filename in sorted(filenames):
                rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
                if self.default_excludes and _matches_any(rel_path, _DEFAULT_FILE_RULES):
                    continue
                if include_rules and not _matches_any(rel_path, include_rules):
                    continue
                if _matches_any(rel_path, exclude_rules):
                    continue
                yield current_dir / filename

    def __str__(self) -> str:
        return (
            f"FileSet(dir={self.directory}, includes={list(self.includes)}, "
            f"excludes={list(self.excludes)})"
        )


def _matches_any(rel_path: str, rules: Sequence[PatternRule]) -> bool:
    return any(rule.matches(rel_path) for rule in rules)


def derive_class_name(file: Path, root: Path) -> str:
    """Return the dotted class name of ``file`` relative to ``root``."""
    prefix = str(root).rstrip(os.sep)
    path = str(file)
    assert path.startswith(prefix + os.sep), f"{path} is not below {root}"
    assert path.endswith(SOURCE_SUFFIX), f"{path} is not a source file"
    name = path[len(prefix) + 1 :].replace(os.sep, "/").replace("/", ".")
    return name[: -len(SOURCE_SUFFIX)]


def iter_sources(fileset: FileSet) -> Iterator[SourceUnit]:
    """Return a lazy iterator of ``SourceUnit`` for every ``.java`` file selected.

    The root directory is checked before the iterator is returned.
    """
    root = fileset.root()
    return (
        SourceUnit(file=path, class_name=derive_class_name(path, root))
        for path in fileset.iter_files()
        if path.name.endswith(SOURCE_SUFFIX)
    )


def collect_sources(fileset: FileSet) -> List[SourceUnit]:
    return list(iter_sources(fileset))


__all__ = [
    "FileSet",
    "PatternRule",
    "SOURCE_SUFFIX",
    "collect_sources",
    "derive_class_name",
    "iter_sources",
]
