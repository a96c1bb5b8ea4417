"""Tests for scrtask.classpath."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from scrtask.classpath import ClassLoadingContext, Classpath, create_class_loader, resolve_dependencies
from tests._fixtures.source_tree import SourceTreeBuilder


def test_resolve_keeps_only_existing_files_in_order(source_tree: SourceTreeBuilder) -> None:
    first, second = source_tree.jars(["b.jar", "a.jar"])
    missing = source_tree.lib / "missing.jar"

    dependencies = resolve_dependencies([second, missing, source_tree.destdir, first])

    assert [dependency.path for dependency in dependencies] == [second, first]


def test_resolve_accepts_strings(source_tree: SourceTreeBuilder) -> None:
    (jar,) = source_tree.jars(["api.jar"])

    dependencies = resolve_dependencies([str(jar), str(source_tree.lib / "nope.jar")])

    assert [dependency.path for dependency in dependencies] == [jar]


def test_resolve_empty_classpath() -> None:
    assert resolve_dependencies([]) == []


def test_classpath_parses_path_separated_string(tmp_path: Path) -> None:
    value = os.pathsep.join([str(tmp_path / "a.jar"), "", str(tmp_path / "b.jar")])

    classpath = Classpath.parse(value)

    assert classpath.entries() == [tmp_path / "a.jar", tmp_path / "b.jar"]
    assert str(classpath) == value.replace(os.pathsep * 2, os.pathsep)


def test_classpath_deduplicates_and_merges(tmp_path: Path) -> None:
    classpath = Classpath([tmp_path / "a.jar"])
    other = Classpath([tmp_path / "b.jar", tmp_path / "a.jar"])

    classpath.add(other)
    classpath.add(tmp_path / "a.jar")

    assert list(classpath) == [tmp_path / "a.jar", tmp_path / "b.jar"]
    assert len(classpath) == 2


def test_classpath_entries_are_absolute(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    classpath = Classpath(["lib/x.jar"])

    assert classpath.entries() == [Path.cwd() / "lib" / "x.jar"]


def test_class_loader_includes_existing_directories(source_tree: SourceTreeBuilder) -> None:
    (jar,) = source_tree.jars(["dep.jar"])
    classpath = Classpath([jar, source_tree.destdir, source_tree.lib / "gone.jar"])
    parent = ClassLoadingContext(locations=(Path("/parent"),))

    context = create_class_loader(classpath, parent=parent)

    assert context.locations == (jar, source_tree.destdir)
    assert context.parent is parent
    assert context.search_path() == [Path("/parent"), jar, source_tree.destdir]


def test_class_loader_is_released_after_use(source_tree: SourceTreeBuilder) -> None:
    (jar,) = source_tree.jars(["dep.jar"])

    with create_class_loader(Classpath([jar]), parent=ClassLoadingContext.system()) as context:
        assert jar in context.search_path()

    assert context.closed
    assert context.locations == ()
    assert context.parent is None
    with pytest.raises(RuntimeError):
        context.search_path()


def test_system_context_reflects_interpreter_path() -> None:
    context = ClassLoadingContext.system()

    assert context.parent is None
    assert all(isinstance(location, Path) for location in context.locations)
