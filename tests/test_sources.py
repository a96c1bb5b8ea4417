"""Tests for scrtask.sources."""

from __future__ import annotations

from pathlib import Path

import pytest

from scrtask.errors import ConfigurationError
from scrtask.sources import FileSet, collect_sources, derive_class_name, iter_sources
from tests._fixtures.source_tree import SourceTreeBuilder


def test_collect_yields_only_java_sources(source_tree: SourceTreeBuilder) -> None:
    source_tree.write({"a/B.java": "class B {}\n", "a/C.txt": "not a class\n"})

    sources = source_tree.collect()

    assert [unit.class_name for unit in sources] == ["a.B"]
    assert sources[0].file == source_tree.root / "a" / "B.java"
    assert sources[0].file.is_absolute()


def test_class_names_follow_relative_path(source_tree: SourceTreeBuilder) -> None:
    source_tree.write(
        {
            "org/example/impl/Service.java": "class Service {}\n",
            "org/example/Api.java": "interface Api {}\n",
            "Root.java": "class Root {}\n",
        }
    )

    names = {unit.class_name for unit in source_tree.collect()}

    assert names == {"org.example.impl.Service", "org.example.Api", "Root"}
    root_text = str(source_tree.root)
    for name in names:
        assert not name.startswith(".")
        assert root_text not in name
        assert not name.endswith("java")


def test_include_patterns_cannot_pull_in_non_sources(source_tree: SourceTreeBuilder) -> None:
    source_tree.write(
        {
            "pkg/Component.java": "class Component {}\n",
            "pkg/component.xml": "<scr/>\n",
            "pkg/notes.java.bak": "backup\n",
        }
    )

    sources = source_tree.collect(includes=("**/*",))

    assert [unit.class_name for unit in sources] == ["pkg.Component"]


def test_include_and_exclude_patterns(source_tree: SourceTreeBuilder) -> None:
    source_tree.write(
        {
            "pkg/impl/Impl.java": "",
            "pkg/impl/ImplTest.java": "",
            "pkg/api/Api.java": "",
            "other/Other.java": "",
        }
    )

    sources = source_tree.collect(includes=("pkg/**",), excludes=("**/*Test.java",))

    assert sorted(unit.class_name for unit in sources) == ["pkg.api.Api", "pkg.impl.Impl"]


def test_single_star_pattern_does_not_cross_directories(source_tree: SourceTreeBuilder) -> None:
    source_tree.write({"Top.java": "", "pkg/Nested.java": ""})

    sources = source_tree.collect(includes=("*.java",))

    assert [unit.class_name for unit in sources] == ["Top"]


def test_trailing_slash_excludes_directory_contents(source_tree: SourceTreeBuilder) -> None:
    source_tree.write({"gen/Generated.java": "", "main/Main.java": ""})

    sources = source_tree.collect(excludes=("gen/",))

    assert [unit.class_name for unit in sources] == ["main.Main"]


def test_default_excludes_skip_version_control(source_tree: SourceTreeBuilder) -> None:
    source_tree.write({".git/hooks/Hook.java": "", "CVS/Old.java": "", "pkg/Live.java": ""})

    assert [unit.class_name for unit in source_tree.collect()] == ["pkg.Live"]

    everything = source_tree.collect(default_excludes=False)
    assert sorted(unit.class_name for unit in everything) == [
        ".git.hooks.Hook",
        "CVS.Old",
        "pkg.Live",
    ]


def test_collect_rejects_unset_directory() -> None:
    with pytest.raises(ConfigurationError, match="srcdir attribute must be set"):
        collect_sources(FileSet())


def test_collect_rejects_missing_directory(tmp_path: Path) -> None:
    missing = tmp_path / "missing"

    with pytest.raises(ConfigurationError) as excinfo:
        collect_sources(FileSet(missing))

    assert str(missing) in str(excinfo.value)


def test_iter_sources_checks_root_before_iteration(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        iter_sources(FileSet(tmp_path / "missing"))


def test_iter_sources_is_lazy(source_tree: SourceTreeBuilder) -> None:
    source_tree.write({"pkg/A.java": ""})
    iterator = iter_sources(FileSet(source_tree.root))

    source_tree.write({"pkg/B.java": ""})

    assert sorted(unit.class_name for unit in iterator) == ["pkg.A", "pkg.B"]


def test_relative_root_is_made_absolute(source_tree: SourceTreeBuilder, monkeypatch) -> None:
    source_tree.write({"pkg/Thing.java": ""})
    monkeypatch.chdir(source_tree.root.parent)

    sources = collect_sources(FileSet(Path("src")))

    assert [unit.class_name for unit in sources] == ["pkg.Thing"]
    assert sources[0].file.is_absolute()


def test_derive_class_name_strips_root_and_extension(tmp_path: Path) -> None:
    root = tmp_path / "src"
    file = root / "a" / "b" / "C.java"

    assert derive_class_name(file, root) == "a.b.C"
    assert derive_class_name(root / "Top.java", root) == "Top"


def test_derive_class_name_asserts_root_prefix(tmp_path: Path) -> None:
    with pytest.raises(AssertionError):
        derive_class_name(tmp_path / "elsewhere" / "C.java", tmp_path / "src")


def test_derive_class_name_requires_separator_after_root(tmp_path: Path) -> None:
    # A sibling directory sharing the root's name as a prefix is not below it.
    with pytest.raises(AssertionError):
        derive_class_name(tmp_path / "src2" / "C.java", tmp_path / "src")


def test_file_set_description_mentions_patterns(tmp_path: Path) -> None:
    description = str(FileSet(tmp_path, includes=("**/*.java",), excludes=("gen/",)))

    assert str(tmp_path) in description
    assert "**/*.java" in description
    assert "gen/" in description
