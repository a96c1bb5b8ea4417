"""Validated generation options passed to the descriptor generator."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Sequence, Tuple

from .errors import ConfigurationError


class SpecVersion(Enum):
    """Declarative Services specification versions a descriptor can target."""

    VERSION_1_0 = "1.0"
    VERSION_1_1 = "1.1"
    VERSION_1_1_FELIX = "1.1-felix"
    VERSION_1_2 = "1.2"
    VERSION_1_3 = "1.3"

    @classmethod
    def from_name(cls, name: str | None) -> Optional["SpecVersion"]:
        """Return the version called ``name`` or ``None`` when it is unknown."""
        if name is None:
            return None
        for version in cls:
            if version.value == name.strip():
                return version
        return None


@dataclass(frozen=True)
class GenerationOptions:
    """Options the generator runs with.

    ``spec_version`` is ``None`` when the generator should detect the version
    from the annotations it finds.
    """

    strict_mode: bool = False
    generate_accessors: bool = True
    spec_version: Optional[SpecVersion] = None
    properties: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    annotation_processors: Tuple[str, ...] = ()


def assemble_options(
    spec_version: str | None = None,
    *,
    strict_mode: bool | None = None,
    generate_accessors: bool | None = None,
    annotation_processors: Sequence[str] | None = None,
    properties: Mapping[str, str] | None = None,
) -> GenerationOptions:
    """Validate raw option values and package them for the generator."""
    version: Optional[SpecVersion] = None
    if spec_version and spec_version.strip():
        version = SpecVersion.from_name(spec_version)
        if version is None:
            raise ConfigurationError(f"Unknown spec version specified: {spec_version}")

    return GenerationOptions(
        strict_mode=False if strict_mode is None else bool(strict_mode),
        generate_accessors=True if generate_accessors is None else bool(generate_accessors),
        spec_version=version,
        properties=MappingProxyType({str(k): str(v) for k, v in (properties or {}).items()}),
        annotation_processors=tuple(annotation_processors or ()),
    )


__all__ = ["GenerationOptions", "SpecVersion", "assemble_options"]
