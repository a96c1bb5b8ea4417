"""Service component descriptor generation for annotated source trees."""

from .errors import BuildFailure, ConfigurationError, DescriptorError, DescriptorFailure, Location
from .options import GenerationOptions, SpecVersion
from .task import DescriptorTask

__all__ = [
    "BuildFailure",
    "ConfigurationError",
    "DescriptorError",
    "DescriptorFailure",
    "DescriptorTask",
    "GenerationOptions",
    "Location",
    "SpecVersion",
]
