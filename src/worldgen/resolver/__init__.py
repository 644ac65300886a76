"""Configuration-driven graph builder."""

from . import fields
from .deserializers import MARKERS, STANDARD, Deserializer
from .resolver import Resolver
from .sources import (
    CachedValueSource,
    CascadeValueSource,
    FilesystemValueSource,
    MappingValueSource,
    ValueSource,
)

__all__ = [
    "CachedValueSource",
    "CascadeValueSource",
    "Deserializer",
    "FilesystemValueSource",
    "MARKERS",
    "MappingValueSource",
    "Resolver",
    "STANDARD",
    "ValueSource",
    "fields",
]
