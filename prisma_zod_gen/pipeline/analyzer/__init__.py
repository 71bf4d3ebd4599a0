"""
Analyzer module.

Contains the enum registry and the naming policy shared by the emitters.
"""

from __future__ import annotations

from .enum_registry import EnumRegistry, EnumRegistryEntry, enum_schema_identifier
from .policy import NamingPolicy

__all__ = [
    "EnumRegistry",
    "EnumRegistryEntry",
    "NamingPolicy",
    "enum_schema_identifier",
]
