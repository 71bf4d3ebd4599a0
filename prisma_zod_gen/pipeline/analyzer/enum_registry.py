"""
Registry of generated enum schemas.

Maps a declared enum name to the identifier of the schema binding emitted
for it. Written by the enum emitter, read by the type translator.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

ENUM_SCHEMA_PREFIX = "enum_"
SCHEMA_SUFFIX = "Schema"


def enum_schema_identifier(name: str) -> str:
    """Identifier of the schema binding for an enum, e.g. `enum_RoleSchema`."""
    return f"{ENUM_SCHEMA_PREFIX}{name}{SCHEMA_SUFFIX}"


@dataclass(frozen=True)
class EnumRegistryEntry:
    source_name: str
    schema_identifier: str


class EnumRegistry:
    """Enum name -> schema identifier, for one generation run."""

    def __init__(self):
        self._entries: dict[str, EnumRegistryEntry] = {}

    def register(self, name: str, schema_identifier: str) -> None:
        """Register an enum schema. Registering a name twice keeps the last identifier."""
        self._entries[name] = EnumRegistryEntry(source_name=name, schema_identifier=schema_identifier)

    def lookup(self, name: str | None) -> str | None:
        if name is None:
            return None
        entry = self._entries.get(name)
        return entry.schema_identifier if entry is not None else None

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[EnumRegistryEntry]:
        return iter(self._entries.values())
