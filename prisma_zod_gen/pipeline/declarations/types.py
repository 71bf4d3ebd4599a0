"""
Type graph node definitions for parsed TypeScript declarations.

These nodes are what the declaration provider hands to the emitters and
the type translator. Types compare by identity: the provider returns the
same DeclaredType every time a named declaration is resolved, which is
what the translator's cycle guard relies on.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TypeKind(Enum):
    """Kind of a declared type."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    BIGINT = "bigint"
    DATE = "date"
    ARRAY = "array"
    UNION = "union"
    OBJECT = "object"
    LITERAL = "literal"  # "A", 1, true
    NULL = "null"
    UNDEFINED = "undefined"
    REFERENCE = "reference"  # Named reference the provider could not resolve
    OTHER = "other"  # Function, tuple, conditional, mapped, any, ...


@dataclass(eq=False)
class DeclaredProperty:
    """A property of an object type."""

    name: str = ""
    type: DeclaredType | None = None

    # Declared with a question token (`name?: T`)
    optional: bool = False


@dataclass(eq=False)
class DeclaredType:
    """A node in the declaration type graph."""

    kind: TypeKind = TypeKind.OTHER

    # Printed signature, as written in the source
    text: str = ""

    # For arrays
    element: DeclaredType | None = None

    # For unions, in declaration order
    members: list[DeclaredType] = field(default_factory=list)

    # For objects, in declaration order
    properties: list[DeclaredProperty] = field(default_factory=list)

    # For literals
    literal_value: Any = None

    # Name of the type alias this type was reached through
    alias_name: str | None = None

    # Name of the declaration that owns this type (interface, enum, ...)
    symbol_name: str | None = None

    @property
    def is_string_literal(self) -> bool:
        return self.kind == TypeKind.LITERAL and isinstance(self.literal_value, str)

    @property
    def is_null(self) -> bool:
        return self.kind == TypeKind.NULL

    @property
    def is_undefined(self) -> bool:
        return self.kind == TypeKind.UNDEFINED

    @property
    def union_members(self) -> list[DeclaredType]:
        """Members of a union, or an empty list for any other kind."""
        return self.members if self.kind == TypeKind.UNION else []


@dataclass
class EnumDeclaration:
    """A classic `enum` declaration found in the enum namespace."""

    name: str = ""
    values: list[str] = field(default_factory=list)


@dataclass
class TypeAliasDeclaration:
    """A `type X = ...` declaration found in the enum namespace."""

    name: str = ""
    type: DeclaredType | None = None


class DeclarationKind(Enum):
    """Kind of a top-level exported declaration."""

    INTERFACE = "interface"
    TYPE_ALIAS = "type_alias"
    ENUM = "enum"
    VARIABLE = "variable"
    OTHER = "other"


@dataclass
class ExportedDeclaration:
    """A top-level exported declaration.

    One exported name can carry several declarations (Prisma exports both
    `const Role` and `type Role`); each one is a separate entry.
    """

    name: str = ""
    kind: DeclarationKind = DeclarationKind.OTHER

    # Resolved type of the declaration
    type: DeclaredType | None = None

    # Own properties, for interfaces (inherited ones are not included)
    properties: list[DeclaredProperty] = field(default_factory=list)
