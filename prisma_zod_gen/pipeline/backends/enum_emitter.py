"""
Enum emitter.

Emits one z.enum binding per enum of the enum namespace and registers it,
so the translator can reference the binding instead of re-expanding the
members.
"""

from __future__ import annotations

import logging

from ..analyzer.enum_registry import enum_schema_identifier
from ..declarations.provider import DeclarationProvider
from ..declarations.types import DeclaredType
from .base import SchemaEmitter
from .translator import enum_expression

logger = logging.getLogger(__name__)


def literal_union_values(declared: DeclaredType | None) -> list[str] | None:
    """String values of a literal-union enum, or None if the type is not one.

    A lone string literal counts as a one-member union.
    """
    if declared is None:
        return None
    members = declared.union_members or [declared]
    if not all(member.is_string_literal for member in members):
        return None
    return [member.literal_value for member in members]


class EnumEmitter(SchemaEmitter):
    """Emits enum schemas for classic enums and literal-union type aliases."""

    def emit(self, provider: DeclarationProvider) -> str:
        namespace = self.config.enum_namespace
        if not provider.has_namespace(namespace):
            logger.info("No %s namespace found, no enum schemas generated", namespace)
            return ""

        output = ""
        for enum_decl in provider.enum_declarations(namespace):
            output += self.emit_enum(enum_decl.name, enum_decl.values)

        for alias in provider.type_aliases(namespace):
            # Accepts `type X = 'A'` too: a one-value enum prints as a bare literal, not a union
            values = literal_union_values(alias.type)
            if values is None:
                logger.debug("Type alias %s.%s is not a string literal union", namespace, alias.name)
                continue
            output += self.emit_enum(alias.name, values)
        return output

    def emit_enum(self, name: str, values: list[str]) -> str:
        """Render an enum binding and register it."""
        identifier = enum_schema_identifier(name)
        self.registry.register(name, identifier)
        return self.render_binding(identifier, enum_expression(values))
