"""
Type translator: declared TypeScript types to Zod schema expressions.

The rules are tried in a fixed order and the first match wins. Enum
detection comes before primitives and unions because enums show up either
as a qualified namespace reference or as a plain string-literal union, and
both would otherwise be flattened into an inline schema.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable

from ...utils import format_property_key, indent_continuation, quote_string
from ..analyzer.enum_registry import EnumRegistry
from ..analyzer.policy import NamingPolicy
from ..config import GeneratorConfig
from ..declarations.types import DeclaredProperty, DeclaredType, TypeKind

logger = logging.getLogger(__name__)

ANY_SCHEMA = "z.any()"


class TypeTranslator:
    """Translates DeclaredType nodes to Zod expression strings."""

    PRIMITIVE_SCHEMAS = {
        TypeKind.STRING: "z.string()",
        TypeKind.NUMBER: "z.number()",
        TypeKind.BOOLEAN: "z.boolean()",
    }

    DATE_TYPE_NAME = "Date"
    BIGINT_TYPE_NAME = "bigint"

    def __init__(self, registry: EnumRegistry, config: GeneratorConfig | None = None):
        """
        Initialize the translator.

        Args:
            registry: Enum registry, fully populated before any translation
            config: Generator configuration
        """
        self.registry = registry
        self.config = config or GeneratorConfig()
        self.policy = NamingPolicy(self.config)
        self._enum_reference = re.compile(rf"{re.escape(self.config.enum_namespace)}\.(\w+)")

    def translate(self, declared: DeclaredType, seen: set[DeclaredType] | None = None) -> str:
        """
        Translate a declared type to a Zod expression.

        Args:
            declared: The type to translate
            seen: Types already visited during this top-level translation.
                It only grows, so a type reached twice on the same request
                degrades to z.any() on its second visit.

        Returns:
            Zod expression string
        """
        if seen is None:
            seen = set()

        if declared in seen:
            logger.warning("Recursive type detected for: %s", declared.text)
            return ANY_SCHEMA
        seen.add(declared)

        marker = self.config.opaque_type_marker
        if marker and marker in declared.text:
            return ANY_SCHEMA

        enum_schema = self._resolve_enum(declared)
        if enum_schema is not None:
            return enum_schema

        primitive = self._translate_primitive(declared)
        if primitive is not None:
            return primitive

        if declared.element is not None:
            return f"z.array({self.translate(declared.element, seen)})"

        if declared.union_members:
            return self._translate_union(declared, seen)

        if declared.kind == TypeKind.OBJECT and declared.properties:
            return self.translate_object(declared.properties, seen)

        logger.debug("No schema rule for type %s (%s), using z.any()", declared.text, declared.kind.value)
        return ANY_SCHEMA

    def translate_object(self, properties: list[DeclaredProperty], seen: set[DeclaredType]) -> str:
        """Render a z.object(...) expression for a nested property list."""
        return self._render_object(properties, lambda: seen)

    def translate_shape(self, properties: list[DeclaredProperty], owner: DeclaredType | None = None) -> str:
        """Render a top-level z.object(...) for a declaration.

        Each property is its own translation request with a fresh visitation
        set that already holds the owning type, so a property referring back
        to its declaration becomes z.any().
        """
        return self._render_object(properties, lambda: {owner} if owner is not None else set())

    def _render_object(self, properties: list[DeclaredProperty], seen_for: Callable[[], set[DeclaredType]]) -> str:
        lines = ["z.object({"]
        for prop in properties:
            if self.policy.is_ignored_property(prop.name):
                continue
            schema = self.translate_property(prop, seen_for())
            lines.append(f"  {format_property_key(prop.name)}: {indent_continuation(schema)},")
        lines.append("})")
        return "\n".join(lines)

    def translate_property(self, prop: DeclaredProperty, seen: set[DeclaredType]) -> str:
        """Translate a property type, adding .optional() for optional properties.

        `name?: T` and `name: T | undefined` are both optional; the undefined
        member is dropped from the union before translation.
        """
        if prop.type is None:
            return ANY_SCHEMA
        is_optional = prop.optional or "undefined" in prop.type.text
        schema = self.translate(self._without_undefined(prop.type), seen)
        return f"{schema}.optional()" if is_optional else schema

    def _resolve_enum(self, declared: DeclaredType) -> str | None:
        """Enum rules: qualified namespace reference, then alias name, then symbol name."""
        match = self._enum_reference.fullmatch(declared.text)
        if match:
            enum_name = match.group(1)
            schema = self.registry.lookup(enum_name)
            if schema is not None:
                return schema
            logger.warning(
                "Enum %s referenced in %s not found in enum registry",
                enum_name,
                self.config.enum_namespace,
            )

        schema = self.registry.lookup(declared.alias_name)
        if schema is not None:
            return schema

        return self.registry.lookup(declared.symbol_name)

    def _translate_primitive(self, declared: DeclaredType) -> str | None:
        if declared.kind in self.PRIMITIVE_SCHEMAS:
            return self.PRIMITIVE_SCHEMAS[declared.kind]
        if declared.kind == TypeKind.DATE or declared.text == self.DATE_TYPE_NAME:
            return "z.date()"
        if declared.kind == TypeKind.BIGINT or declared.text == self.BIGINT_TYPE_NAME:
            return "z.bigint()"
        return None

    def _translate_union(self, declared: DeclaredType, seen: set[DeclaredType]) -> str:
        members = declared.union_members

        # Inline literal-union enum
        if all(member.is_string_literal for member in members):
            schema = self.registry.lookup(declared.alias_name)
            if schema is not None:
                return schema
            return enum_expression([member.literal_value for member in members])

        if any(member.is_null for member in members):
            non_null = [member for member in members if not member.is_null]
            if len(non_null) == 1:
                return f"{self.translate(non_null[0], seen)}.nullable()"
            if not non_null:
                return ANY_SCHEMA
            schemas = [self.translate(member, seen) for member in non_null]
            return f"z.union([{', '.join(schemas)}]).nullable()"

        schemas = [self.translate(member, seen) for member in members]
        return f"z.union([{', '.join(schemas)}])"

    def _without_undefined(self, declared: DeclaredType) -> DeclaredType:
        members = declared.union_members
        if not any(member.is_undefined for member in members):
            return declared
        rest = [member for member in members if not member.is_undefined]
        if not rest:
            return declared
        if len(rest) == 1:
            return rest[0]
        return DeclaredType(
            kind=TypeKind.UNION,
            text=" | ".join(member.text for member in rest),
            members=rest,
            alias_name=declared.alias_name,
        )


def enum_expression(values: list[str]) -> str:
    """Render a z.enum(...) expression, keeping value order."""
    return f"z.enum([{', '.join(quote_string(value) for value in values)}] as const)"
