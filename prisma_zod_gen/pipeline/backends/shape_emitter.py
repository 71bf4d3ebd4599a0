"""
Shape emitter.

Emits one binding per top-level exported interface or type alias that is
not a generator-internal declaration.
"""

from __future__ import annotations

import logging

from ..analyzer.enum_registry import SCHEMA_SUFFIX, EnumRegistry
from ..analyzer.policy import NamingPolicy
from ..config import GeneratorConfig
from ..declarations.provider import DeclarationProvider
from ..declarations.types import DeclarationKind, ExportedDeclaration, TypeKind
from .base import SchemaEmitter
from .translator import TypeTranslator

logger = logging.getLogger(__name__)


class ShapeEmitter(SchemaEmitter):
    """Emits object schemas for data-model declarations."""

    def __init__(self, registry: EnumRegistry, config: GeneratorConfig):
        super().__init__(registry, config)
        self.policy = NamingPolicy(config)
        self.translator = TypeTranslator(registry, config)

    def emit(self, provider: DeclarationProvider) -> str:
        output = ""
        for decl in provider.exported_declarations():
            if self.policy.is_ignored_declaration(decl.name):
                continue
            binding = self.emit_declaration(decl)
            if binding:
                output += binding
        return output

    def emit_declaration(self, decl: ExportedDeclaration) -> str:
        """Render the binding for one declaration, or "" for unsupported kinds."""
        identifier = f"{decl.name}{SCHEMA_SUFFIX}"

        if decl.kind == DeclarationKind.INTERFACE:
            return self.render_binding(identifier, self.translator.translate_shape(decl.properties, decl.type))

        if decl.kind == DeclarationKind.TYPE_ALIAS and decl.type is not None:
            declared = decl.type
            if declared.kind == TypeKind.OBJECT and declared.properties:
                expression = self.translator.translate_shape(declared.properties, declared)
            else:
                expression = self.translator.translate(declared, set())
            return self.render_binding(identifier, expression)

        logger.debug("Skipping %s declaration %s", decl.kind.value, decl.name)
        return ""
