"""
Base class for schema emitters.

Emitters walk the declaration provider and render Zod bindings through
Jinja2 templates.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

import jinja2

from ..analyzer.enum_registry import EnumRegistry
from ..config import GeneratorConfig
from ..declarations.provider import DeclarationProvider

TEMPLATE_LANG = "zod"
FILE_EXTENSION = "ts"


def create_template_environment() -> jinja2.Environment:
    """Jinja2 environment over the bundled Zod templates."""
    template_dir = Path(__file__).parent.parent.parent / "templates" / TEMPLATE_LANG
    return jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(template_dir)),
        lstrip_blocks=True,
        trim_blocks=True,
        keep_trailing_newline=True,
    )


class SchemaEmitter(ABC):
    """Abstract base class for binding emitters."""

    def __init__(self, registry: EnumRegistry, config: GeneratorConfig):
        """
        Initialize the emitter.

        Args:
            registry: Enum registry shared by the whole run
            config: Generator configuration
        """
        self.registry = registry
        self.config = config
        self.jinja_env = create_template_environment()
        self.binding_template = self.jinja_env.get_template(f"binding.{FILE_EXTENSION}.jinja2")

    @abstractmethod
    def emit(self, provider: DeclarationProvider) -> str:
        """
        Emit bindings for the declarations this emitter handles.

        Args:
            provider: Parsed declaration source

        Returns:
            Concatenated bindings, in encounter order
        """

    def render_binding(self, identifier: str, expression: str) -> str:
        """Render `export const <identifier> = <expression>;`."""
        return self.binding_template.render(IDENTIFIER=identifier, EXPRESSION=expression)
