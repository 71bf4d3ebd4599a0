"""
Pipeline generator: declaration file in, Zod schema module out.

Phases:
1. Parse the declaration source (fatal if missing or unparseable)
2. Emit enum schemas and populate the enum registry
3. Emit shape schemas, translating types against the registry
4. Write the module through the output sink
"""

from __future__ import annotations

import logging
from pathlib import Path

from .. import __version__
from .analyzer.enum_registry import EnumRegistry
from .backends.base import FILE_EXTENSION, create_template_environment
from .backends.enum_emitter import EnumEmitter
from .backends.shape_emitter import ShapeEmitter
from .config import GeneratorConfig, OutputMode
from .declarations.provider import DeclarationProvider
from .writer.atomic_writer import AtomicWriter

logger = logging.getLogger(__name__)


class PipelineGenerator:
    """Generates a Zod schema module from a TypeScript declaration file."""

    def __init__(
        self,
        source: str | Path | DeclarationProvider,
        config: GeneratorConfig | None = None,
        command_line: str = "",
    ):
        """
        Initialize the generator.

        Args:
            source: Path to the declaration file, or an already parsed provider
            config: Generator configuration
            command_line: Command line reported in the generation comment
        """
        self.source = source
        self.config = config or GeneratorConfig()
        self.command_line = command_line
        self.registry = EnumRegistry()
        self.jinja_env = create_template_environment()
        self.prefix_template = self.jinja_env.get_template(f"prefix.{FILE_EXTENSION}.jinja2")

    def _load_provider(self) -> DeclarationProvider:
        if isinstance(self.source, DeclarationProvider):
            return self.source
        return DeclarationProvider.from_path(self.source)

    def generate(self) -> str:
        """
        Generate the schema module.

        Returns:
            Generated TypeScript source

        Raises:
            DeclarationSourceError: If the declaration source cannot be located or parsed
        """
        provider = self._load_provider()

        # Enums are registered before any shape is translated
        self.registry = EnumRegistry()
        enums = EnumEmitter(self.registry, self.config).emit(provider)
        shapes = ShapeEmitter(self.registry, self.config).emit(provider)
        logger.info("Generated %d enum schema(s) from %s", len(self.registry), provider.path)

        return self._render_prefix() + enums + shapes

    def _render_prefix(self) -> str:
        comment = ""
        if self.config.add_generation_comment:
            comment = f"Generated by prisma_zod_gen {__version__}"
            if self.command_line:
                comment += f": {self.command_line}"
        return self.prefix_template.render(GENERATION_COMMENT=comment)

    def write(self, output: str | Path) -> str:
        """
        Generate the schema module and write it to disk.

        Args:
            output: Output file path

        Returns:
            The generated content

        Raises:
            DeclarationSourceError: If the declaration source cannot be located or parsed
            OutputValidationError: If the generated content fails validation
            FileExistsError: If the output exists and the output mode forbids overwriting
        """
        path = Path(output)
        output_config = self.config.output
        if output_config.mode == OutputMode.ERROR_IF_EXISTS and path.exists():
            raise FileExistsError(f"Output file already exists: {path}. Use force mode to overwrite.")

        content = self.generate()
        writer = AtomicWriter()
        if output_config.atomic_write:
            writer.write(path, content, validate=output_config.validate_before_write)
        else:
            if output_config.validate_before_write:
                writer.validate(content)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")

        logger.info("Wrote %s", path)
        return content
