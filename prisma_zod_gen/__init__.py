"""Prisma to Zod Schema Generator

A Python package for generating Zod validation schemas from the
TypeScript declarations emitted by the Prisma client generator.
"""

__version__ = "1.0.1"
__author__ = "François Lagunas"

from .pipeline import (
    AtomicWriter,
    DeclarationProvider,
    DeclarationSourceError,
    GeneratorConfig,
    OutputConfig,
    OutputMode,
    OutputValidationError,
    PipelineGenerator,
    TypeTranslator,
)

__all__ = [
    "PipelineGenerator",
    "GeneratorConfig",
    "OutputConfig",
    "OutputMode",
    "DeclarationProvider",
    "DeclarationSourceError",
    "TypeTranslator",
    "AtomicWriter",
    "OutputValidationError",
]
