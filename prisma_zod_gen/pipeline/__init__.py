"""
Pipeline - TypeScript declarations to Zod schema generator.

This module provides a multi-phase architecture for generating Zod
schemas from a Prisma client declaration module:

1. Phase 1 (Declarations): Parse the .d.ts source into a type graph
2. Phase 2 (Enum emitter): Emit enum schemas and fill the enum registry
3. Phase 3 (Shape emitter): Translate data-model declarations
4. Phase 4 (Writer): Atomically write the generated module
"""

from __future__ import annotations

from .analyzer import EnumRegistry, NamingPolicy
from .backends import EnumEmitter, ShapeEmitter, TypeTranslator
from .config import GeneratorConfig, OutputConfig, OutputMode
from .declarations import DeclarationProvider, DeclarationSourceError
from .generator import PipelineGenerator
from .writer import AtomicWriter, OutputValidationError

__all__ = [
    "PipelineGenerator",
    "GeneratorConfig",
    "OutputConfig",
    "OutputMode",
    "DeclarationProvider",
    "DeclarationSourceError",
    "EnumRegistry",
    "NamingPolicy",
    "EnumEmitter",
    "ShapeEmitter",
    "TypeTranslator",
    "AtomicWriter",
    "OutputValidationError",
]
