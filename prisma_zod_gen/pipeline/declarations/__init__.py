"""
Declarations module.

Contains the type graph node definitions and the tree-sitter based
provider that builds them from a TypeScript declaration file.
"""

from __future__ import annotations

from .provider import DeclarationProvider, DeclarationSourceError
from .types import (
    DeclarationKind,
    DeclaredProperty,
    DeclaredType,
    EnumDeclaration,
    ExportedDeclaration,
    TypeAliasDeclaration,
    TypeKind,
)

__all__ = [
    "DeclarationProvider",
    "DeclarationSourceError",
    "DeclarationKind",
    "DeclaredProperty",
    "DeclaredType",
    "EnumDeclaration",
    "ExportedDeclaration",
    "TypeAliasDeclaration",
    "TypeKind",
]
