"""
Schema backends.

Contains the type translator and the enum and shape emitters.
"""

from __future__ import annotations

from .base import SchemaEmitter
from .enum_emitter import EnumEmitter
from .shape_emitter import ShapeEmitter
from .translator import ANY_SCHEMA, TypeTranslator

__all__ = [
    "ANY_SCHEMA",
    "SchemaEmitter",
    "EnumEmitter",
    "ShapeEmitter",
    "TypeTranslator",
]
