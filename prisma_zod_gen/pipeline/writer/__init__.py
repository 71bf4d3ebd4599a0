"""
Writer module.

Persists the generated schema module.
"""

from __future__ import annotations

from .atomic_writer import AtomicWriter, OutputValidationError

__all__ = [
    "AtomicWriter",
    "OutputValidationError",
]
