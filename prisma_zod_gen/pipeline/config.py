"""
Configuration for the Zod schema generator pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

# Array prototype methods the declaration surface exposes as properties
ARRAY_METHOD_NAMES = [
    "pop",
    "push",
    "concat",
    "join",
    "reverse",
    "shift",
    "slice",
    "sort",
    "splice",
    "unshift",
    "indexOf",
    "lastIndexOf",
    "every",
    "some",
    "forEach",
    "find",
    "findIndex",
    "filter",
    "map",
    "reduce",
    "reduceRight",
    "includes",
    "flat",
    "flatMap",
]


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when the output file already exists.
    """

    ERROR_IF_EXISTS = "error"  # Raise error if file exists
    FORCE = "force"  # Default: overwrite


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        validate_before_write: Whether to check the generated text before writing
        atomic_write: Whether to use atomic file writes
    """

    mode: OutputMode = OutputMode.FORCE
    validate_before_write: bool = True
    atomic_write: bool = True


@dataclass
class GeneratorConfig:
    """Configuration options for schema generation."""

    # Namespace holding the generated enums
    enum_namespace: str = "$Enums"

    # Types whose printed signature contains this marker become z.any()
    opaque_type_marker: str = "Json"

    # Generator-internal declaration families skipped by the shape emitter
    ignore_prefixes: list[str] = field(default_factory=lambda: ["Prisma", "_"])
    ignore_suffixes: list[str] = field(default_factory=lambda: ["Input", "Args", "Payload"])

    # Declarations to skip by exact name
    ignore_declarations: list[str] = field(default_factory=list)

    # Synthetic members suppressed from object shapes
    ignored_property_prefixes: list[str] = field(default_factory=lambda: ["__@"])
    ignored_property_names: list[str] = field(default_factory=lambda: list(ARRAY_METHOD_NAMES))

    # Add generation comment at top of file
    add_generation_comment: bool = False

    # Output configuration
    output: OutputConfig = field(default_factory=OutputConfig)

    @staticmethod
    def from_dict(d: dict) -> GeneratorConfig:
        """Create a config from a dictionary."""
        config = GeneratorConfig()
        for k, v in d.items():
            if k == "output" and isinstance(v, dict):
                mode = v.get("mode", OutputMode.FORCE)
                if isinstance(mode, str):
                    mode = OutputMode(mode)
                config.output = OutputConfig(
                    mode=mode,
                    validate_before_write=v.get("validate_before_write", True),
                    atomic_write=v.get("atomic_write", True),
                )
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "enum_namespace": self.enum_namespace,
            "opaque_type_marker": self.opaque_type_marker,
            "ignore_prefixes": self.ignore_prefixes,
            "ignore_suffixes": self.ignore_suffixes,
            "ignore_declarations": self.ignore_declarations,
            "ignored_property_prefixes": self.ignored_property_prefixes,
            "ignored_property_names": self.ignored_property_names,
            "add_generation_comment": self.add_generation_comment,
            "output": {
                "mode": self.output.mode.value,
                "validate_before_write": self.output.validate_before_write,
                "atomic_write": self.output.atomic_write,
            },
        }
