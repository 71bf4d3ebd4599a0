"""
Naming policy: which declarations and properties are generator noise.

The declaration surface exposes synthetic members (symbol-keyed members,
array prototype methods) and generator-internal declaration families
(`*Input`, `*Args`, `*Payload`, ...). All of these string checks live here.
"""

from __future__ import annotations

from ..config import GeneratorConfig


class NamingPolicy:
    """Allow/deny decisions for declaration and property names."""

    def __init__(self, config: GeneratorConfig):
        self.config = config
        self._ignored_property_names = set(config.ignored_property_names)
        self._ignored_declarations = set(config.ignore_declarations)

    def is_ignored_property(self, name: str) -> bool:
        """Whether a property is a synthetic member to suppress."""
        if name in self._ignored_property_names:
            return True
        return any(name.startswith(prefix) for prefix in self.config.ignored_property_prefixes)

    def is_ignored_declaration(self, name: str) -> bool:
        """Whether a top-level declaration is generator-internal."""
        if name in self._ignored_declarations:
            return True
        if any(name.startswith(prefix) for prefix in self.config.ignore_prefixes):
            return True
        return any(name.endswith(suffix) for suffix in self.config.ignore_suffixes)
