"""
Utility functions for the Zod schema generator.
"""

import json
import re

# Property names that can be written unquoted in a TypeScript object literal
_IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def quote_string(value: str) -> str:
    """Quote a value as a double-quoted TypeScript string literal."""
    return json.dumps(value, ensure_ascii=False)


def format_property_key(name: str) -> str:
    """Format a property name for an object literal.

    Examples:
        "email" -> email
        "first-name" -> "first-name"
    """
    if _IDENTIFIER_PATTERN.match(name):
        return name
    return quote_string(name)


def indent_continuation(text: str, indent: str = "  ") -> str:
    """Indent every line of a multi-line fragment except the first."""
    lines = text.split("\n")
    return "\n".join([lines[0]] + [indent + line for line in lines[1:]])
