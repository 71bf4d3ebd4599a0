"""
Atomic file writer for generated schema modules.

Ensures that file writes are atomic to prevent a half-written schema
module from an interrupted operation.
"""

from __future__ import annotations

import logging
import tempfile
from collections.abc import Callable
from pathlib import Path

logger = logging.getLogger(__name__)

ZOD_IMPORT = 'import { z } from "zod";'

_CLOSING = {")": "(", "]": "[", "}": "{"}


class OutputValidationError(Exception):
    """Raised when generated output fails validation before being written."""

    pass


class AtomicWriter:
    """Handles atomic file writes with validation.

    Uses a two-phase commit approach:
    1. Write to a temporary file in the same directory
    2. Validate the content
    3. Atomically replace the target file
    """

    def __init__(self, validate: Callable[[str], None] | None = None):
        """Initialize the atomic writer.

        Args:
            validate: Optional validation function for the generated module
        """
        self._validate = validate or self._default_validate

    def write(self, path: Path, content: str, validate: bool = True) -> None:
        """Write content to file atomically.

        Args:
            path: Target file path
            content: Content to write
            validate: Whether to validate before finalizing

        Raises:
            OutputValidationError: If validation fails
            OSError: If file operations fail
        """
        path.parent.mkdir(parents=True, exist_ok=True)

        # Same directory keeps the final rename on one filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )
        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)

            if validate:
                self._validate(content)

            temp_path.replace(path)
            logger.debug("Wrote %d bytes to %s", len(content), path)
        except Exception:
            if temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError:
                    logger.warning("Could not remove temporary file %s", temp_path)
            raise

    def validate(self, content: str) -> None:
        """Run the configured validation on generated content.

        Raises:
            OutputValidationError: If validation fails
        """
        self._validate(content)

    def _default_validate(self, content: str) -> None:
        """Structural checks on a generated schema module.

        Raises:
            OutputValidationError: If validation fails
        """
        if ZOD_IMPORT not in content:
            raise OutputValidationError("Generated module is missing the zod import")

        stack: list[str] = []
        for line_number, line in enumerate(content.splitlines(), start=1):
            if line.lstrip().startswith("//"):
                continue
            in_string = False
            escaped = False
            for char in line:
                if in_string:
                    if escaped:
                        escaped = False
                    elif char == "\\":
                        escaped = True
                    elif char == '"':
                        in_string = False
                elif char == '"':
                    in_string = True
                elif char in "([{":
                    stack.append(char)
                elif char in _CLOSING:
                    if not stack or stack.pop() != _CLOSING[char]:
                        raise OutputValidationError(f"Generated module has an unbalanced '{char}' at line {line_number}")
            if in_string:
                raise OutputValidationError(f"Generated module has an unterminated string at line {line_number}")

        if stack:
            raise OutputValidationError(f"Generated module has {len(stack)} unclosed delimiter(s)")
