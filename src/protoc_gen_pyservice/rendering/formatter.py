"""Canonical formatting of rendered stub code.

Formatting doubles as a self-check: black refuses source it cannot parse,
and the formatted result is compiled (not executed) so that only valid
Python leaves the renderer.
"""

from __future__ import annotations

import logging

import black

from protoc_gen_pyservice.exceptions import RenderError

logger = logging.getLogger("protoc_gen_pyservice")

DEFAULT_LINE_LENGTH = 88


def format_source(
    source: str,
    *,
    line_length: int = DEFAULT_LINE_LENGTH,
    filename: str = "<stub>",
) -> str:
    """Format *source* with black and verify it is valid Python.

    Args:
        source: Rendered module text.
        line_length: Maximum line length for black.
        filename: Name used in error messages.

    Returns:
        The formatted source.

    Raises:
        RenderError: If black cannot parse the source or the formatted
            result does not compile.
    """
    try:
        formatted = black.format_str(source, mode=black.Mode(line_length=line_length))
    except black.InvalidInput as exc:
        raise RenderError(f"Unable to format generated code for {filename}: {exc}") from exc

    try:
        compile(formatted, filename, "exec", dont_inherit=True)
    except SyntaxError as exc:
        raise RenderError(f"Generated code for {filename} is not valid Python: {exc}") from exc

    logger.debug("Formatted %s (%d bytes)", filename, len(formatted))
    return formatted
