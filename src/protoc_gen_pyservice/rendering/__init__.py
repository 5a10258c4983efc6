"""Stub rendering: templates, per-shape dispatch and formatting."""

from protoc_gen_pyservice.rendering.formatter import format_source
from protoc_gen_pyservice.rendering.renderer import (
    SERVER_STREAM_SEND_COUNT,
    module_alias,
    python_module,
    render,
    render_unformatted,
)

__all__ = [
    "SERVER_STREAM_SEND_COUNT",
    "format_source",
    "module_alias",
    "python_module",
    "render",
    "render_unformatted",
]
