"""Render skeleton gRPC servicers from service descriptors.

The jinja2 environment and compiled templates are built once at import and
never mutated. Each method is rendered by the template of its RPC shape,
then spliced into the module template and formatted with black.

Generated modules import the ``grpc_tools`` outputs for the proto files
involved, using the same module names and aliases ``grpc_tools.protoc``
uses in its own ``_pb2_grpc`` files::

    pkg/greeter.proto -> import pkg.greeter_pb2 as pkg_dot_greeter__pb2
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import jinja2

from protoc_gen_pyservice.rendering.formatter import DEFAULT_LINE_LENGTH, format_source
from protoc_gen_pyservice.rendering.templates import HEADER, METHOD_TEMPLATES, MODULE_TEMPLATE
from protoc_gen_pyservice.shapes import RPCShape

if TYPE_CHECKING:
    from protoc_gen_pyservice.config import PluginConfig
    from protoc_gen_pyservice.descriptors.types import MethodDescriptor, ServiceDescriptor

logger = logging.getLogger("protoc_gen_pyservice")

# Number of placeholder responses a server-streaming stub sends.
SERVER_STREAM_SEND_COUNT = 10

DEFAULT_CLASS_NAME = "Service"

_ENV = jinja2.Environment(
    autoescape=False,
    keep_trailing_newline=True,
    trim_blocks=True,
    lstrip_blocks=True,
    undefined=jinja2.StrictUndefined,
)
_MODULE = _ENV.from_string(MODULE_TEMPLATE)
_METHODS: dict[RPCShape, jinja2.Template] = {
    shape: _ENV.from_string(source) for shape, source in METHOD_TEMPLATES.items()
}


def python_module(proto_file_name: str, suffix: str = "_pb2") -> str:
    """Return the module ``grpc_tools.protoc`` generates for a proto file.

    Example: ``"pkg/my-api.proto"`` -> ``"pkg.my_api_pb2"``.
    """
    base = proto_file_name.removesuffix(".proto")
    return base.replace("-", "_").replace("/", ".") + suffix


def module_alias(module: str) -> str:
    """Return the import alias ``grpc_tools.protoc`` uses for *module*."""
    return module.replace("_", "__").replace(".", "_dot_")


class _TypeResolver:
    """Resolve proto message types to Python expressions for one service."""

    def __init__(self, service: ServiceDescriptor) -> None:
        self._service = service
        self._modules: set[str] = set()

    def reference(self, type_name: str) -> str:
        location = self._service.locate(type_name)
        module = python_module(location.source_file_name)
        self._modules.add(module)
        return f"{module_alias(module)}.{location.local_name}"

    @property
    def modules(self) -> list[str]:
        return sorted(self._modules)


def _method_context(method: MethodDescriptor, resolver: _TypeResolver) -> dict[str, Any]:
    return {
        "name": method.name,
        "input": resolver.reference(method.trimmed_input),
        "output": resolver.reference(method.trimmed_output),
        "stream_name": method.stream_name,
        "send_count": SERVER_STREAM_SEND_COUNT,
    }


def _stream_alias(method: MethodDescriptor, context: dict[str, Any]) -> tuple[str, str]:
    """Return ``(alias_name, element_type)`` of a streaming method's handle.

    Server-streaming handles carry the outgoing responses; client- and
    bidi-streaming handles carry the incoming requests.
    """
    if method.shape is RPCShape.SERVER_STREAMING:
        return method.stream_name, context["output"]
    return method.stream_name, context["input"]


def render_unformatted(service: ServiceDescriptor, class_name: str = DEFAULT_CLASS_NAME) -> str:
    """Render a servicer module for *service* without formatting it."""
    resolver = _TypeResolver(service)
    blocks: list[str] = []
    stream_aliases: list[tuple[str, str]] = []

    for method in service.methods:
        context = _method_context(method, resolver)
        blocks.append(_METHODS[method.shape].render(context))
        if method.shape.is_streaming:
            stream_aliases.append(_stream_alias(method, context))

    grpc_module = python_module(service.source_file_name, "_pb2_grpc")
    imports = [(module, module_alias(module)) for module in resolver.modules]
    imports.append((grpc_module, module_alias(grpc_module)))

    full_service_name = (
        f"{service.package_name}.{service.name}" if service.package_name else service.name
    )
    return _MODULE.render(
        header=HEADER,
        source_file_name=service.source_file_name,
        streaming=bool(stream_aliases),
        imports=imports,
        stream_aliases=stream_aliases,
        class_name=class_name,
        servicer_base=f"{module_alias(grpc_module)}.{service.name}Servicer",
        full_service_name=full_service_name,
        methods=blocks,
    )


def render(service: ServiceDescriptor, config: PluginConfig | None = None) -> str:
    """Render and format a servicer module for *service*.

    Args:
        service: Service to render.
        config: Plugin options; defaults apply when ``None``.

    Returns:
        Formatted Python source of the module.

    Raises:
        RenderError: If the rendered text is not valid Python.
    """
    class_name = config.class_name if config is not None else DEFAULT_CLASS_NAME
    line_length = config.line_length if config is not None else DEFAULT_LINE_LENGTH

    source = render_unformatted(service, class_name)
    logger.debug("Rendered %s with %d method(s)", service.name, len(service.methods))
    return format_source(source, line_length=line_length, filename=service.source_file_name)
