"""protoc-gen-pyservice: generate skeleton gRPC servicers from proto files.

A protoc plugin that emits one Python module per service, containing a
servicer class with placeholder implementations shaped after each RPC's
streaming mode (unary, server-streaming, client-streaming, bidi-streaming).
"""

from __future__ import annotations

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("protoc-gen-pyservice")
except PackageNotFoundError:
    __version__ = "0.0.0"

from protoc_gen_pyservice.config import PluginConfig, load_config
from protoc_gen_pyservice.descriptors import MethodDescriptor, ServiceDescriptor, build_services
from protoc_gen_pyservice.emitter import GeneratedFile, emit
from protoc_gen_pyservice.exceptions import (
    ConfigValidationError,
    PluginError,
    RenderError,
    RequestDecodeError,
    RequestReadError,
    ResponseEncodeError,
)
from protoc_gen_pyservice.rendering import render
from protoc_gen_pyservice.shapes import RPCShape, classify

__all__ = [
    "ConfigValidationError",
    "GeneratedFile",
    "MethodDescriptor",
    "PluginConfig",
    "PluginError",
    "RPCShape",
    "RenderError",
    "RequestDecodeError",
    "RequestReadError",
    "ResponseEncodeError",
    "ServiceDescriptor",
    "__version__",
    "build_services",
    "classify",
    "emit",
    "load_config",
    "render",
]
