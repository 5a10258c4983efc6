"""Shared pytest fixtures for protoc-gen-pyservice tests.

Provides protoc requests built from real descriptor protos, the descriptor
model derived from them, and in-memory ``_pb2`` / ``_pb2_grpc`` modules so
generated servicers can be imported and called without running protoc.
"""

from __future__ import annotations

import sys
import types
from typing import Any, Callable

import pytest
from google.protobuf.compiler.plugin_pb2 import CodeGeneratorRequest
from google.protobuf.descriptor_pb2 import FileDescriptorProto

from protoc_gen_pyservice.config import PluginConfig
from protoc_gen_pyservice.descriptors import ServiceDescriptor, build_services


def make_proto_file(
    name: str,
    package: str,
    service: str,
    methods: list[tuple[str, bool, bool]],
) -> FileDescriptorProto:
    """Build a file declaring ``Req``/``Resp`` and one service.

    Args:
        name: Proto file name.
        package: Proto package.
        service: Service name.
        methods: ``(name, client_streaming, server_streaming)`` per method.
    """
    proto_file = FileDescriptorProto(name=name, package=package)
    proto_file.message_type.add(name="Req")
    proto_file.message_type.add(name="Resp")
    svc = proto_file.service.add(name=service)
    for method_name, client_streaming, server_streaming in methods:
        method = svc.method.add(
            name=method_name,
            input_type=f".{package}.Req",
            output_type=f".{package}.Resp",
        )
        # Leave unset flags absent so defaults are exercised.
        if client_streaming:
            method.client_streaming = True
        if server_streaming:
            method.server_streaming = True
    return proto_file


@pytest.fixture()
def proto_file_factory() -> Callable[..., FileDescriptorProto]:
    """Expose :func:`make_proto_file` to tests."""
    return make_proto_file


@pytest.fixture()
def greeter_file() -> FileDescriptorProto:
    """``greeter.proto`` with one method of each RPC shape."""
    return make_proto_file(
        "greeter.proto",
        "pkg",
        "Greeter",
        [
            ("SayHello", False, False),
            ("ListHellos", False, True),
            ("RecordHellos", True, False),
            ("Chat", True, True),
        ],
    )


@pytest.fixture()
def greeter_request(greeter_file: FileDescriptorProto) -> CodeGeneratorRequest:
    """Request asking for ``greeter.proto``."""
    request = CodeGeneratorRequest()
    request.file_to_generate.append(greeter_file.name)
    request.proto_file.append(greeter_file)
    return request


@pytest.fixture()
def greeter_service(greeter_request: CodeGeneratorRequest) -> ServiceDescriptor:
    """Descriptor model of the Greeter service."""
    return build_services(greeter_request)[0]


@pytest.fixture()
def default_config() -> PluginConfig:
    """PluginConfig with all default values."""
    return PluginConfig()


class Req:
    """Stand-in for a generated request message."""


class Resp:
    """Stand-in for a generated response message."""


class GreeterServicer:
    """Stand-in for the grpc_tools-generated servicer base class."""


@pytest.fixture()
def greeter_modules(monkeypatch: pytest.MonkeyPatch) -> types.ModuleType:
    """Install in-memory ``greeter_pb2`` and ``greeter_pb2_grpc`` modules.

    Returns:
        The ``greeter_pb2`` module.
    """
    pb2 = types.ModuleType("greeter_pb2")
    pb2.Req = Req  # type: ignore[attr-defined]
    pb2.Resp = Resp  # type: ignore[attr-defined]
    pb2_grpc = types.ModuleType("greeter_pb2_grpc")
    pb2_grpc.GreeterServicer = GreeterServicer  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "greeter_pb2", pb2)
    monkeypatch.setitem(sys.modules, "greeter_pb2_grpc", pb2_grpc)
    return pb2


@pytest.fixture()
def load_module(greeter_modules: types.ModuleType) -> Callable[[str], dict[str, Any]]:
    """Return a loader that executes generated source and returns its namespace.

    Skips the test when grpcio is not installed, since generated modules
    import it.
    """
    try:
        import grpc  # noqa: F401
    except ImportError:
        pytest.skip("grpcio not installed")

    def _load(source: str) -> dict[str, Any]:
        namespace: dict[str, Any] = {"__name__": "generated_stub"}
        exec(compile(source, "greeter.proto.py", "exec", dont_inherit=True), namespace)  # noqa: S102
        return namespace

    return _load
