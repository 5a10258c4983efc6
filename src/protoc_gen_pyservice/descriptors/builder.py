"""Build the descriptor model from a decoded CodeGeneratorRequest."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from protoc_gen_pyservice.descriptors.types import (
    MessageLocation,
    MethodDescriptor,
    ServiceDescriptor,
    normalize_type_name,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from google.protobuf.compiler.plugin_pb2 import CodeGeneratorRequest
    from google.protobuf.descriptor_pb2 import DescriptorProto, FileDescriptorProto

logger = logging.getLogger("protoc_gen_pyservice")


def _walk_messages(
    messages: Iterable[DescriptorProto], prefix: str
) -> Iterator[str]:
    """Yield package-relative names of messages, nested ones included."""
    for message in messages:
        local_name = f"{prefix}{message.name}"
        yield local_name
        yield from _walk_messages(message.nested_type, f"{local_name}.")


def index_messages(proto_files: Iterable[FileDescriptorProto]) -> dict[str, MessageLocation]:
    """Map every message declared in *proto_files* to its declaration site.

    Args:
        proto_files: File descriptors of a request (protoc includes every
            transitive dependency).

    Returns:
        Mapping of normalized full type name to MessageLocation.
    """
    index: dict[str, MessageLocation] = {}
    for proto_file in proto_files:
        package_prefix = f"{proto_file.package}." if proto_file.package else ""
        for local_name in _walk_messages(proto_file.message_type, ""):
            index[f"{package_prefix}{local_name}"] = MessageLocation(
                source_file_name=proto_file.name,
                local_name=local_name,
            )
    return index


def build_services(
    request: CodeGeneratorRequest,
    *,
    include_imports: bool = True,
) -> list[ServiceDescriptor]:
    """Flatten the services of a request into ServiceDescriptors.

    File order and service order are preserved. Method fields are copied
    verbatim; unset streaming flags read as ``False``.

    Args:
        request: Decoded protoc request.
        include_imports: When ``False``, only services declared in
            ``request.file_to_generate`` are returned.

    Returns:
        One ServiceDescriptor per service, in request order.
    """
    index = index_messages(request.proto_file)
    wanted = set(request.file_to_generate)
    services: list[ServiceDescriptor] = []

    for proto_file in request.proto_file:
        if not include_imports and proto_file.name not in wanted:
            continue
        for service in proto_file.service:
            methods = tuple(
                MethodDescriptor(
                    name=method.name,
                    input_type=method.input_type,
                    output_type=method.output_type,
                    client_streaming=method.client_streaming,
                    server_streaming=method.server_streaming,
                    service_name=service.name,
                )
                for method in service.method
            )
            referenced = {normalize_type_name(m.input_type) for m in methods} | {
                normalize_type_name(m.output_type) for m in methods
            }
            services.append(
                ServiceDescriptor(
                    name=service.name,
                    methods=methods,
                    source_file_name=proto_file.name,
                    package_name=proto_file.package,
                    message_locations={
                        name: index[name] for name in sorted(referenced) if name in index
                    },
                )
            )
            logger.debug(
                "Service %s from %s: %d method(s)",
                service.name,
                proto_file.name,
                len(methods),
            )

    return services
