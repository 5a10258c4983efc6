"""protoc plugin entry point.

protoc runs the plugin once per invocation, writes a serialized
``CodeGeneratorRequest`` to stdin and reads a serialized
``CodeGeneratorResponse`` from stdout::

    protoc --plugin=protoc-gen-pyservice --pyservice_out=. greeter.proto

Every failure is fatal: the error is logged to stderr, nothing is written
to stdout and the process exits with status 1.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, BinaryIO

from google.protobuf.compiler.plugin_pb2 import CodeGeneratorRequest, CodeGeneratorResponse
from google.protobuf.message import DecodeError, EncodeError

from protoc_gen_pyservice.config import PluginConfig, load_config
from protoc_gen_pyservice.descriptors import build_services
from protoc_gen_pyservice.emitter import emit
from protoc_gen_pyservice.exceptions import (
    PluginError,
    RequestDecodeError,
    RequestReadError,
    ResponseEncodeError,
)
from protoc_gen_pyservice.rendering import render

if TYPE_CHECKING:
    from protoc_gen_pyservice.emitter import GeneratedFile

logger = logging.getLogger("protoc_gen_pyservice")

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def read_request(stream: BinaryIO) -> bytes:
    """Read the whole serialized request from *stream*."""
    try:
        return stream.read()
    except OSError as exc:
        raise RequestReadError(f"Unable to read request from stdin: {exc}") from exc


def decode_request(data: bytes) -> CodeGeneratorRequest:
    """Parse serialized bytes as a CodeGeneratorRequest."""
    request = CodeGeneratorRequest()
    try:
        request.ParseFromString(data)
    except DecodeError as exc:
        raise RequestDecodeError(f"Unable to parse stdin as a CodeGeneratorRequest: {exc}") from exc
    return request


def generate_files(request: CodeGeneratorRequest, config: PluginConfig) -> list[GeneratedFile]:
    """Render one file per service of *request*, in request order.

    Raises:
        RenderError: If any service renders to invalid Python. No files
            are returned in that case.
    """
    files: list[GeneratedFile] = []
    for service in build_services(request, include_imports=config.include_imports):
        generated = emit(service, render(service, config))
        logger.debug("Generated %s for service %s", generated.name, service.name)
        files.append(generated)
    return files


def generate_response(
    request: CodeGeneratorRequest,
    config: PluginConfig | None = None,
) -> CodeGeneratorResponse:
    """Build the full plugin response for *request*.

    Args:
        request: Decoded protoc request.
        config: Plugin options; parsed from ``request.parameter`` when
            ``None``.

    Returns:
        Response listing every generated file.
    """
    if config is None:
        config = load_config(request.parameter)

    response = CodeGeneratorResponse()
    response.supported_features = CodeGeneratorResponse.FEATURE_PROTO3_OPTIONAL
    for generated in generate_files(request, config):
        response.file.add(name=generated.name, content=generated.content)
    logger.info("Generated %d file(s)", len(response.file))
    return response


def encode_response(response: CodeGeneratorResponse, stream: BinaryIO) -> None:
    """Serialize *response* and write it to *stream*."""
    try:
        payload = response.SerializeToString()
    except EncodeError as exc:
        raise ResponseEncodeError(f"Unable to serialize response: {exc}") from exc
    try:
        stream.write(payload)
        stream.flush()
    except OSError as exc:
        raise ResponseEncodeError(f"Unable to write response to stdout: {exc}") from exc


def run(stdin: BinaryIO, stdout: BinaryIO) -> None:
    """Run one read-generate-write pass.

    Raises:
        PluginError: On any failure. Nothing is written to *stdout* unless
            the whole response was generated.
    """
    request = decode_request(read_request(stdin))
    config = load_config(request.parameter)
    logger.setLevel(config.log_level.upper())
    encode_response(generate_response(request, config), stdout)


def main() -> None:
    """Console entry point for ``protoc-gen-pyservice``."""
    logging.basicConfig(level=logging.WARNING, format=_LOG_FORMAT, stream=sys.stderr)
    try:
        run(sys.stdin.buffer, sys.stdout.buffer)
    except PluginError as exc:
        logger.error("%s", exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
