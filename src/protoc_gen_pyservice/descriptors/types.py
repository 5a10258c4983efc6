"""Data types for the descriptor model.

Plain aggregates holding copies of the descriptor fields the renderer needs,
plus derived values. Nothing here keeps a reference to the protobuf request
objects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from protoc_gen_pyservice.shapes import RPCShape, classify

if TYPE_CHECKING:
    from collections.abc import Mapping

_TYPE_SEPARATOR = "."


def normalize_type_name(type_name: str) -> str:
    """Strip the leading separator from a fully-qualified proto type name.

    ``".pkg.Req"`` becomes ``"pkg.Req"``. Already-stripped names are
    returned unchanged, so the operation is idempotent.
    """
    return type_name.lstrip(_TYPE_SEPARATOR)


@dataclass(frozen=True, slots=True)
class MessageLocation:
    """Where a message type is declared.

    Attributes:
        source_file_name: The ``.proto`` file declaring the message.
        local_name: Message name relative to the file's package, with
            nested messages joined by dots (e.g. ``"Outer.Inner"``).
    """

    source_file_name: str
    local_name: str


@dataclass(frozen=True, slots=True)
class MethodDescriptor:
    """One RPC of a service.

    Attributes:
        name: Method name as declared in the proto file.
        input_type: Fully-qualified request type (e.g. ``".pkg.Req"``).
        output_type: Fully-qualified response type.
        client_streaming: The client sends a stream of requests.
        server_streaming: The server sends a stream of responses.
        service_name: Name of the service declaring this method. Used for
            identifier synthesis only.
    """

    name: str
    input_type: str
    output_type: str
    client_streaming: bool = False
    server_streaming: bool = False
    service_name: str = ""

    @property
    def shape(self) -> RPCShape:
        """RPC shape derived from the streaming flags."""
        return classify(self.client_streaming, self.server_streaming)

    @property
    def trimmed_input(self) -> str:
        """Request type without the leading separator."""
        return normalize_type_name(self.input_type)

    @property
    def trimmed_output(self) -> str:
        """Response type without the leading separator."""
        return normalize_type_name(self.output_type)

    @property
    def stream_name(self) -> str:
        """Name of the stream-handle type for streaming methods."""
        return f"{self.service_name}_{self.name}Server"


@dataclass(frozen=True, slots=True)
class ServiceDescriptor:
    """One service of a generation request.

    Attributes:
        name: Service name as declared in the proto file.
        methods: Methods in declaration order.
        source_file_name: Path of the declaring ``.proto`` file, as given
            by protoc (e.g. ``"pkg/greeter.proto"``).
        package_name: Proto package of the declaring file (may be empty).
        message_locations: Declaration sites of the message types the
            methods reference, keyed by normalized full name. Types absent
            from this mapping are resolved against the service's own file.
    """

    name: str
    methods: tuple[MethodDescriptor, ...] = ()
    source_file_name: str = ""
    package_name: str = ""
    message_locations: Mapping[str, MessageLocation] = field(default_factory=dict)

    def locate(self, type_name: str) -> MessageLocation:
        """Return the declaration site of a message type.

        Args:
            type_name: Fully-qualified or normalized message type name.

        Returns:
            The indexed location, or a location in the service's own file
            with the service package prefix removed.
        """
        normalized = normalize_type_name(type_name)
        location = self.message_locations.get(normalized)
        if location is not None:
            return location
        local_name = normalized
        prefix = f"{self.package_name}{_TYPE_SEPARATOR}" if self.package_name else ""
        if prefix and normalized.startswith(prefix):
            local_name = normalized[len(prefix) :]
        return MessageLocation(source_file_name=self.source_file_name, local_name=local_name)
