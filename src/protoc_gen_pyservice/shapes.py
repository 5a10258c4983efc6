"""RPC shape classification.

gRPC recognizes four interaction patterns, fully determined by whether the
client side and the server side of a method send a stream of messages.
"""

from __future__ import annotations

import enum


class RPCShape(enum.Enum):
    """The four gRPC interaction patterns."""

    UNARY = "unary"
    SERVER_STREAMING = "server_streaming"
    CLIENT_STREAMING = "client_streaming"
    BIDI_STREAMING = "bidi_streaming"

    @property
    def is_streaming(self) -> bool:
        """Whether either side of the call sends a stream."""
        return self is not RPCShape.UNARY


_SHAPES: dict[tuple[bool, bool], RPCShape] = {
    (False, False): RPCShape.UNARY,
    (False, True): RPCShape.SERVER_STREAMING,
    (True, False): RPCShape.CLIENT_STREAMING,
    (True, True): RPCShape.BIDI_STREAMING,
}


def classify(client_streaming: bool, server_streaming: bool) -> RPCShape:
    """Map a method's streaming flags to its RPC shape.

    Args:
        client_streaming: The client sends a stream of requests.
        server_streaming: The server sends a stream of responses.

    Returns:
        The RPCShape for the flag pair. Every pair has exactly one shape.
    """
    return _SHAPES[(bool(client_streaming), bool(server_streaming))]
