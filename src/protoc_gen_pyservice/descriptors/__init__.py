"""Descriptor model: services and methods of a generation request."""

from protoc_gen_pyservice.descriptors.builder import build_services, index_messages
from protoc_gen_pyservice.descriptors.types import (
    MessageLocation,
    MethodDescriptor,
    ServiceDescriptor,
    normalize_type_name,
)

__all__ = [
    "MessageLocation",
    "MethodDescriptor",
    "ServiceDescriptor",
    "build_services",
    "index_messages",
    "normalize_type_name",
]
