"""Package rendered modules as output files."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from protoc_gen_pyservice.descriptors.types import ServiceDescriptor

FILE_EXTENSION = ".py"


@dataclass(frozen=True, slots=True)
class GeneratedFile:
    """One file of the plugin response.

    Attributes:
        name: Output path relative to the protoc output directory.
        content: Formatted module source.
    """

    name: str
    content: str


def output_file_name(source_file_name: str) -> str:
    """Derive the output file name from a proto file name.

    The name is lower-cased and the extension appended; separators are
    kept, so ``"Foo.proto"`` becomes ``"foo.proto.py"``.
    """
    return source_file_name.lower() + FILE_EXTENSION


def emit(service: ServiceDescriptor, content: str) -> GeneratedFile:
    """Pair a service's rendered content with its output file name.

    Services declared in the same proto file produce files with identical
    names; they are not merged or deduplicated.
    """
    return GeneratedFile(name=output_file_name(service.source_file_name), content=content)
