"""Tests for output file naming and packaging."""

from __future__ import annotations

import pytest

from protoc_gen_pyservice.descriptors.types import ServiceDescriptor
from protoc_gen_pyservice.emitter import GeneratedFile, emit, output_file_name


class TestOutputFileName:
    """Tests for output_file_name()."""

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("Foo.proto", "foo.proto.py"),
            ("greeter.proto", "greeter.proto.py"),
            ("API/v1/Greeter.proto", "api/v1/greeter.proto.py"),
        ],
    )
    def test_lowercases_and_appends_extension(self, source: str, expected: str) -> None:
        assert output_file_name(source) == expected

    def test_deterministic(self) -> None:
        assert output_file_name("Foo.proto") == output_file_name("Foo.proto")


class TestEmit:
    """Tests for emit()."""

    def test_pairs_name_and_content(self) -> None:
        service = ServiceDescriptor(name="Greeter", source_file_name="Greeter.proto")
        generated = emit(service, "content\n")
        assert generated == GeneratedFile(name="greeter.proto.py", content="content\n")

    def test_services_of_one_file_share_a_name(self) -> None:
        """Name collisions are kept as separate files, not merged."""
        first = ServiceDescriptor(name="First", source_file_name="api.proto")
        second = ServiceDescriptor(name="Second", source_file_name="API.proto")
        files = [emit(first, "a"), emit(second, "b")]
        assert [f.name for f in files] == ["api.proto.py", "api.proto.py"]
        assert [f.content for f in files] == ["a", "b"]

    def test_frozen(self) -> None:
        generated = GeneratedFile(name="a.py", content="")
        with pytest.raises(AttributeError):
            generated.name = "b.py"  # type: ignore[misc]
