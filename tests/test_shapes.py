"""Tests for RPC shape classification."""

from __future__ import annotations

import itertools

import pytest

from protoc_gen_pyservice.shapes import RPCShape, classify


class TestClassify:
    """Tests for the streaming-flag truth table."""

    @pytest.mark.parametrize(
        ("client_streaming", "server_streaming", "expected"),
        [
            (False, False, RPCShape.UNARY),
            (False, True, RPCShape.SERVER_STREAMING),
            (True, False, RPCShape.CLIENT_STREAMING),
            (True, True, RPCShape.BIDI_STREAMING),
        ],
    )
    def test_truth_table(
        self, client_streaming: bool, server_streaming: bool, expected: RPCShape
    ) -> None:
        assert classify(client_streaming, server_streaming) is expected

    def test_total_and_injective(self) -> None:
        """Every flag pair maps to a shape, and no two pairs share one."""
        shapes = [classify(c, s) for c, s in itertools.product([False, True], repeat=2)]
        assert all(isinstance(shape, RPCShape) for shape in shapes)
        assert set(shapes) == set(RPCShape)

    def test_deterministic(self) -> None:
        assert classify(True, False) is classify(True, False)

    def test_accepts_truthy_values(self) -> None:
        assert classify(1, 0) is RPCShape.CLIENT_STREAMING  # type: ignore[arg-type]


class TestRPCShape:
    """Tests for RPCShape helpers."""

    def test_only_unary_is_not_streaming(self) -> None:
        assert not RPCShape.UNARY.is_streaming
        assert RPCShape.SERVER_STREAMING.is_streaming
        assert RPCShape.CLIENT_STREAMING.is_streaming
        assert RPCShape.BIDI_STREAMING.is_streaming
