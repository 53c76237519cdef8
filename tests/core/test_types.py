"""Tests for square helpers and bit operations."""

import pytest

from hallchess.core.types import (
    A1,
    A8,
    E4,
    H1,
    H8,
    bit_on,
    file_of,
    find_bit_on,
    iter_bits,
    make_square,
    parse_square,
    rank_of,
    square_name,
)


class TestSquareLayout:
    def test_corners(self) -> None:
        assert A8 == 0
        assert H8 == 7
        assert A1 == 56
        assert H1 == 63

    def test_file_and_rank(self) -> None:
        assert file_of(E4) == 4
        assert rank_of(E4) == 3

    def test_make_square_inverts_file_rank(self) -> None:
        for sq in range(64):
            assert make_square(file_of(sq), rank_of(sq)) == sq

    def test_square_name(self) -> None:
        assert square_name(0) == "a8"
        assert square_name(63) == "h1"
        assert square_name(36) == "e4"

    def test_parse_square(self) -> None:
        assert parse_square("e4") == 36
        assert parse_square("d2") == 51

    @pytest.mark.parametrize("name", ["", "e", "i1", "a9", "e44"])
    def test_parse_square_rejects_garbage(self, name: str) -> None:
        with pytest.raises(ValueError):
            parse_square(name)


class TestBitOperations:
    def test_bit_on(self) -> None:
        bitboard = (1 << 0) | (1 << 63)
        assert bit_on(bitboard, 0)
        assert bit_on(bitboard, 63)
        assert not bit_on(bitboard, 1)

    def test_find_bit_on_from_zero(self) -> None:
        assert find_bit_on(1 << 36) == 36

    def test_find_bit_on_respects_offset(self) -> None:
        bitboard = (1 << 3) | (1 << 40)
        assert find_bit_on(bitboard, 0) == 3
        assert find_bit_on(bitboard, 3) == 3
        assert find_bit_on(bitboard, 4) == 40

    def test_find_bit_on_empty(self) -> None:
        assert find_bit_on(0) is None
        assert find_bit_on(1 << 3, 4) is None

    def test_iter_bits_ascending(self) -> None:
        bitboard = (1 << 63) | (1 << 5) | (1 << 20)
        assert list(iter_bits(bitboard)) == [5, 20, 63]

    def test_iter_bits_empty(self) -> None:
        assert list(iter_bits(0)) == []
