"""Positional heatmaps used to break ties in move ordering.

``OPENING_HEATMAP[board_index][square]`` counts how often a piece of that
board index arrived on that square in a corpus of opening play. Values are
only compared with each other; they never enter a search score.
"""

from __future__ import annotations

from typing import Final, TypeAlias

Heatmap: TypeAlias = tuple[tuple[int, ...], ...]

ZERO_HEATMAP: Final[Heatmap] = tuple((0,) * 64 for _ in range(12))

OPENING_HEATMAP: Final[Heatmap] = (
    # white pawn
    (
        0, 0, 0, 0, 0, 0, 0, 0,
        0, 0, 0, 0, 0, 0, 2, 0,
        10, 1, 18, 10, 9, 9, 1, 0,
        1, 33, 61, 475, 338, 22, 6, 5,
        51, 142, 1144, 2288, 2246, 392, 88, 80,
        88, 74, 361, 111, 276, 124, 322, 62,
        0, 0, 0, 0, 0, 0, 0, 0,
        0, 0, 0, 0, 0, 0, 0, 0,
    ),
    # white rook
    (
        0, 0, 0, 0, 0, 0, 0, 1,
        0, 0, 0, 0, 0, 0, 0, 0,
        0, 0, 0, 0, 0, 0, 0, 0,
        0, 0, 0, 0, 7, 0, 0, 0,
        0, 0, 0, 0, 3, 0, 0, 0,
        1, 0, 4, 0, 1, 0, 0, 1,
        0, 0, 0, 0, 0, 0, 0, 0,
        0, 5, 35, 32, 94, 499, 3, 0,
    ),
    # white knight
    (
        1, 0, 0, 0, 0, 0, 0, 2,
        0, 0, 2, 0, 0, 19, 0, 2,
        0, 0, 15, 1, 2, 7, 0, 0,
        1, 31, 0, 19, 145, 2, 79, 0,
        9, 0, 11, 268, 58, 0, 1, 7,
        16, 17, 1470, 1, 3, 2054, 9, 15,
        0, 0, 2, 115, 62, 1, 0, 0,
        0, 1, 0, 0, 5, 2, 2, 0,
    ),
    # white bishop
    (
        1, 0, 0, 0, 0, 0, 0, 0,
        0, 1, 1, 3, 20, 22, 1, 0,
        0, 1, 35, 0, 0, 17, 0, 2,
        0, 314, 1, 13, 2, 0, 292, 0,
        139, 2, 509, 2, 0, 47, 0, 35,
        6, 108, 1, 162, 124, 1, 2, 3,
        0, 51, 19, 57, 148, 1, 205, 0,
        1, 0, 2, 0, 0, 3, 0, 0,
    ),
    # white queen
    (
        0, 0, 0, 2, 0, 0, 0, 1,
        0, 0, 0, 0, 0, 1, 3, 2,
        0, 0, 0, 0, 0, 0, 0, 1,
        0, 1, 1, 4, 1, 2, 0, 24,
        22, 0, 13, 32, 3, 2, 24, 3,
        0, 48, 7, 17, 6, 42, 0, 0,
        0, 0, 66, 49, 67, 3, 0, 0,
        0, 1, 0, 3, 3, 0, 0, 0,
    ),
    # white king
    (
        0, 0, 0, 0, 0, 0, 0, 0,
        0, 0, 0, 0, 0, 0, 0, 0,
        0, 0, 0, 0, 0, 0, 0, 0,
        0, 0, 0, 0, 0, 0, 0, 0,
        0, 0, 0, 0, 0, 0, 0, 0,
        0, 0, 0, 0, 1, 0, 1, 0,
        0, 0, 0, 0, 9, 4, 1, 0,
        0, 0, 23, 4, 0, 26, 498, 6,
    ),
    # black pawn
    (
        0, 0, 0, 0, 0, 0, 0, 0,
        0, 0, 0, 0, 0, 0, 0, 0,
        348, 125, 418, 716, 867, 40, 525, 86,
        17, 238, 834, 1360, 1326, 216, 134, 18,
        0, 13, 174, 512, 190, 170, 68, 4,
        1, 0, 34, 3, 4, 37, 4, 0,
        0, 6, 0, 0, 0, 0, 0, 2,
        0, 0, 0, 0, 0, 0, 0, 0,
    ),
    # black rook
    (
        0, 8, 3, 3, 17, 458, 5, 0,
        1, 0, 0, 0, 0, 1, 0, 1,
        0, 0, 0, 0, 1, 0, 0, 0,
        0, 0, 0, 0, 0, 0, 0, 0,
        0, 0, 0, 0, 0, 0, 0, 0,
        0, 0, 0, 0, 0, 0, 0, 0,
        0, 0, 0, 0, 0, 0, 0, 0,
        1, 0, 0, 0, 0, 0, 0, 0,
    ),
    # black knight
    (
        0, 13, 0, 2, 1, 1, 8, 0,
        0, 4, 3, 219, 58, 2, 1, 0,
        21, 32, 1057, 15, 1, 1874, 4, 29,
        56, 0, 8, 130, 31, 3, 1, 10,
        0, 9, 4, 40, 190, 2, 21, 0,
        0, 0, 31, 0, 2, 1, 3, 0,
        0, 0, 1, 2, 0, 2, 0, 0,
        0, 0, 0, 0, 0, 2, 0, 0,
    ),
    # black bishop
    (
        0, 0, 0, 0, 1, 3, 0, 1,
        1, 74, 0, 44, 307, 0, 387, 2,
        20, 31, 2, 44, 56, 5, 9, 5,
        27, 0, 241, 0, 2, 79, 3, 1,
        0, 297, 3, 5, 2, 0, 98, 4,
        0, 0, 60, 3, 1, 8, 0, 3,
        0, 0, 0, 5, 1, 3, 1, 1,
        0, 1, 0, 1, 0, 3, 0, 0,
    ),
    # black queen
    (
        1, 1, 2, 4, 5, 0, 0, 0,
        0, 0, 36, 10, 62, 0, 0, 0,
        0, 28, 0, 10, 2, 36, 6, 0,
        79, 0, 0, 53, 5, 4, 12, 2,
        0, 1, 1, 9, 3, 2, 0, 51,
        1, 0, 1, 0, 0, 0, 0, 2,
        0, 2, 0, 0, 0, 0, 3, 0,
        0, 0, 0, 0, 0, 0, 0, 0,
    ),
    # black king
    (
        0, 0, 2, 7, 0, 4, 458, 0,
        0, 0, 0, 0, 5, 17, 2, 0,
        0, 0, 0, 0, 1, 1, 0, 0,
        0, 0, 0, 0, 0, 0, 0, 0,
        0, 0, 0, 0, 0, 0, 0, 0,
        0, 0, 0, 0, 0, 0, 0, 0,
        0, 0, 0, 0, 0, 0, 0, 0,
        0, 0, 0, 0, 0, 0, 0, 0,
    ),
)
