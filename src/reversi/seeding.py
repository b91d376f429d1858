"""
Starting layouts

Key idea: the starting layout is a policy (a function of the player count), so it can be swapped
without touching the Board. The default policy reproduces the hand-ordered layout below.

NOTE: For more than 2 players the layout only guarantees every player starts with at least 3 pieces.
It is not symmetric and not proven fair for every player count.
"""

from typing import Callable

from src.reversi.square import BOARD_SIZE, Square, Vector

SeedingPolicy = Callable[[int], dict[Square, int]]

CENTER = BOARD_SIZE // 2

# Offsets from CENTER, radiating outwards: core 2x2, inner ring, outer ring.
RADIAL_OFFSETS: tuple[Vector, ...] = (
    # core
    (-1, -1), (-1, 0), (0, -1), (0, 0),
    # inner ring
    (-2, -1), (-2, 0), (1, -1), (1, 0),
    (-1, -2), (0, -2), (-1, 1), (0, 1),
    # outer ring
    (-2, -2), (-2, 1), (1, -2), (1, 1),
    (-3, -1), (-3, 0), (2, -1), (2, 0),
    (-1, -3), (0, -3), (-1, 2), (0, 2),
)  # fmt: skip

RADIAL_POSITIONS: tuple[Square, ...] = tuple(
    Square(CENTER + d_row, CENTER + d_col) for d_row, d_col in RADIAL_OFFSETS
)

PIECES_PER_PLAYER = 3


def classic_layout() -> dict[Square, int]:
    """Diagonal 2x2 block in the centre of the board."""
    return {
        Square(CENTER - 1, CENTER - 1): 1,
        Square(CENTER - 1, CENTER): 2,
        Square(CENTER, CENTER - 1): 2,
        Square(CENTER, CENTER): 1,
    }


def radial_layout(player_count: int) -> dict[Square, int]:
    """Deal the radial positions round-robin: position i goes to player (i mod N) + 1."""
    n_seeds = min(len(RADIAL_POSITIONS), player_count * PIECES_PER_PLAYER)
    return {
        RADIAL_POSITIONS[i]: (i % player_count) + 1 for i in range(n_seeds)
    }


def default_layout(player_count: int) -> dict[Square, int]:
    if player_count == 2:
        return classic_layout()
    return radial_layout(player_count)


def preview_layout(
    player_count: int, policy: SeedingPolicy = default_layout
) -> dict[Square, int]:
    """Side-effect free: the starting pieces a match with this many players would get."""
    return policy(player_count)
