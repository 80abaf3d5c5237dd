import pytest

from tractor_boulder_env.utils.cell import Cell

U = Cell.UNREACHABLE
R = Cell.REACHABLE
H = Cell.HOLE
B = Cell.BOULDER
X = Cell.BOULDER_IN_HOLE


@pytest.fixture
def mixed_grid():
    return [
        H, U, U, H,
        U, B, U, B,
        B, U, U, U,
        H, U, B, H,
    ]


@pytest.fixture
def corner_grid():
    # Tractor starts on 8; every corner holds a seated boulder.
    return [
        X, U, U, X,
        U, U, U, U,
        U, U, U, U,
        X, U, U, X,
    ]
