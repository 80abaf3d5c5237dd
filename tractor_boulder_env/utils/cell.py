# tractor_boulder_env/utils/cell.py

from enum import IntEnum


class Cell(IntEnum):
    """
    Tag stored in every grid cell.

    REACHABLE is a transient marker written by a flood-fill. It is only valid
    for the grid snapshot it was computed on and must be cleared back to
    UNREACHABLE before reachability is recomputed.
    """

    UNREACHABLE = 0
    REACHABLE = 1
    HOLE = 2
    BOULDER = 3
    BOULDER_IN_HOLE = 4

    @property
    def symbol(self) -> str:
        return CELL_TO_SYMBOL[self]

    @classmethod
    def from_symbol(cls, symbol: str) -> "Cell":
        try:
            return SYMBOL_TO_CELL[symbol]
        except KeyError:
            raise ValueError(f"Unknown cell symbol {symbol!r}") from None


CELL_TO_SYMBOL = {
    Cell.UNREACHABLE: ".",
    Cell.REACHABLE: "+",
    Cell.HOLE: "O",
    Cell.BOULDER: "B",
    Cell.BOULDER_IN_HOLE: "@",
}
SYMBOL_TO_CELL = {symbol: cell for cell, symbol in CELL_TO_SYMBOL.items()}

BOULDER_CELLS = (Cell.BOULDER, Cell.BOULDER_IN_HOLE)
TRAVERSABLE_CELLS = (Cell.UNREACHABLE, Cell.REACHABLE)


def is_boulder(cell) -> bool:
    return cell in BOULDER_CELLS


def is_traversable(cell) -> bool:
    """True for cells the tractor can drive over (no boulder, no hole)."""
    return cell in TRAVERSABLE_CELLS


def state_to_symbols(state) -> str:
    """Writes a configuration as one symbol per cell, row-major."""
    return "".join(CELL_TO_SYMBOL[Cell(cell)] for cell in state)


def symbols_to_state(symbols: str) -> tuple:
    return tuple(Cell.from_symbol(symbol) for symbol in symbols)
