# tractor_boulder_env/utils/level_utils.py

from tractor_boulder_env.utils.cell import Cell, CELL_TO_SYMBOL

TRACTOR_SYMBOL = "T"


def parse_level(level) -> tuple:
    """
    Parses a square level written one row per line (or given as a list of rows).

    Symbols: '.' empty, 'O' hole, 'B' boulder, '@' boulder in hole,
    '+' reachable marker, 'T' tractor start (stored as an empty cell).

    Returns:
        tuple: (grid as list of Cell, tractor index, size)
    """
    rows = level.splitlines() if isinstance(level, str) else list(level)
    rows = [row.strip() for row in rows if row.strip()]
    if not rows:
        raise ValueError("Level is empty.")

    size = len(rows)
    grid = []
    tractor = None
    for row_idx, row in enumerate(rows):
        if len(row) != size:
            raise ValueError(f"Level must be square: row {row_idx} has {len(row)} cells, expected {size}")
        for col_idx, symbol in enumerate(row):
            if symbol == TRACTOR_SYMBOL:
                if tractor is not None:
                    raise ValueError("Level has more than one tractor.")
                tractor = row_idx * size + col_idx
                grid.append(Cell.UNREACHABLE)
            else:
                grid.append(Cell.from_symbol(symbol))

    if tractor is None:
        raise ValueError("Level has no tractor ('T').")
    return grid, tractor, size


def format_grid(grid, size: int, tractor: int = None) -> str:
    """Writes a grid back as level text; `tractor`, if given, is drawn as 'T'."""
    rows = []
    for row in range(size):
        symbols = []
        for col in range(size):
            idx = row * size + col
            symbols.append(TRACTOR_SYMBOL if idx == tractor else CELL_TO_SYMBOL[Cell(grid[idx])])
        rows.append("".join(symbols))
    return "\n".join(rows)
