"""Starting layouts for the two-species automaton.

Patterns are written as glyph text (``.`` Empty, ``A``/``B`` species,
``G`` Diseased, ``Y`` Contested) and turned into uint8 state arrays that
``GridModel.load_pattern`` can stamp onto a grid.
"""

import numpy as np
from typing import List, Tuple

from ..core.grid import GridModel
from ..core.states import CellState

# Small L-shaped cluster used for both species in the demo layout
CLUSTER_OFFSETS: List[Tuple[int, int]] = [(0, 0), (1, 0), (2, 0), (0, 1), (1, 2)]


def parse_pattern(text: str) -> np.ndarray:
    """Parse glyph text into a 2D array of state codes.

    Leading and trailing blank lines are dropped and short rows are padded
    with Empty cells.

    Raises:
        ValueError: On an unknown glyph or an empty pattern
    """
    lines = [line.strip() for line in text.strip("\n").splitlines()]
    while lines and not lines[0]:
        lines.pop(0)
    while lines and not lines[-1]:
        lines.pop()
    if not lines:
        raise ValueError("Pattern is empty")

    width = max(len(line) for line in lines)
    pattern = np.zeros((len(lines), width), dtype=np.uint8)
    for y, line in enumerate(lines):
        for x, char in enumerate(line):
            pattern[y, x] = CellState.from_char(char)
    return pattern


def seed_demo_layout(grid: GridModel) -> None:
    """Seed the standard start-up scene around the grid centre.

    A SpeciesA cluster sits left of centre and a SpeciesB cluster right of
    it, a seven-cell contested border runs along the centre row, and six
    diseased cells lie six rows above. All coordinates wrap.
    """
    cx = grid.columns // 2
    cy = grid.rows // 2

    def put(x: int, y: int, state: CellState) -> None:
        grid.set(grid.wrap(x, grid.columns), grid.wrap(y, grid.rows), state)

    for dx, dy in CLUSTER_OFFSETS:
        put(cx - 8 + dx, cy + dy, CellState.SPECIES_A)
    for dx, dy in CLUSTER_OFFSETS:
        put(cx + 8 + dx, cy + dy, CellState.SPECIES_B)

    for k in range(-3, 4):
        put(cx + k, cy, CellState.CONTESTED)

    for k in range(6):
        put(cx - 3 + k, cy - 6, CellState.DISEASED)
