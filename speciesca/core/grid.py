"""Grid state for the two-species cellular automaton.

Holds the double-buffered state grid and the two per-cell age counters on
a torus. States and ages are numpy uint8 arrays shaped (rows, columns) and
indexed as ``array[y, x]``; public methods take (x, y) like the rest of the
package.
"""

import numpy as np
from typing import Dict, NamedTuple, Optional, Union
import logging

from .errors import InvalidDimension
from .rules import count_neighbors
from .states import CellState

logger = logging.getLogger(__name__)

CellValue = Union[CellState, int]


class NeighborCounts(NamedTuple):
    """Moore-neighborhood counts by state (Empty neighbors are not counted)."""
    a: int
    b: int
    g: int
    y: int


class GridModel:
    """Double-buffered toroidal grid with disease and contested age tracking.

    Attributes:
        columns: Grid width in cells
        rows: Grid height in cells
        cell_size: Rendering hint carried for front ends, unused by the core
        age_disease: Generations each Diseased cell has been Diseased
        age_contested: Generations each Contested cell has been Contested
    """

    def __init__(self, columns: int, rows: int, cell_size: int = 1):
        """Create an all-Empty grid with zeroed ages.

        Args:
            columns: Grid width in cells
            rows: Grid height in cells
            cell_size: Rendering hint in pixels

        Raises:
            InvalidDimension: If columns or rows are not positive
        """
        self._allocate(columns, rows)
        self.cell_size = cell_size

        logger.debug(f"Created grid {columns}x{rows}")

    def _allocate(self, columns: int, rows: int) -> None:
        if columns <= 0 or rows <= 0:
            raise InvalidDimension(columns, rows)

        self.columns = int(columns)
        self.rows = int(rows)
        shape = (self.rows, self.columns)
        self._buffers = [np.zeros(shape, dtype=np.uint8), np.zeros(shape, dtype=np.uint8)]
        self._front = 0
        self.age_disease = np.zeros(shape, dtype=np.uint8)
        self.age_contested = np.zeros(shape, dtype=np.uint8)

    @property
    def current(self) -> np.ndarray:
        """State buffer read during a generation."""
        return self._buffers[self._front]

    @property
    def next(self) -> np.ndarray:
        """State buffer written during a generation."""
        return self._buffers[1 - self._front]

    @property
    def cells(self) -> np.ndarray:
        """Read-only view of the current state buffer, for bulk rendering."""
        view = self._buffers[self._front].view()
        view.flags.writeable = False
        return view

    def swap_buffers(self) -> None:
        """Exchange the current and next buffers without copying."""
        self._front = 1 - self._front

    def resize(self, columns: int, rows: int, cell_size: Optional[int] = None,
               preserve: bool = False) -> None:
        """Reallocate the grid at a new size.

        Ages always reset to zero. With ``preserve`` the states in the
        overlapping top-left rectangle are copied over.

        Raises:
            InvalidDimension: If columns or rows are not positive; the grid
                is left unchanged
        """
        old_state = self.current
        self._allocate(columns, rows)
        if cell_size is not None:
            self.cell_size = cell_size

        if preserve:
            keep_rows = min(self.rows, old_state.shape[0])
            keep_columns = min(self.columns, old_state.shape[1])
            self.current[:keep_rows, :keep_columns] = old_state[:keep_rows, :keep_columns]

        logger.debug(f"Resized grid to {self.columns}x{self.rows} (preserve={preserve})")

    def wrap(self, value: int, extent: int) -> int:
        """Floored modulo into [0, extent)."""
        return value % extent

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.columns and 0 <= y < self.rows):
            raise IndexError(f"Coordinates ({x}, {y}) out of bounds for {self.columns}x{self.rows} grid")

    def get(self, x: int, y: int) -> CellState:
        """Get cell state at coordinates.

        Raises:
            IndexError: If coordinates are out of bounds
        """
        self._check_bounds(x, y)
        return CellState(int(self.current[y, x]))

    def set(self, x: int, y: int, state: CellValue) -> None:
        """Set cell state at coordinates.

        The disease age resets unless the new state is Diseased, and the
        contested age resets unless it is Contested, so re-applying a
        cell's own state keeps its age.

        Raises:
            IndexError: If coordinates are out of bounds
            ValueError: If state is not a valid CellState code
        """
        self._check_bounds(x, y)
        state = CellState(state)
        self.current[y, x] = state
        if state != CellState.DISEASED:
            self.age_disease[y, x] = 0
        if state != CellState.CONTESTED:
            self.age_contested[y, x] = 0

    def __getitem__(self, key) -> CellState:
        """Access cell state using grid[x, y] syntax."""
        x, y = key
        return self.get(x, y)

    def __setitem__(self, key, value: CellValue) -> None:
        """Set cell state using grid[x, y] = state syntax."""
        x, y = key
        self.set(x, y, value)

    def clear(self) -> None:
        """Reset every cell to Empty and both age arrays to zero."""
        self.current.fill(CellState.EMPTY)
        self.next.fill(CellState.EMPTY)
        self.age_disease.fill(0)
        self.age_contested.fill(0)
        logger.debug(f"Cleared grid {self.columns}x{self.rows}")

    def neighbor_counts(self, x: int, y: int) -> NeighborCounts:
        """Count the eight toroidally wrapped Moore neighbors of (x, y) by state."""
        return NeighborCounts(*count_neighbors(self.current, x, y))

    def randomize(self, density: float, gdensity: float = 0.0,
                  seed: Optional[int] = None) -> None:
        """Clear, then fill cells at random.

        Each cell is occupied with probability ``density``. An occupied cell
        is Diseased with probability ``gdensity``, otherwise SpeciesA or
        SpeciesB with equal chance.

        Args:
            density: Occupied fraction (0.0 to 1.0)
            gdensity: Diseased fraction of occupied cells (0.0 to 1.0)
            seed: Optional seed for reproducible fills
        """
        rng = np.random.default_rng(seed)
        shape = (self.rows, self.columns)
        self.clear()

        occupied = rng.random(shape) < density
        diseased = rng.random(shape) < gdensity
        species = np.where(rng.random(shape) < 0.5, CellState.SPECIES_A, CellState.SPECIES_B)

        state = np.where(diseased, CellState.DISEASED, species)
        self.current[:] = np.where(occupied, state, CellState.EMPTY)

    def load_pattern(self, pattern: np.ndarray, x: int, y: int) -> None:
        """Stamp a 2D array of state codes with its top-left corner at (x, y).

        The pattern wraps around the grid edges. Empty pattern cells leave
        the grid untouched.
        """
        pattern_height, pattern_width = pattern.shape
        for py in range(pattern_height):
            for px in range(pattern_width):
                if pattern[py, px] != CellState.EMPTY:
                    self.set(self.wrap(x + px, self.columns),
                             self.wrap(y + py, self.rows),
                             int(pattern[py, px]))

    def population(self) -> Dict[CellState, int]:
        """Count cells in each state."""
        counts = np.bincount(self.current.ravel(), minlength=len(CellState))
        return {state: int(counts[state]) for state in CellState}

    def occupied_count(self) -> int:
        """Number of non-Empty cells."""
        return int(np.count_nonzero(self.current))

    def check_invariants(self) -> None:
        """Assert that ages and states are in lockstep.

        Raises:
            AssertionError: If buffer shapes differ or a non-Diseased or
                non-Contested cell carries a non-zero age
        """
        shape = (self.rows, self.columns)
        assert self.rows > 0 and self.columns > 0, "Grid dimensions must be positive"
        for name, array in (("current", self.current), ("next", self.next),
                            ("age_disease", self.age_disease),
                            ("age_contested", self.age_contested)):
            assert array.shape == shape, f"{name} shape {array.shape} doesn't match {shape}"

        stale_disease = (self.current != CellState.DISEASED) & (self.age_disease != 0)
        assert not stale_disease.any(), f"{int(stale_disease.sum())} cells carry a stale disease age"
        stale_contested = (self.current != CellState.CONTESTED) & (self.age_contested != 0)
        assert not stale_contested.any(), f"{int(stale_contested.sum())} cells carry a stale contested age"

    def copy(self) -> 'GridModel':
        """Create a deep copy of states and ages."""
        new_grid = GridModel(self.columns, self.rows, self.cell_size)
        new_grid.current[:] = self.current
        new_grid.age_disease[:] = self.age_disease
        new_grid.age_contested[:] = self.age_contested
        return new_grid

    def to_array(self) -> np.ndarray:
        """Copy of the current state buffer."""
        return self.current.copy()

    def __eq__(self, other: object) -> bool:
        """Grids are equal when dimensions, states and ages all match."""
        if not isinstance(other, GridModel):
            return False
        return (self.columns == other.columns and
                self.rows == other.rows and
                np.array_equal(self.current, other.current) and
                np.array_equal(self.age_disease, other.age_disease) and
                np.array_equal(self.age_contested, other.age_contested))

    def __str__(self) -> str:
        """Render the grid with one glyph per cell (``.ABGY``)."""
        glyphs = np.array([state.char for state in CellState])
        return "\n".join("".join(row) for row in glyphs[self.current])

    def __repr__(self) -> str:
        counts = self.population()
        return (f"GridModel({self.columns}x{self.rows}, "
                f"A={counts[CellState.SPECIES_A]}, B={counts[CellState.SPECIES_B]}, "
                f"G={counts[CellState.DISEASED]}, Y={counts[CellState.CONTESTED]})")
