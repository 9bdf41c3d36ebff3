"""Cell states for the two-species cellular automaton.

The integer codes are what the grid buffers store. The numba kernels in
``rules`` compare against the plain module-level ints; everything else
should go through ``CellState``.
"""

from enum import IntEnum

EMPTY = 0
SPECIES_A = 1
SPECIES_B = 2
DISEASED = 3
CONTESTED = 4

_GLYPHS = ".ABGY"


class CellState(IntEnum):
    """Closed set of per-cell states."""
    EMPTY = EMPTY
    SPECIES_A = SPECIES_A
    SPECIES_B = SPECIES_B
    DISEASED = DISEASED
    CONTESTED = CONTESTED

    @property
    def char(self) -> str:
        """Single-character glyph used for text rendering."""
        return _GLYPHS[self.value]

    @classmethod
    def from_char(cls, char: str) -> 'CellState':
        """Parse a glyph back into a state.

        Raises:
            ValueError: If the glyph is not one of ``.ABGY``
        """
        index = _GLYPHS.find(char.upper()) if len(char) == 1 else -1
        if index < 0:
            raise ValueError(f"Unknown cell glyph {char!r}")
        return cls(index)
