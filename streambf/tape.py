"""
Tape memory models.

SparseTape is the default: a dict keyed by signed cell index, unbounded in
both directions, with unvisited cells reading as 0. DenseTape keeps a fixed
numpy array (30000 cells by convention) and either wraps the index around
the array (circular) or raises TapeBoundsError outside it.
"""

from typing import Dict, List

import numpy as np

from .config import VMConfig
from .errors import TapeBoundsError

_DTYPES = {8: np.uint8, 16: np.uint16, 32: np.uint32}


class SparseTape:
    def __init__(self, cell_bits: int = 8):
        self.cell_bits = cell_bits
        self.modulus = 1 << cell_bits
        self.cells: Dict[int, int] = {}

    def __getitem__(self, index: int) -> int:
        return self.cells.get(index, 0)

    def __setitem__(self, index: int, value: int):
        value %= self.modulus
        if value:
            self.cells[index] = value
        else:
            self.cells.pop(index, None)

    def add(self, index: int, delta: int) -> int:
        self[index] = self[index] + delta
        return self[index]

    def window(self, start: int, stop: int) -> List[int]:
        return [self[i] for i in range(start, stop)]

    def nonzero(self) -> Dict[int, int]:
        return dict(sorted(self.cells.items()))

    def __len__(self):
        return len(self.cells)

    def __repr__(self):
        return f"SparseTape({self.nonzero()})"


class DenseTape:
    def __init__(self, size: int = 30000, cell_bits: int = 8, circular: bool = False):
        self.size = size
        self.cell_bits = cell_bits
        self.modulus = 1 << cell_bits
        self.circular = circular
        self.cells = np.zeros(size, dtype=_DTYPES[cell_bits])

    def _index(self, index: int) -> int:
        if self.circular:
            return index % self.size
        if not 0 <= index < self.size:
            raise TapeBoundsError(f"cell {index} is outside the tape [0, {self.size})")
        return index

    def __getitem__(self, index: int) -> int:
        return int(self.cells[self._index(index)])

    def __setitem__(self, index: int, value: int):
        self.cells[self._index(index)] = value % self.modulus

    def add(self, index: int, delta: int) -> int:
        i = self._index(index)
        value = (int(self.cells[i]) + delta) % self.modulus
        self.cells[i] = value
        return value

    def window(self, start: int, stop: int) -> List[int]:
        return [self[i] for i in range(start, stop)]

    def nonzero(self) -> Dict[int, int]:
        return {int(i): int(self.cells[i]) for i in np.flatnonzero(self.cells)}

    def __len__(self):
        return self.size

    def __repr__(self):
        return f"DenseTape(size={self.size}, circular={self.circular}, nonzero={self.nonzero()})"


def make_tape(config: VMConfig):
    """Build the tape a config asks for."""
    if config.tape == "dense":
        return DenseTape(config.tape_size, config.cell_bits, config.circular)
    return SparseTape(config.cell_bits)
