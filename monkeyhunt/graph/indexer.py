"""Indexer for symmetric matrices stored by columns.

Only the lower triangle (diagonal included) of an n x n symmetric matrix
is kept, column after column, in a flat array of n(n+1)/2 entries:

    column 0: (0,0) (1,0) ... (n-1,0)
    column 1: (1,1) (2,1) ... (n-1,1)
    ...
"""

import math

import numpy as np


class SymmetricPairIndexer:
    """Map between (row, column) pairs and flat column-storage indices."""

    def __init__(self, n: int) -> None:
        if n < 1:
            raise ValueError(f"Matrix size must be >= 1, got {n}")
        self.n = n

    @property
    def size(self) -> int:
        """Number of stored entries, n(n+1)/2."""
        return self.n * (self.n + 1) // 2

    def offset(self, j: int) -> int:
        """Flat index of the diagonal entry (j, j)."""
        return j * (2 * self.n - j + 1) // 2

    def sub2ind(self, i: int, j: int) -> int:
        """Flat index of (i, j); the order of i and j does not matter."""
        if i < j:
            i, j = j, i
        return self.offset(j) + (i - j)

    def ind2sub(self, index: int) -> tuple[int, int]:
        """(row, column) of a flat index, with row >= column."""
        if not 0 <= index < self.size:
            raise IndexError(f"Index {index} out of range for n={self.n}")
        x = self.n + 0.5
        j = int(x - math.sqrt(x * x - 2 * index))
        # Guard the float estimate near column boundaries
        while j + 1 < self.n and self.offset(j + 1) <= index:
            j += 1
        while self.offset(j) > index:
            j -= 1
        return index - self.offset(j) + j, j

    def pair_arrays(self) -> tuple[np.ndarray, np.ndarray]:
        """Rows and columns of every stored entry, in storage order."""
        rows = np.empty(self.size, dtype=np.int64)
        cols = np.empty(self.size, dtype=np.int64)
        start = 0
        for j in range(self.n):
            stop = start + self.n - j
            rows[start:stop] = np.arange(j, self.n)
            cols[start:stop] = j
            start = stop
        return rows, cols
