"""
We model a percolation system using an n-by-n grid of sites.

Each site is either open or blocked. A full site is an open site that can be
connected to an open site in the top row via a chain of neighboring
(left, right, up, down) open sites. The system percolates if there is a full
site in the bottom row.

Rows and columns are numbered 1 through n, with (1, 1) the upper-left site.
"""
import numpy as np

from percolation_errors import OutOfBounds, check_positive
from weighted_union_find import WeightedQuickUnionUF

# (row, col) offsets of the 4 axis neighbours: left, right, up, down
NEIGHBOUR_OFFSETS = ((0, -1), (0, 1), (-1, 0), (1, 0))


class Percolation:
    # create a n by n grid with all sites blocked
    def __init__(self, n: int):
        self.gridSize = check_positive("n", n)
        self.gridSquare = self.gridSize * self.gridSize

        # two extra slots for the virtual sites, never reachable by (row, col)
        self.virtualTop = self.gridSquare
        self.virtualBottom = self.gridSquare + 1

        self.opened = np.zeros(self.gridSquare + 2, dtype=bool)
        self.opened[self.virtualTop] = True
        self.opened[self.virtualBottom] = True

        self.wqfGrid = WeightedQuickUnionUF(self.gridSquare + 2)

        # pre-connect the virtual sites to the whole top and bottom rows
        for i in range(self.gridSize):
            self.wqfGrid.union(self.virtualTop, i)
        for i in range(self.gridSquare - self.gridSize, self.gridSquare):
            self.wqfGrid.union(self.virtualBottom, i)

        self.openSite = 0

    # open the site[row, col] if it's not open yet
    def open_site(self, row: int, col: int):
        self.validState(row, col)
        flatIndex = self.flattenGrid(row, col)

        if self.opened[flatIndex]:
            return

        self.opened[flatIndex] = True
        self.openSite += 1

        # connect to open neighbours
        for dRow, dCol in NEIGHBOUR_OFFSETS:
            nRow, nCol = row + dRow, col + dCol
            if self.isOnGrid(nRow, nCol) and self.isOpen(nRow, nCol):
                self.wqfGrid.union(flatIndex, self.flattenGrid(nRow, nCol))

    # is site[row, col] open?
    def isOpen(self, row: int, col: int) -> bool:
        self.validState(row, col)
        return bool(self.opened[self.flattenGrid(row, col)])

    # is site[row, col] open and connected to the top row?
    def isFull(self, row: int, col: int) -> bool:
        self.validState(row, col)
        flatIndex = self.flattenGrid(row, col)
        return bool(self.opened[flatIndex]) and self.wqfGrid.connected(self.virtualTop, flatIndex)

    def percolates(self) -> bool:
        # with n == 1 the single site joins both virtual sites while still blocked
        if self.gridSize == 1:
            return bool(self.opened[0])
        return self.wqfGrid.connected(self.virtualTop, self.virtualBottom)

    def numberOfOpenSites(self) -> int:
        return self.openSite

    def validState(self, row: int, col: int):
        if not self.isOnGrid(row, col):
            raise OutOfBounds(f"site ({row}, {col}) is outside the {self.gridSize}x{self.gridSize} grid")

    def flattenGrid(self, row: int, col: int) -> int:
        return self.gridSize * (row - 1) + (col - 1)

    def isOnGrid(self, row: int, col: int) -> bool:
        return 1 <= row <= self.gridSize and 1 <= col <= self.gridSize
