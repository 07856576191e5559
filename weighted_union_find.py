import numpy as np
from numba import njit, config

from percolation_errors import OutOfBounds, check_positive

# Enable Numba disk caching for faster subsequent runs
config.CACHE_DIR = '.numba_cache'


# CPU kernels using Numba, operating in place on the forest arrays
@njit(cache=True)
def find_root(parent, i):
    while parent[i] != i:
        # path halving: point every other node at its grandparent
        parent[i] = parent[parent[i]]
        i = parent[i]
    return i

@njit(cache=True)
def union_by_size(parent, size, p, q):
    i = find_root(parent, p)
    j = find_root(parent, q)
    if i == j:
        return False
    if size[i] < size[j]:
        parent[i] = j
        size[j] += size[i]
    else:
        parent[j] = i
        size[i] += size[j]
    return True


# weighted quick union-find
class WeightedQuickUnionUF:
    """
    A class for the Weighted Quick-Union-Find data structure
    with path halving.
    """

    def __init__(self, n):
        """
        Initializes an empty union-find data structure with 'n' sites
        indexed 0 through n-1. Each site is initially in its own component.

        :param n: The number of sites.
        """
        n = check_positive("n", n)

        # self.parent[i] = parent of site i
        # Initially, each site is its own parent (root)
        self.parent = np.arange(n, dtype=np.int64)

        # self.size[i] = number of sites in the tree rooted at i
        # Only meaningful while i is a root
        self.size = np.ones(n, dtype=np.int64)

        # The number of distinct components (or disjoint sets)
        self.count = n

    def __len__(self):
        return len(self.parent)

    def get_count(self):
        """
        Returns the number of disjoint sets.
        """
        return self.count

    def _validate(self, p):
        """
        Validates that p is a valid index.
        """
        n = len(self.parent)
        if p < 0 or p >= n:
            raise OutOfBounds(f"index {p} is not between 0 and {n-1}")

    def find(self, p):
        """
        Returns the root (canonical element) of the set containing site 'p'.
        """
        self._validate(p)
        return int(find_root(self.parent, p))

    def connected(self, p, q):
        """
        Returns true if the two sites 'p' and 'q' are in the same component.
        """
        self._validate(p)
        self._validate(q)
        return find_root(self.parent, p) == find_root(self.parent, q)

    def component_size(self, p):
        """
        Returns the number of sites in the component containing 'p'.
        """
        return int(self.size[self.find(p)])

    def union(self, p, q):
        """
        Merges the set containing site 'p' with the set containing site 'q'.
        The root of the smaller tree is attached under the root of the larger.

        Returns False if they were already connected.
        """
        self._validate(p)
        self._validate(q)

        merged = union_by_size(self.parent, self.size, p, q)

        # A union operation reduces the total number of components by 1
        if merged:
            self.count -= 1
        return bool(merged)
