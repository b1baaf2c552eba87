"""
Union-find over the index space ``0..size-1``.
"""

from typing import Dict, List


class DisjointSet:
    """
    Disjoint-set forest with path compression and union by size.

    Example:
        ds = DisjointSet(3)
        ds.union(0, 2)
        ds.groups()  # [[0, 2], [1]]
    """

    def __init__(self, size: int):
        self.parents: List[int] = list(range(size))
        self.sizes: List[int] = [1] * size

    def find(self, x: int) -> int:
        """Root of ``x``; compresses the path on the way."""
        root = x
        while self.parents[root] != root:
            root = self.parents[root]
        while self.parents[x] != root:
            self.parents[x], x = root, self.parents[x]
        return root

    def union(self, x: int, y: int) -> bool:
        """
        Merge the sets of ``x`` and ``y``.

        Returns:
            False if they were already in the same set
        """
        root_x = self.find(x)
        root_y = self.find(y)
        if root_x == root_y:
            return False

        if self.sizes[root_x] < self.sizes[root_y]:
            root_x, root_y = root_y, root_x
        self.parents[root_y] = root_x
        self.sizes[root_x] += self.sizes[root_y]
        return True

    def connected(self, x: int, y: int) -> bool:
        return self.find(x) == self.find(y)

    def groups(self) -> List[List[int]]:
        """Members of every set, sets ordered by their first member."""
        members: Dict[int, List[int]] = {}
        for i in range(len(self.parents)):
            members.setdefault(self.find(i), []).append(i)
        return list(members.values())
