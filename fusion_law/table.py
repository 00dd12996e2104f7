"""
Fusion Table Module

The positional layer underneath a fusion law: an ordered set of opaque
labels and a square table whose cells are sets of positions.
"""

from typing import Any, FrozenSet, Hashable, Iterable, List, Optional, Sequence, Tuple
import numpy as np

from .errors import InvalidFusionLaw

Cell = FrozenSet[int]


class ElementSet:
    """
    Ordered, duplicate-free collection of labels with stable positions.

    Labels are opaque hashable values; position i is fixed at construction.
    """

    __slots__ = ("_labels", "_index")

    def __init__(self, labels: Iterable[Hashable]):
        self._labels: Tuple[Hashable, ...] = tuple(labels)
        if not self._labels:
            raise InvalidFusionLaw("A fusion law needs at least one element")
        self._index = {}
        for pos, label in enumerate(self._labels):
            try:
                duplicate = label in self._index
            except TypeError as exc:
                raise InvalidFusionLaw(f"Element label {label!r} is not hashable") from exc
            if duplicate:
                raise InvalidFusionLaw(f"Duplicate element label {label!r}")
            self._index[label] = pos

    def __len__(self) -> int:
        return len(self._labels)

    def __iter__(self):
        return iter(self._labels)

    def __getitem__(self, pos: int) -> Hashable:
        return self._labels[pos]

    def __contains__(self, label: Any) -> bool:
        try:
            return label in self._index
        except TypeError:
            return False

    def __eq__(self, other):
        if not isinstance(other, ElementSet):
            return NotImplemented
        return self._labels == other._labels

    def __hash__(self):
        return hash(self._labels)

    def __repr__(self):
        return f"ElementSet({list(self._labels)!r})"

    @property
    def labels(self) -> Tuple[Hashable, ...]:
        return self._labels

    def index(self, label: Hashable) -> int:
        """Position of a label; KeyError if absent."""
        return self._index[label]

    def label(self, pos: int) -> Hashable:
        return self._labels[pos]

    def subset(self, positions: Sequence[int]) -> "ElementSet":
        """Labels at the given positions, in the given order."""
        return ElementSet(self._labels[p] for p in positions)


class FusionTable:
    """
    Square table of position sets.

    table[i][j] is the product of element i and element j. The table is
    immutable; every method returns new values.
    """

    __slots__ = ("_cells", "_size")

    def __init__(self, rows: Iterable[Iterable[Iterable[int]]], size: Optional[int] = None):
        cells = tuple(tuple(frozenset(int(k) for k in cell) for cell in row) for row in rows)
        n = len(cells) if size is None else size
        if len(cells) != n:
            raise InvalidFusionLaw(f"Table has {len(cells)} rows, expected {n}")
        for i, row in enumerate(cells):
            if len(row) != n:
                raise InvalidFusionLaw(f"Row {i} has {len(row)} entries, expected {n}")
            for j, cell in enumerate(row):
                for k in cell:
                    if not 0 <= k < n:
                        raise InvalidFusionLaw(
                            f"Entry ({i}, {j}) refers to position {k} outside [0, {n})"
                        )
        self._cells: Tuple[Tuple[Cell, ...], ...] = cells
        self._size = n

    def __len__(self) -> int:
        return self._size

    def __eq__(self, other):
        if not isinstance(other, FusionTable):
            return NotImplemented
        return self._cells == other._cells

    def __hash__(self):
        return hash(self._cells)

    def __repr__(self):
        rows = [[sorted(cell) for cell in row] for row in self._cells]
        return f"FusionTable({rows!r})"

    @property
    def size(self) -> int:
        return self._size

    def entry(self, i: int, j: int) -> Cell:
        return self._cells[i][j]

    def rows(self) -> Tuple[Tuple[Cell, ...], ...]:
        return self._cells

    def product(self, i: int, j: int) -> Cell:
        """Product of positions i and j."""
        return self._cells[i][j]

    def product_sets(self, left: Iterable[int], right: Iterable[int]) -> Cell:
        """
        Union of the products of every pair from left × right.

        Empty when either operand is empty.
        """
        right = tuple(right)
        result = set()
        for i in left:
            row = self._cells[i]
            for j in right:
                result |= row[j]
        return frozenset(result)

    def is_symmetric(self) -> bool:
        n = self._size
        return all(
            self._cells[i][j] == self._cells[j][i]
            for i in range(n) for j in range(i + 1, n)
        )

    def restrict(self, positions: Sequence[int]) -> "FusionTable":
        """
        Sub-table on the given positions, reindexed to 0..len-1.

        Products falling outside positions are dropped, so callers restrict
        to closed sets when they need a faithful sub-table.
        """
        new_pos = {p: q for q, p in enumerate(positions)}
        return FusionTable(
            [[[new_pos[k] for k in self._cells[p][r] if k in new_pos] for r in positions]
             for p in positions]
        )

    def permute(self, order: Sequence[int]) -> "FusionTable":
        """
        Reorder so that new position q holds old position order[q].
        """
        new_pos = {p: q for q, p in enumerate(order)}
        return FusionTable(
            [[[new_pos[k] for k in self._cells[p][r]] for r in order] for p in order]
        )

    def union(self, other: "FusionTable") -> "FusionTable":
        """Entrywise union with a table of the same size."""
        if other.size != self._size:
            raise InvalidFusionLaw(f"Cannot merge tables of sizes {self._size} and {other.size}")
        return FusionTable(
            [[a | b for a, b in zip(row_a, row_b)]
             for row_a, row_b in zip(self._cells, other._cells)]
        )

    def block_sum(self, other: "FusionTable") -> "FusionTable":
        """Block-diagonal table: self on the first block, other shifted after it."""
        n, m = self._size, other.size
        rows: List[List[Iterable[int]]] = []
        for row in self._cells:
            rows.append(list(row) + [()] * m)
        for row in other.rows():
            rows.append([()] * n + [[k + n for k in cell] for cell in row])
        return FusionTable(rows)

    def cooccurrence_matrix(self) -> np.ndarray:
        """
        Boolean adjacency of the co-occurrence graph.

        adj[p, q] is set when p != q and some cell contains both p and q.
        """
        n = self._size
        adj = np.zeros((n, n), dtype=bool)
        for row in self._cells:
            for cell in row:
                if len(cell) < 2:
                    continue
                members = np.fromiter(sorted(cell), dtype=np.intp, count=len(cell))
                adj[np.ix_(members, members)] = True
        np.fill_diagonal(adj, False)
        return adj
