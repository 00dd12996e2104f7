"""
Grading Groups Module

Finitely generated abelian groups given by generators and integer relations,
reduced exactly with the Smith normal form.

A group is stored by its invariant factors (d_1 | d_2 | ... , with 0 standing
for an infinite cyclic factor). Group elements are tuples of integers, one
coordinate per factor, reduced modulo the finite factors.
"""

from typing import Iterator, List, Optional, Sequence, Tuple, Union
from itertools import product as cartesian
from math import gcd, inf, lcm, prod
import numpy as np

GroupElement = Tuple[int, ...]


def as_integer_matrix(rows: Sequence[Sequence[int]], ncols: int) -> np.ndarray:
    """Exact integer matrix (object dtype) with the given number of columns."""
    matrix = np.zeros((len(rows), ncols), dtype=object)
    for i, row in enumerate(rows):
        for j, value in enumerate(row):
            matrix[i, j] = int(value)
    return matrix


def smith_normal_form(matrix: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Smith normal form over the integers.

    Works on Python integers (object dtype) so entries never overflow.

    Args:
        matrix: m × d integer matrix, one relation per row

    Returns:
        (D, V) where D = U · matrix · V for some unimodular U, D is diagonal
        with non-negative entries d_1 | d_2 | ... and V is the unimodular
        column transform.
    """
    A = np.array(matrix, dtype=object)
    m, d = A.shape
    V = np.identity(d, dtype=int).astype(object)

    def swap_rows(a, b):
        A[[a, b], :] = A[[b, a], :]

    def swap_cols(a, b):
        A[:, [a, b]] = A[:, [b, a]]
        V[:, [a, b]] = V[:, [b, a]]

    for t in range(min(m, d)):
        nonzero = [(abs(A[i, j]), i, j)
                   for i in range(t, m) for j in range(t, d) if A[i, j] != 0]
        if not nonzero:
            break
        _, pi, pj = min(nonzero)
        swap_rows(t, pi)
        swap_cols(t, pj)

        while True:
            pivot = A[t, t]
            restart = False

            for i in range(t + 1, m):
                q = A[i, t] // pivot
                if q:
                    A[i, :] = A[i, :] - q * A[t, :]
                if A[i, t] != 0:
                    swap_rows(t, i)
                    restart = True
                    break
            if restart:
                continue

            for j in range(t + 1, d):
                q = A[t, j] // pivot
                if q:
                    A[:, j] = A[:, j] - q * A[:, t]
                    V[:, j] = V[:, j] - q * V[:, t]
                if A[t, j] != 0:
                    swap_cols(t, j)
                    restart = True
                    break
            if restart:
                continue

            # Pivot must divide the rest of the matrix
            bad_row = next(
                (i for i in range(t + 1, m)
                 if any(A[i, j] % pivot != 0 for j in range(t + 1, d))),
                None,
            )
            if bad_row is None:
                break
            A[t, :] = A[t, :] + A[bad_row, :]

        if A[t, t] < 0:
            A[t, :] = -A[t, :]

    return A, V


def quotient_by_relations(rank: int, relations: np.ndarray) -> Tuple[Tuple[int, ...], np.ndarray]:
    """
    Structure of Z^rank / <relations>.

    Args:
        rank: Number of free generators
        relations: m × rank integer matrix, one relation per row

    Returns:
        (invariants, projection): the non-trivial invariant factors (0 for
        a free factor) and a rank × len(invariants) integer matrix whose row
        k is the image of generator k before reduction.
    """
    if relations.shape[0] == 0:
        return (0,) * rank, np.identity(rank, dtype=int).astype(object)

    D, V = smith_normal_form(relations)
    diagonal = [D[i, i] if i < D.shape[0] else 0 for i in range(rank)]
    keep = [i for i, value in enumerate(diagonal) if value != 1]
    invariants = tuple(int(diagonal[i]) for i in keep)
    projection = V[:, keep] if keep else np.zeros((rank, 0), dtype=object)
    return invariants, projection


class AbelianGroup:
    """
    Finitely generated abelian group Z/d_1 × ... × Z/d_r.

    A factor of 0 is infinite cyclic. The generators and relation matrix of
    the presentation the group was computed from are kept for inspection.
    """

    def __init__(self, invariants: Sequence[int],
                 presentation_rank: Optional[int] = None,
                 relations: Optional[np.ndarray] = None):
        self.invariants: Tuple[int, ...] = tuple(int(d) for d in invariants)
        if any(d < 0 or d == 1 for d in self.invariants):
            raise ValueError(f"Invalid invariant factors {self.invariants}")
        self.presentation_rank = len(self.invariants) if presentation_rank is None else presentation_rank
        if relations is None:
            relations = np.zeros((0, self.presentation_rank), dtype=object)
        self.relations = relations

    def __eq__(self, other):
        if not isinstance(other, AbelianGroup):
            return NotImplemented
        return self.invariants == other.invariants

    def __hash__(self):
        return hash(self.invariants)

    def __repr__(self):
        return f"{type(self).__name__}({self.describe()})"

    def __contains__(self, g) -> bool:
        if not isinstance(g, tuple) or len(g) != len(self.invariants):
            return False
        return all(d == 0 or 0 <= x < d for x, d in zip(g, self.invariants))

    @property
    def rank(self) -> int:
        """Number of infinite cyclic factors."""
        return sum(1 for d in self.invariants if d == 0)

    @property
    def torsion(self) -> Tuple[int, ...]:
        return tuple(d for d in self.invariants if d != 0)

    @property
    def is_finite(self) -> bool:
        return self.rank == 0

    @property
    def order(self) -> Union[int, float]:
        return prod(self.invariants) if self.is_finite else inf

    @property
    def identity(self) -> GroupElement:
        return (0,) * len(self.invariants)

    def reduce(self, coordinates: Sequence[int]) -> GroupElement:
        return tuple(int(x) % d if d else int(x) for x, d in zip(coordinates, self.invariants))

    def add(self, g: GroupElement, h: GroupElement) -> GroupElement:
        return self.reduce([a + b for a, b in zip(g, h)])

    def negate(self, g: GroupElement) -> GroupElement:
        return self.reduce([-a for a in g])

    def subtract(self, g: GroupElement, h: GroupElement) -> GroupElement:
        return self.reduce([a - b for a, b in zip(g, h)])

    def element_order(self, g: GroupElement) -> Union[int, float]:
        """Order of g; infinite if any free coordinate is non-zero."""
        result = 1
        for x, d in zip(g, self.invariants):
            if d == 0:
                if x != 0:
                    return inf
                continue
            k = d // gcd(x, d) if x else 1
            result = lcm(result, k)
        return result

    def describe(self) -> str:
        if not self.invariants:
            return "1"
        return " x ".join("Z" if d == 0 else f"Z/{d}" for d in self.invariants)


class FiniteGradingGroup(AbelianGroup):
    """
    Finite grading group with its regular permutation representation.

    Elements are listed in lexicographic coordinate order; element g acts on
    that list by h -> h + g.
    """

    def __init__(self, invariants: Sequence[int],
                 presentation_rank: Optional[int] = None,
                 relations: Optional[np.ndarray] = None):
        super().__init__(invariants, presentation_rank, relations)
        if not self.is_finite:
            raise ValueError(f"Group {self.describe()} is infinite")
        self._elements: List[GroupElement] = [
            tuple(c) for c in cartesian(*(range(d) for d in self.invariants))
        ]
        self._index = {g: i for i, g in enumerate(self._elements)}

    def __iter__(self) -> Iterator[GroupElement]:
        return iter(self._elements)

    def __len__(self) -> int:
        return len(self._elements)

    def elements(self) -> List[GroupElement]:
        return list(self._elements)

    def index(self, g: GroupElement) -> int:
        return self._index[g]

    def permutation(self, g: GroupElement) -> Tuple[int, ...]:
        """
        Image of g in the regular representation.

        Entry i is the index of elements()[i] + g.
        """
        return tuple(self._index[self.add(h, g)] for h in self._elements)

    def from_permutation(self, perm: Sequence[int]) -> GroupElement:
        """Inverse of permutation(): the identity is sent to g itself."""
        return self._elements[perm[self._index[self.identity]]]

    def permutation_generators(self) -> List[Tuple[int, ...]]:
        """Regular permutations of the standard generators, one per factor."""
        gens = []
        for i in range(len(self.invariants)):
            unit = tuple(1 if k == i else 0 for k in range(len(self.invariants)))
            gens.append(self.permutation(unit))
        return gens


class AbelianGradingGroup(AbelianGroup):
    """Infinite grading group, kept as generators plus relation matrix."""

    def __init__(self, invariants: Sequence[int],
                 presentation_rank: Optional[int] = None,
                 relations: Optional[np.ndarray] = None):
        super().__init__(invariants, presentation_rank, relations)
        if self.is_finite:
            raise ValueError(f"Group {self.describe()} is finite")
