"""
Finest Adequate Grading Module

Computes the finest adequate grading of a symmetric fusion law: the largest
abelian group G with a map gr: F -> G such that gr(i) + gr(j) = gr(k) for
every k in i*j.

Elements appearing together in some product must share a grade, so the
generators of G are the connected components of the co-occurrence graph and
the table supplies the relations. G is the quotient of the free abelian group
on the components by those relations, computed with the Smith normal form.
"""

import logging
from collections import deque
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

import numpy as np

from .errors import AsymmetricLaw, InternalInvariantViolation
from .groups import (
    AbelianGradingGroup, AbelianGroup, FiniteGradingGroup, GroupElement,
    as_integer_matrix, quotient_by_relations,
)
from .law import Element, FusionLaw

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Grading:
    """
    A grading of a fusion law.

    Attributes:
        law: The graded fusion law
        group: The grading group
        values: Grade of each element position
        components: Co-occurrence components, one per generator, in order
        relations: Relation matrix over the generators
    """
    law: FusionLaw
    group: AbelianGroup
    values: Tuple[GroupElement, ...]
    components: Tuple[Tuple[int, ...], ...]
    relations: np.ndarray

    def __call__(self, x: Any) -> GroupElement:
        return self.grade(x)

    def grade(self, x: Any) -> GroupElement:
        """Grade of an element or label of the law."""
        return self.values[self.law.position(x)]

    def as_dict(self) -> Dict[Element, GroupElement]:
        return dict(zip(self.law.elements, self.values))

    def image(self) -> Tuple[GroupElement, ...]:
        """Distinct grades in order of first occurrence."""
        return tuple(dict.fromkeys(self.values))

    def piece_positions(self) -> Tuple[FrozenSet[int], ...]:
        pieces: Dict[GroupElement, List[int]] = {}
        for pos, g in enumerate(self.values):
            pieces.setdefault(g, []).append(pos)
        return tuple(frozenset(p) for p in pieces.values())

    def pieces(self) -> Tuple[FrozenSet[Element], ...]:
        """Graded pieces in order of their first element."""
        elements = self.law.elements
        return tuple(frozenset(elements[p] for p in piece) for piece in self.piece_positions())

    def piece_of(self, x: Any) -> FrozenSet[Element]:
        g = self.grade(x)
        return frozenset(e for e, v in zip(self.law.elements, self.values) if v == g)

    def is_compatible(self) -> bool:
        """gr(i) + gr(j) == gr(k) for every k in i*j."""
        table = self.law.table
        n = len(self.values)
        for i in range(n):
            for j in range(n):
                target = self.group.add(self.values[i], self.values[j])
                if any(self.values[k] != target for k in table.entry(i, j)):
                    return False
        return True


class GradingEngine:
    """
    Computes the finest adequate grading of a symmetric fusion law.

    The steps are exposed separately for inspection and testing.
    """

    def __init__(self, law: FusionLaw):
        self.law = law
        if not law.is_symmetric():
            raise AsymmetricLaw("This function is currently restricted to symmetric fusion laws")

    def cooccurrence_graph(self) -> np.ndarray:
        return self.law.table.cooccurrence_matrix()

    def connected_components(self, adjacency: Optional[np.ndarray] = None) -> List[Tuple[int, ...]]:
        """
        Connected components of the co-occurrence graph.

        Components are discovered in element order and each is returned
        sorted, so the numbering is deterministic.
        """
        if adjacency is None:
            adjacency = self.cooccurrence_graph()
        n = adjacency.shape[0]
        seen = np.zeros(n, dtype=bool)
        components = []
        for start in range(n):
            if seen[start]:
                continue
            seen[start] = True
            queue = deque([start])
            members = []
            while queue:
                v = queue.popleft()
                members.append(v)
                for w in np.flatnonzero(adjacency[v] & ~seen):
                    seen[w] = True
                    queue.append(int(w))
            components.append(tuple(sorted(members)))
        return components

    def relation_matrix(self, components: List[Tuple[int, ...]]) -> np.ndarray:
        """
        Relations gen(i) + gen(j) - gen(k) for k in i*j, one per row.

        Only i <= j is visited; the table is symmetric.
        """
        generator = {}
        for g, component in enumerate(components):
            for pos in component:
                generator[pos] = g

        table = self.law.table
        n = table.size
        rows = []
        for i in range(n):
            for j in range(i, n):
                for k in sorted(table.entry(i, j)):
                    row = [0] * len(components)
                    row[generator[i]] += 1
                    row[generator[j]] += 1
                    row[generator[k]] -= 1
                    rows.append(row)
        return as_integer_matrix(rows, len(components))

    def compute(self) -> Grading:
        n = len(self.law)
        components = self.connected_components()
        relations = self.relation_matrix(components)
        d = len(components)

        invariants, projection = quotient_by_relations(d, relations)
        logger.debug("Grading of %d elements: %d generators, %d relations, invariants %s",
                     n, d, relations.shape[0], invariants)

        if all(k != 0 for k in invariants):
            group = FiniteGradingGroup(invariants, d, relations)
            if group.order > n:
                raise InternalInvariantViolation(
                    f"Grading group of order {group.order} exceeds the {n} elements of the fusion law"
                )
        else:
            group = AbelianGradingGroup(invariants, d, relations)

        generator_grades = [group.reduce(projection[g, :]) for g in range(d)]
        values = [None] * n
        for g, component in enumerate(components):
            for pos in component:
                values[pos] = generator_grades[g]

        return Grading(
            law=self.law,
            group=group,
            values=tuple(values),
            components=tuple(components),
            relations=relations,
        )
