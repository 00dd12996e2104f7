"""
Useful Fusion Rules Module

A useful fusion rule is a triple (I, J, K) of pure subsets I, J (subsets of
a single graded piece) with I*J = K, such that K is not a whole graded piece,
I and J are not both whole graded pieces, and neither I nor J can be
enlarged inside its piece without changing the product.
"""

import logging
from dataclasses import dataclass
from itertools import combinations
from typing import FrozenSet, Iterator, List, Optional, Set, Tuple

from .config import FusionLawConfig, get_config
from .errors import AsymmetricLaw, PieceTooLarge
from .grading import Grading
from .law import Element, FusionLaw

logger = logging.getLogger(__name__)

Subset = FrozenSet[int]


@dataclass(frozen=True)
class UsefulRule:
    """The rule left * right = result between pure subsets."""
    left: FrozenSet[Element]
    right: FrozenSet[Element]
    result: FrozenSet[Element]

    def __iter__(self) -> Iterator[FrozenSet[Element]]:
        return iter((self.left, self.right, self.result))

    def unordered(self) -> Tuple[FrozenSet[FrozenSet[Element]], FrozenSet[Element]]:
        return frozenset((self.left, self.right)), self.result


class UsefulRuleEngine:
    """
    Extracts the useful fusion rules of a symmetric fusion law.

    Args:
        law: A symmetric fusion law
        grading: Its finest adequate grading; computed when omitted
        config: Engine limits; the active configuration when omitted
    """

    def __init__(self, law: FusionLaw,
                 grading: Optional[Grading] = None,
                 config: Optional[FusionLawConfig] = None):
        if not law.is_symmetric():
            raise AsymmetricLaw("The fusion law is not symmetric")
        self.law = law
        self.grading = grading if grading is not None else law.graded()
        self.config = config if config is not None else get_config()

    def graded_pieces(self) -> List[Subset]:
        return list(self.grading.piece_positions())

    def pure_subsets(self) -> List[Subset]:
        """
        Non-empty subsets of each graded piece.

        Pieces are taken in order; inside a piece subsets are listed largest
        first, so any strict superset of a pure subset comes before it.
        """
        subsets: List[Subset] = []
        for piece in self.graded_pieces():
            if len(piece) > self.config.max_pure_piece_size:
                raise PieceTooLarge(
                    f"Graded piece of size {len(piece)} exceeds the limit of "
                    f"{self.config.max_pure_piece_size} for pure subset enumeration"
                )
            members = sorted(piece)
            for size in range(len(members), 0, -1):
                subsets.extend(frozenset(c) for c in combinations(members, size))
        return subsets

    def induced_table(self, subsets: List[Subset]) -> List[List[Subset]]:
        """Product table on pure subsets; symmetric by construction."""
        table = self.law.table
        size = len(subsets)
        big: List[List[Subset]] = [[frozenset()] * size for _ in range(size)]
        for i in range(size):
            for j in range(i + 1):
                big[i][j] = table.product_sets(subsets[i], subsets[j])
                big[j][i] = big[i][j]
        return big

    @staticmethod
    def widen(big: List[List[Subset]], i: int, j: int) -> Tuple[int, int]:
        """
        Move (i, j) to the earliest pair with the same product.

        Alternately takes the first column of row i, then the first row of
        column j, holding that product, until neither changes. Earlier
        means larger within a piece, so neither operand of the result can
        be enlarged.
        """
        value = big[i][j]
        while True:
            col = big[i].index(value)
            row = next(r for r in range(len(big)) if big[r][col] == value)
            if (row, col) == (i, j):
                return i, j
            i, j = row, col

    def extract(self) -> Tuple[UsefulRule, ...]:
        subsets = self.pure_subsets()
        pieces = set(self.graded_pieces())
        big = self.induced_table(subsets)
        elements = self.law.elements

        def lift(subset: Subset) -> FrozenSet[Element]:
            return frozenset(elements[p] for p in subset)

        recorded: Set[Tuple[int, int]] = set()
        rules: List[UsefulRule] = []
        for i, row in enumerate(big):
            for value in dict.fromkeys(row):
                if value in pieces:
                    continue
                a, b = self.widen(big, i, row.index(value))
                if subsets[a] in pieces and subsets[b] in pieces:
                    continue
                key = (min(a, b), max(a, b))
                if key in recorded:
                    continue
                recorded.add(key)
                rules.append(UsefulRule(lift(subsets[key[0]]), lift(subsets[key[1]]), lift(value)))

        logger.debug("Found %d useful fusion rules over %d pure subsets", len(rules), len(subsets))
        return tuple(rules)
