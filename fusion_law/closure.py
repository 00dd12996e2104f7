"""
Sub Fusion Law Generation

The sub fusion law generated by a set of elements is the smallest set
containing them and closed under the multiplication, found by fixed-point
iteration over the table.
"""

import logging
from typing import Any, Iterable, List, Set

from .errors import NotCoercible
from .law import Element, FusionLaw

logger = logging.getLogger(__name__)


def seed_positions(law: FusionLaw, seed: Any) -> Set[int]:
    """
    Positions named by a seed.

    A seed is an element, a label, or a (possibly nested) collection of
    them. Labels win over collections, so tuple labels are taken whole.
    """
    if isinstance(seed, Element) or law.is_coercible(seed):
        return {law.coerce(seed).position}
    if isinstance(seed, (set, frozenset, list, tuple)):
        positions: Set[int] = set()
        for item in seed:
            positions |= seed_positions(law, item)
        return positions
    raise NotCoercible(
        f"Not all the seeds are coercible into the fusion law: {seed!r}"
    )


def close(law: FusionLaw, positions: Iterable[int]) -> List[int]:
    """
    Close a set of positions under the multiplication.

    Returns:
        The closed set as positions in increasing order
    """
    table = law.table
    seed = set(positions)
    closed = set(seed)
    rounds = 0
    while True:
        rounds += 1
        new = table.product_sets(closed, closed) - closed
        if not new:
            break
        closed |= new
    logger.debug("Closure of %d seed(s) reached %d element(s) in %d round(s)",
                 len(seed), len(closed), rounds)
    return sorted(closed)


def generate_sub_law(law: FusionLaw, seed: Any) -> FusionLaw:
    """
    Return the sub fusion law generated by seed.

    The sub law keeps the parent's element order, its restricted table and
    its restricted evaluation.

    Raises:
        NotCoercible: if some seed is not an element of law
        InvalidFusionLaw: if the seed is empty
    """
    positions = close(law, seed_positions(law, seed))
    values = None
    if law.has_evaluation():
        parent_values = law.evaluation_values
        values = [parent_values[p] for p in positions]
    return FusionLaw.from_table(
        law.element_set.subset(positions),
        law.table.restrict(positions),
        values,
        name=law.name,
        directory=law.directory,
    )
