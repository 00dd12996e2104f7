"""
Fusion Law Combinators

Structural constructions producing new fusion laws from existing ones:
coproduct (disjoint union), join (entrywise union) and permutation.
"""

import logging
from typing import Any, Optional, Sequence, Tuple

from .errors import InvalidFusionLaw
from .law import FusionLaw
from .table import ElementSet

logger = logging.getLogger(__name__)


def coproduct(a: FusionLaw, b: FusionLaw) -> FusionLaw:
    """
    Disjoint union of two fusion laws.

    Products across the two laws are empty. When the label sets overlap,
    labels are tagged as (1, x) for a and (2, y) for b. Evaluations are
    merged when both laws have one.
    """
    if set(a.labels).isdisjoint(b.labels):
        labels = ElementSet(a.labels + b.labels)
    else:
        labels = ElementSet([(1, x) for x in a.labels] + [(2, y) for y in b.labels])
    table = a.table.block_sum(b.table)

    values: Optional[Tuple[Any, ...]] = None
    if a.has_evaluation() and b.has_evaluation():
        values = a.evaluation_values + b.evaluation_values
    elif a.has_evaluation() or b.has_evaluation():
        logger.warning("Only one of the fusion laws has an evaluation; the coproduct has none")
    return FusionLaw.from_table(labels, table, values)


def join(a: FusionLaw, b: FusionLaw) -> FusionLaw:
    """
    Merge the multiplications of two laws on the same elements.

    Each product is the union of the two products. An evaluation present
    on one side is kept; when both have one they must agree.
    """
    if a.element_set != b.element_set:
        raise InvalidFusionLaw("A and B must have the same fusion law elements")
    table = a.table.union(b.table)

    values = a.evaluation_values
    if values is None:
        values = b.evaluation_values
    elif b.has_evaluation() and values != b.evaluation_values:
        raise InvalidFusionLaw("Evaluations must match")
    return FusionLaw.from_table(a.element_set, table, values)


def permute(law: FusionLaw, order: Sequence[int]) -> FusionLaw:
    """
    Reorder the elements of a law.

    Args:
        law: The fusion law
        order: A permutation of 0..n-1; position q of the result holds
            position order[q] of law

    Returns:
        The reordered law, with the same name, directory and evaluation
    """
    order = [int(p) for p in order]
    if sorted(order) != list(range(len(law))):
        raise InvalidFusionLaw(f"{order} is not a permutation of the fusion law")
    values = None
    if law.has_evaluation():
        values = [law.evaluation_values[p] for p in order]
    return FusionLaw.from_table(
        law.element_set.subset(order),
        law.table.permute(order),
        values,
        name=law.name,
        directory=law.directory,
    )
