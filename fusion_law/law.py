"""
Fusion Law Module

A fusion law is a finite set F with a multiplication F × F -> 2^F, and
optionally an evaluation map sending each element to an opaque eigenvalue.

FusionLaw is immutable apart from the grading and useful rules, which are
computed on first request and cached for the lifetime of the law.
"""

from __future__ import annotations

import itertools
import logging
import threading
from dataclasses import dataclass, field
from typing import (
    Any, Callable, Dict, FrozenSet, Hashable, Iterable, List, Mapping,
    Optional, Sequence, Tuple, Union, TYPE_CHECKING,
)

from .errors import DomainMismatch, InvalidFusionLaw, MissingEvaluation, NotCoercible
from .table import ElementSet, FusionTable

if TYPE_CHECKING:
    from .grading import Grading
    from .groups import AbelianGroup
    from .useful import UsefulRule

logger = logging.getLogger(__name__)

_law_ids = itertools.count(1)


@dataclass(frozen=True, eq=False)
class Element:
    """
    An element of a fusion law.

    Identified by the owning law's id and a position; the label is carried
    for display. Elements of different laws cannot be compared.
    """
    law_id: int
    position: int
    label: Hashable = field(default=None)

    def _check_same_law(self, other: "Element") -> None:
        if other.law_id != self.law_id:
            raise DomainMismatch(
                f"Elements {self.label!r} and {other.label!r} are not in the same fusion law"
            )

    def __eq__(self, other):
        if not isinstance(other, Element):
            return NotImplemented
        self._check_same_law(other)
        return self.position == other.position

    def __hash__(self):
        return hash((self.law_id, self.position))

    def __lt__(self, other):
        if not isinstance(other, Element):
            return NotImplemented
        self._check_same_law(other)
        return self.position < other.position

    def __le__(self, other):
        if not isinstance(other, Element):
            return NotImplemented
        self._check_same_law(other)
        return self.position <= other.position

    def __gt__(self, other):
        if not isinstance(other, Element):
            return NotImplemented
        self._check_same_law(other)
        return self.position > other.position

    def __ge__(self, other):
        if not isinstance(other, Element):
            return NotImplemented
        self._check_same_law(other)
        return self.position >= other.position

    def __repr__(self):
        return f"Element({self.label!r})"

    def __str__(self):
        return str(self.label)


Operand = Union[Element, Hashable, FrozenSet, set]
Evaluation = Union[Mapping[Hashable, Any], Callable[[Hashable], Any]]


class FusionLaw:
    """
    A fusion law with an optional evaluation.

    Args:
        labels: Ordered element labels, at least one, no duplicates
        table: table[i][j] lists the labels in the product of the i-th and
            j-th elements
        evaluation: Optional mapping (or callable) from label to eigenvalue;
            must be defined on every label
        name: Optional display name
        directory: Optional directory name used when saving; defaults to
            the name
    """

    def __init__(self,
                 labels: Iterable[Hashable],
                 table: Sequence[Sequence[Iterable[Hashable]]],
                 evaluation: Optional[Evaluation] = None,
                 name: Optional[str] = None,
                 directory: Optional[str] = None):
        element_set = labels if isinstance(labels, ElementSet) else ElementSet(labels)
        rows = []
        for row in table:
            cells = []
            for cell in row:
                try:
                    cells.append([element_set.index(label) for label in cell])
                except (KeyError, TypeError) as exc:
                    raise InvalidFusionLaw(f"Table entry {cell!r} is not a set of elements") from exc
            rows.append(cells)
        fusion_table = FusionTable(rows, size=len(element_set))
        values = None
        if evaluation is not None:
            values = _evaluation_values(element_set, evaluation)
        self._init(element_set, fusion_table, values, name, directory)

    def _init(self, element_set: ElementSet, table: FusionTable,
              values: Optional[Tuple[Any, ...]], name: Optional[str],
              directory: Optional[str]) -> None:
        if table.size != len(element_set):
            raise InvalidFusionLaw(
                f"Table of size {table.size} does not match {len(element_set)} elements"
            )
        self._id = next(_law_ids)
        self._set = element_set
        self._table = table
        self._values = values
        self.name = name
        self.directory = directory if directory is not None else name
        self._elements = tuple(
            Element(self._id, pos, label) for pos, label in enumerate(element_set)
        )
        self._eigenvalues: Optional[Tuple[Any, ...]] = None
        if values is not None:
            self._eigenvalues = _distinct(values)
        self._lock = threading.RLock()
        self._grading: Optional["Grading"] = None
        self._useful: Optional[Tuple["UsefulRule", ...]] = None

    @classmethod
    def from_table(cls,
                   element_set: ElementSet,
                   table: FusionTable,
                   values: Optional[Sequence[Any]] = None,
                   name: Optional[str] = None,
                   directory: Optional[str] = None) -> "FusionLaw":
        """
        Build a law directly from the positional layer.

        values, when given, lists the evaluation of each position.
        """
        law = cls.__new__(cls)
        if values is not None:
            values = tuple(values)
            if len(values) != len(element_set):
                raise InvalidFusionLaw(
                    f"Evaluation has {len(values)} values for {len(element_set)} elements"
                )
        law._init(element_set, table, values, name, directory)
        return law

    # -------------------------------------------------------------------------
    # Structure
    # -------------------------------------------------------------------------

    @property
    def id(self) -> int:
        return self._id

    @property
    def elements(self) -> Tuple[Element, ...]:
        return self._elements

    @property
    def labels(self) -> Tuple[Hashable, ...]:
        return self._set.labels

    @property
    def element_set(self) -> ElementSet:
        return self._set

    @property
    def table(self) -> FusionTable:
        return self._table

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self):
        return iter(self._elements)

    def __contains__(self, x: Any) -> bool:
        if isinstance(x, Element):
            return x.law_id == self._id
        return x in self._set

    def __call__(self, x: Any) -> Element:
        return self.coerce(x)

    def __getitem__(self, pos: int) -> Element:
        return self._elements[pos]

    def is_coercible(self, x: Any) -> bool:
        return x in self

    def coerce(self, x: Any) -> Element:
        """
        Identify x with an element of this law.

        Accepts one of this law's elements or one of its labels.
        """
        if isinstance(x, Element):
            if x.law_id != self._id:
                raise NotCoercible(f"{x!r} belongs to a different fusion law")
            return x
        if x in self._set:
            return self._elements[self._set.index(x)]
        raise NotCoercible(f"Illegal coercion: {x!r} is not an element of the fusion law")

    def position(self, x: Any) -> int:
        """Position of an element or label; DomainMismatch for another law's element."""
        if isinstance(x, Element):
            if x.law_id != self._id:
                raise DomainMismatch(f"{x!r} is not in this fusion law")
            return x.position
        return self.coerce(x).position

    def _positions(self, operand: Operand) -> Tuple[int, ...]:
        if isinstance(operand, (set, frozenset)):
            return tuple(self.position(x) for x in operand)
        return (self.position(operand),)

    def _lift(self, positions: Iterable[int]) -> FrozenSet[Element]:
        return frozenset(self._elements[p] for p in positions)

    def product(self, x: Operand, y: Operand) -> FrozenSet[Element]:
        """
        Product of x and y.

        Each operand is an element (or label) or a set of them; for sets the
        result is the union of the pairwise products.
        """
        return self._lift(self._table.product_sets(self._positions(x), self._positions(y)))

    def is_symmetric(self) -> bool:
        """Whether x*y == y*x for every pair."""
        return self._table.is_symmetric()

    def is_unit(self, x: Operand) -> bool:
        """x*y and y*x are contained in {y} for every y."""
        p = self.position(x)
        return all(
            self._table.entry(p, q) <= {q} and self._table.entry(q, p) <= {q}
            for q in range(len(self))
        )

    def is_annihilating(self, x: Operand) -> bool:
        """x*y and y*x are empty for every y."""
        p = self.position(x)
        return all(
            not self._table.entry(p, q) and not self._table.entry(q, p)
            for q in range(len(self))
        )

    def is_absorbing(self, x: Operand) -> bool:
        """x*y and y*x are contained in {x} for every y."""
        p = self.position(x)
        return all(
            self._table.entry(p, q) <= {p} and self._table.entry(q, p) <= {p}
            for q in range(len(self))
        )

    # -------------------------------------------------------------------------
    # Evaluation
    # -------------------------------------------------------------------------

    def has_evaluation(self) -> bool:
        return self._values is not None

    @property
    def evaluation_values(self) -> Optional[Tuple[Any, ...]]:
        """Evaluation of each position, or None."""
        return self._values

    @property
    def evaluation(self) -> Dict[Element, Any]:
        if self._values is None:
            raise MissingEvaluation("This fusion law has no evaluation map")
        return dict(zip(self._elements, self._values))

    @property
    def eigenvalues(self) -> Tuple[Any, ...]:
        """Distinct evaluation values in element order."""
        if self._eigenvalues is None:
            raise MissingEvaluation("This fusion law has no evaluation map")
        return self._eigenvalues

    def evaluate(self, x: Operand) -> Any:
        if self._values is None:
            raise MissingEvaluation("This fusion law has no evaluation map")
        return self._values[self.position(x)]

    def with_evaluation(self, evaluation: Evaluation, check: bool = True) -> "FusionLaw":
        """
        Copy of the law with an evaluation attached.

        With check set, a law that already has an evaluation is refused.
        """
        if check and self._values is not None:
            raise InvalidFusionLaw("The fusion law already has an assigned evaluation map")
        values = _evaluation_values(self._set, evaluation)
        return FusionLaw.from_table(self._set, self._table, values, self.name, self.directory)

    def change_ring(self, coerce: Callable[[Any], Any]) -> "FusionLaw":
        """
        Copy of the law with coerce applied to every evaluation value.

        A law without an evaluation is returned unchanged.
        """
        if self._values is None:
            logger.warning("No evaluation map assigned to %s; ring unchanged", self.name or "fusion law")
            return self
        values = tuple(coerce(v) for v in self._values)
        return FusionLaw.from_table(self._set, self._table, values, self.name, self.directory)

    change_field = change_ring

    # -------------------------------------------------------------------------
    # Derived structure
    # -------------------------------------------------------------------------

    def sub_law(self, *seeds: Any) -> "FusionLaw":
        """The sub fusion law generated by the seeds."""
        from .closure import generate_sub_law
        return generate_sub_law(self, seeds)

    def graded(self) -> "Grading":
        """The finest adequate grading, computed once."""
        with self._lock:
            if self._grading is None:
                from .grading import GradingEngine
                self._grading = GradingEngine(self).compute()
            return self._grading

    def grading(self) -> Tuple["AbelianGroup", "Grading"]:
        """
        Finest adequate grading as (group, grading map).

        The group is a FiniteGradingGroup when finite and an
        AbelianGradingGroup otherwise; the grading map is callable on
        elements and labels.
        """
        grading = self.graded()
        return grading.group, grading

    finest_adequate_grading = grading

    def useful_fusion_rules(self) -> Tuple["UsefulRule", ...]:
        """
        Useful fusion rules, computed once.

        Raises PieceTooLarge when a graded piece is larger than the
        configured max_pure_piece_size.
        """
        with self._lock:
            if self._useful is None:
                from .useful import UsefulRuleEngine
                self._useful = UsefulRuleEngine(self, self.graded()).extract()
            return self._useful

    # -------------------------------------------------------------------------
    # Comparison and display
    # -------------------------------------------------------------------------

    def __eq__(self, other):
        if not isinstance(other, FusionLaw):
            return NotImplemented
        if self._set != other._set or self._table != other._table:
            return False
        return self._values == other._values

    def __hash__(self):
        return hash((self._set, self._table))

    def __repr__(self):
        title = f"{self.name!r}, " if self.name else ""
        return f"FusionLaw({title}{list(self.labels)!r})"

    def __str__(self):
        return self.to_text()

    def format_subset(self, subset: Iterable[Element]) -> str:
        return "{" + ", ".join(str(x) for x in sorted(subset)) + "}"

    def to_text(self) -> str:
        """
        Render the multiplication table.

        Integer labels are printed as they are; any other labels are
        replaced by their 1-based position and listed underneath.
        """
        labels = self.labels
        relabel = not all(isinstance(x, int) and not isinstance(x, bool) for x in labels)
        names = [str(pos + 1) if relabel else str(label) for pos, label in enumerate(labels)]

        top = [f" {name} " for name in names]
        width_first = max(len(t) for t in top)
        body = []
        for i, row in enumerate(self._table.rows()):
            cells = [", ".join(names[k] for k in sorted(cell)) for cell in row]
            body.append([f"{top[i]:>{width_first}}|"] + cells)

        widths = [max(len(r[0]) for r in body)]
        for j in range(1, len(labels) + 1):
            widths.append(max([len(r[j]) for r in body] + [len(top[j - 1])]))

        grid = [[" " * (widths[0] - 1) + "|"] + top, ["-" * w for w in widths]] + body

        lines: List[str] = []
        if self.name:
            lines.append(f"{self.name} fusion law.")
            lines.append("")
        for row in grid:
            lines.append("".join(f"{cell:>{w}}" for cell, w in zip(row, widths)))

        if relabel:
            lines.append("")
            lines.append("Where we use the labelling")
            lines.append("")
            lines.extend(f"{top[i]:>{width_first}}:-> {label}" for i, label in enumerate(labels))

        if self._values is not None:
            lines.append("")
            lines.append("Where the evaluation is")
            lines.extend(f"{top[i]:>{width_first}}:-> {value}" for i, value in enumerate(self._values))

        return "\n".join(lines)


def _evaluation_values(element_set: ElementSet, evaluation: Evaluation) -> Tuple[Any, ...]:
    values = []
    for label in element_set:
        try:
            if callable(evaluation) and not isinstance(evaluation, Mapping):
                values.append(evaluation(label))
            else:
                values.append(evaluation[label])
        except KeyError as exc:
            raise InvalidFusionLaw(f"Evaluation is not defined on {label!r}") from exc
    return tuple(values)


def _distinct(values: Iterable[Any]) -> Tuple[Any, ...]:
    seen: List[Any] = []
    for value in values:
        if value not in seen:
            seen.append(value)
    return tuple(seen)
