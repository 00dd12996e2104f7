"""
Named Fusion Laws

Builders for the standard fusion laws: singleton, associative, Jordan type,
Monster type and representation fusion laws.

Evaluation values are opaque. Symbolic parameters are passed as strings
("eta", "al", "bt") and numeric ones as any number type (Fraction keeps
them exact).
"""

from numbers import Number
from typing import Any, Callable, Hashable, Optional, Sequence

from .errors import InvalidFusionLaw
from .law import FusionLaw


def _directory(template: str, *params: Any) -> str:
    return template.format(*params).replace("/", ",")


def _check_parameters(*params: Any) -> None:
    for p in params:
        if isinstance(p, str):
            continue
        if p == 0 or p == 1:
            raise InvalidFusionLaw("The parameters may not be 0, or 1")


def singleton_fusion_law(empty: bool = True,
                         label: Hashable = 1,
                         evaluation: Optional[Any] = None) -> FusionLaw:
    """
    Fusion law on one element x, with x*x empty or {x}.
    """
    table = [[[] if empty else [label]]]
    mapping = None if evaluation is None else {label: evaluation}
    return FusionLaw([label], table, mapping)


def associative_fusion_law() -> FusionLaw:
    return FusionLaw(
        [1, 2],
        [[[1], []],
         [[], [2]]],
        evaluation={1: 1, 2: 0},
        name="Associative",
        directory="Associative_1_0",
    )


_JORDAN_TABLE = [
    [[1], [], [3]],
    [[], [2], [3]],
    [[3], [3], [1, 2]],
]


def jordan_fusion_law(eta: Any = "eta", evaluation: bool = True) -> FusionLaw:
    """
    Fusion law of Jordan type eta.

    Elements 1, 2, 3 evaluate to 1, 0 and eta.
    """
    _check_parameters(eta)
    mapping = {1: 1, 2: 0, 3: eta} if evaluation else None
    return FusionLaw([1, 2, 3], _JORDAN_TABLE, mapping,
                     name="Jordan", directory=_directory("Jordan_{}", eta))


_MONSTER_TABLE = [
    [[1], [], [3], [4]],
    [[], [2], [3], [4]],
    [[3], [3], [1, 2], [4]],
    [[4], [4], [4], [1, 2, 3]],
]


def monster_fusion_law(alpha: Any = "al", beta: Any = "bt", evaluation: bool = True) -> FusionLaw:
    """
    Fusion law of Monster type (alpha, beta).

    Elements 1, 2, 3, 4 evaluate to 1, 0, alpha and beta.
    """
    _check_parameters(alpha, beta)
    mapping = {1: 1, 2: 0, 3: alpha, 4: beta} if evaluation else None
    return FusionLaw([1, 2, 3, 4], _MONSTER_TABLE, mapping,
                     name="Monster", directory=_directory("Monster_{}_{}", alpha, beta))


def hyper_jordan_fusion_law(eta: Any) -> FusionLaw:
    """
    Extended Jordan-type law: Monster type (2*eta, eta).

    eta must be a number; symbolic parameters cannot be doubled.
    """
    if isinstance(eta, bool) or not isinstance(eta, Number):
        raise InvalidFusionLaw(f"eta must be a number, got {eta!r}")
    return monster_fusion_law(2 * eta, eta)


def representation_fusion_law(characters: Sequence[Hashable],
                              multiplicity: Callable[[Hashable, Hashable, Hashable], Any],
                              name: Optional[str] = None,
                              directory: Optional[str] = None) -> FusionLaw:
    """
    Representation fusion law on a set of irreducible characters.

    chi_k lies in chi_i * chi_j when multiplicity(chi_i, chi_j, chi_k) is
    non-zero. Only j <= i is evaluated; the table is symmetrised from the
    lower triangle.

    Args:
        characters: Irreducible characters, used as labels
        multiplicity: Multiplicity of the third character in the product of
            the first two
    """
    chars = list(characters)
    n = len(chars)
    table = [[None] * n for _ in range(n)]
    for i in range(n):
        for j in range(i + 1):
            table[i][j] = [c for c in chars if multiplicity(chars[i], chars[j], c) != 0]
            table[j][i] = table[i][j]
    if name is not None and directory is None:
        directory = _directory("Rep_fusion_law_{}", name)
    return FusionLaw(chars, table, name=name, directory=directory)


NAMED_LAWS = {
    "associative": associative_fusion_law,
    "jordan": jordan_fusion_law,
    "monster": monster_fusion_law,
    "singleton": singleton_fusion_law,
}
