"""
Fusion Law - Gradings and Fusion Rules of Fusion Laws

A fusion law is a finite set with a multiplication returning subsets,
optionally evaluated to eigenvalues. This package computes sub fusion laws,
the finest adequate grading and the useful fusion rules.
"""

__version__ = "0.1.0"

from typing import Tuple

from .errors import (
    FusionLawError,
    DomainMismatch,
    NotCoercible,
    AsymmetricLaw,
    InternalInvariantViolation,
    InvalidFusionLaw,
    MissingEvaluation,
    SerializationError,
    PieceTooLarge,
)
from .config import FusionLawConfig, get_config, set_config
from .table import ElementSet, FusionTable
from .law import Element, FusionLaw
from .groups import AbelianGroup, AbelianGradingGroup, FiniteGradingGroup
from .closure import generate_sub_law
from .grading import Grading, GradingEngine
from .useful import UsefulRule, UsefulRuleEngine
from .combinators import coproduct, join, permute
from .library import (
    singleton_fusion_law,
    associative_fusion_law,
    jordan_fusion_law,
    monster_fusion_law,
    hyper_jordan_fusion_law,
    representation_fusion_law,
)
from .serialization import to_dict, from_dict, dumps, loads, save, load


def is_symmetric(law: FusionLaw) -> bool:
    return law.is_symmetric()


def finest_adequate_grading(law: FusionLaw) -> Tuple[AbelianGroup, Grading]:
    """Finest adequate grading of law as (group, grading map), cached on the law."""
    return law.grading()


def useful_fusion_rules(law: FusionLaw) -> Tuple[UsefulRule, ...]:
    """Useful fusion rules of law, cached on the law."""
    return law.useful_fusion_rules()


__all__ = [
    "FusionLawError",
    "DomainMismatch",
    "NotCoercible",
    "AsymmetricLaw",
    "InternalInvariantViolation",
    "InvalidFusionLaw",
    "MissingEvaluation",
    "SerializationError",
    "PieceTooLarge",
    "FusionLawConfig",
    "get_config",
    "set_config",
    "ElementSet",
    "FusionTable",
    "Element",
    "FusionLaw",
    "AbelianGroup",
    "AbelianGradingGroup",
    "FiniteGradingGroup",
    "Grading",
    "GradingEngine",
    "UsefulRule",
    "UsefulRuleEngine",
    "is_symmetric",
    "generate_sub_law",
    "finest_adequate_grading",
    "useful_fusion_rules",
    "coproduct",
    "join",
    "permute",
    "singleton_fusion_law",
    "associative_fusion_law",
    "jordan_fusion_law",
    "monster_fusion_law",
    "hyper_jordan_fusion_law",
    "representation_fusion_law",
    "to_dict",
    "from_dict",
    "dumps",
    "loads",
    "save",
    "load",
]
