"""
Shared fixtures for the fusion law tests
"""

import pytest

from fusion_law import (
    FusionLaw,
    associative_fusion_law,
    jordan_fusion_law,
    monster_fusion_law,
)


@pytest.fixture
def associative():
    return associative_fusion_law()


@pytest.fixture
def jordan():
    return jordan_fusion_law()


@pytest.fixture
def monster():
    return monster_fusion_law()


@pytest.fixture
def klein():
    """Fusion law of the Klein four group: x*y = {xy}."""
    labels = ["e", "a", "b", "c"]
    mult = {
        ("e", "e"): "e", ("e", "a"): "a", ("e", "b"): "b", ("e", "c"): "c",
        ("a", "a"): "e", ("a", "b"): "c", ("a", "c"): "b",
        ("b", "b"): "e", ("b", "c"): "a",
        ("c", "c"): "e",
    }
    table = [[[mult.get((x, y)) or mult[(y, x)]] for y in labels] for x in labels]
    return FusionLaw(labels, table, name="Klein")


@pytest.fixture
def asymmetric():
    return FusionLaw([1, 2], [[[1], [2]], [[], [2]]])
