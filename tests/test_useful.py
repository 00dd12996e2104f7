"""
Tests for useful fusion rules
"""

import pytest

from fusion_law import (
    AsymmetricLaw,
    FusionLawConfig,
    FusionLawError,
    PieceTooLarge,
    UsefulRule,
    UsefulRuleEngine,
    singleton_fusion_law,
    useful_fusion_rules,
)


def as_labels(rule):
    return tuple(frozenset(x.label for x in part) for part in rule)


def check_sound(law, rules):
    _, grading = law.grading()
    pieces = set(grading.pieces())
    for rule in rules:
        assert rule.left and rule.right
        assert len({grading(x) for x in rule.left}) == 1
        assert len({grading(x) for x in rule.right}) == 1
        assert law.product(set(rule.left), set(rule.right)) == rule.result
        assert rule.result not in pieces
        assert not (rule.left in pieces and rule.right in pieces)


def check_minimal(law, rules):
    _, grading = law.grading()
    for rule in rules:
        for x in grading.piece_of(next(iter(rule.left))) - rule.left:
            assert law.product(set(rule.left) | {x}, set(rule.right)) != rule.result
        for y in grading.piece_of(next(iter(rule.right))) - rule.right:
            assert law.product(set(rule.left), set(rule.right) | {y}) != rule.result


class TestPureSubsets:
    def test_jordan_order(self, jordan):
        engine = UsefulRuleEngine(jordan)
        assert engine.pure_subsets() == [
            frozenset({0, 1}), frozenset({0}), frozenset({1}), frozenset({2}),
        ]

    def test_supersets_come_first(self, monster):
        subsets = UsefulRuleEngine(monster).pure_subsets()
        assert len(subsets) == 7 + 1
        for i, s in enumerate(subsets):
            for t in subsets[i + 1:]:
                assert not s < t

    def test_induced_table_symmetric(self, monster):
        engine = UsefulRuleEngine(monster)
        big = engine.induced_table(engine.pure_subsets())
        for i, row in enumerate(big):
            for j, value in enumerate(row):
                assert value == big[j][i]

    def test_widen_reaches_earliest_pair(self, jordan):
        engine = UsefulRuleEngine(jordan)
        big = engine.induced_table(engine.pure_subsets())
        # {1} * {1} = {1} widens to {1} * {1, 2}
        assert UsefulRuleEngine.widen(big, 1, 1) == (1, 0)
        assert UsefulRuleEngine.widen(big, 1, 0) == (1, 0)

    def test_piece_size_limit(self, jordan):
        engine = UsefulRuleEngine(jordan, config=FusionLawConfig(max_pure_piece_size=1))
        with pytest.raises(PieceTooLarge):
            engine.extract()
        with pytest.raises(FusionLawError):
            engine.extract()


class TestUsefulRules:
    def test_jordan(self, jordan):
        rules = [as_labels(r) for r in jordan.useful_fusion_rules()]
        assert rules == [
            (frozenset({1, 2}), frozenset({1}), frozenset({1})),
            (frozenset({1, 2}), frozenset({2}), frozenset({2})),
            (frozenset({1}), frozenset({2}), frozenset()),
        ]

    def test_associative(self, associative):
        rules = {as_labels(r) for r in associative.useful_fusion_rules()}
        assert rules == {
            (frozenset({1, 2}), frozenset({1}), frozenset({1})),
            (frozenset({1, 2}), frozenset({2}), frozenset({2})),
            (frozenset({1}), frozenset({2}), frozenset()),
        }

    def test_monster(self, monster):
        rules = {as_labels(r) for r in monster.useful_fusion_rules()}
        assert (frozenset({1}), frozenset({2}), frozenset()) in rules
        assert (frozenset({1, 2}), frozenset({1}), frozenset({1})) in rules

    def test_klein_has_none(self, klein):
        assert klein.useful_fusion_rules() == ()

    def test_singleton_has_none(self):
        assert singleton_fusion_law(empty=True).useful_fusion_rules() == ()

    def test_unordered_pairs_recorded_once(self, monster):
        rules = monster.useful_fusion_rules()
        keys = [frozenset((r.left, r.right)) for r in rules]
        assert len(keys) == len(set(keys))

    @pytest.mark.parametrize("name", ["associative", "jordan", "monster", "klein"])
    def test_sound(self, request, name):
        law = request.getfixturevalue(name)
        check_sound(law, law.useful_fusion_rules())

    @pytest.mark.parametrize("name", ["associative", "jordan", "monster"])
    def test_minimal(self, request, name):
        law = request.getfixturevalue(name)
        check_minimal(law, law.useful_fusion_rules())

    def test_rule_unpacks(self, jordan):
        rule = jordan.useful_fusion_rules()[0]
        left, right, result = rule
        assert isinstance(rule, UsefulRule)
        assert rule.unordered() == (frozenset((left, right)), result)

    def test_asymmetric(self, asymmetric):
        with pytest.raises(AsymmetricLaw):
            asymmetric.useful_fusion_rules()
        with pytest.raises(AsymmetricLaw):
            UsefulRuleEngine(asymmetric)

    def test_cached(self, monster):
        assert useful_fusion_rules(monster) is monster.useful_fusion_rules()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
