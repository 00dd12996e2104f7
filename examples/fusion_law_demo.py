"""
Demonstration of the fusion_law package

Walks through the standard fusion laws and shows:
1. Sub fusion laws generated by a few elements
2. The finest adequate grading and its graded pieces
3. The useful fusion rules
"""

from fractions import Fraction

from fusion_law import (
    coproduct,
    jordan_fusion_law,
    monster_fusion_law,
    representation_fusion_law,
)


def print_section(title):
    """Print a formatted section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def demonstrate_sub_laws():
    print_section("Sub fusion laws")

    monster = monster_fusion_law(Fraction(1, 4), Fraction(1, 32))
    print(monster)

    for seed in (1, 3, 4):
        sub = monster.sub_law(seed)
        print(f"\nGenerated by {seed}: {sub.format_subset(sub.elements)}")


def demonstrate_gradings():
    print_section("Finest adequate gradings")

    laws = {
        "Jordan": jordan_fusion_law(),
        "Monster": monster_fusion_law(),
        "C3 characters": representation_fusion_law(
            [0, 1, 2], lambda a, b, c: int((a + b) % 3 == c), name="C3"
        ),
        "Jordan + Monster": coproduct(jordan_fusion_law(), monster_fusion_law()),
    }
    for name, law in laws.items():
        group, grading = law.grading()
        print(f"\n{name}: {group.describe()}")
        for piece in grading.pieces():
            print(f"  {grading(next(iter(piece)))}: {law.format_subset(piece)}")


def demonstrate_useful_rules():
    print_section("Useful fusion rules")

    law = monster_fusion_law()
    for left, right, result in law.useful_fusion_rules():
        print(f"  {law.format_subset(left)} * {law.format_subset(right)}"
              f" = {law.format_subset(result)}")


def main():
    print("=" * 70)
    print("  FUSION LAWS: closure, gradings and useful fusion rules")
    print("=" * 70)

    demonstrate_sub_laws()
    demonstrate_gradings()
    demonstrate_useful_rules()

    print("\n" + "=" * 70 + "\n")


if __name__ == "__main__":
    main()
