"""
Command line interface.

    python -m fusion_law jordan
    python -m fusion_law path/to/law.json --no-rules
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from .errors import FusionLawError
from .law import FusionLaw
from .library import NAMED_LAWS
from .serialization import load


def _load_law(source: str) -> FusionLaw:
    if source.lower() in NAMED_LAWS:
        return NAMED_LAWS[source.lower()]()
    path = Path(source)
    if not path.exists():
        raise FusionLawError(
            f"{source!r} is neither a file nor one of {', '.join(sorted(NAMED_LAWS))}"
        )
    return load(path)


def describe(law: FusionLaw, rules: bool = True) -> str:
    """Table, grading and (optionally) useful fusion rules of a law."""
    lines: List[str] = [law.to_text(), ""]
    if not law.is_symmetric():
        lines.append("The fusion law is not symmetric; no grading computed.")
        return "\n".join(lines)

    group, grading = law.grading()
    lines.append(f"Grading group: {group.describe()} (order {group.order})")
    for piece in grading.pieces():
        g = grading.grade(next(iter(piece)))
        lines.append(f"  {g}: {law.format_subset(piece)}")

    if rules:
        found = law.useful_fusion_rules()
        lines.append("")
        lines.append(f"Useful fusion rules ({len(found)}):")
        for rule in found:
            lines.append(
                f"  {law.format_subset(rule.left)} * {law.format_subset(rule.right)}"
                f" = {law.format_subset(rule.result)}"
            )
    return "\n".join(lines)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="fusion_law",
        description="Show the grading and useful fusion rules of a fusion law.",
    )
    parser.add_argument("law", help="A JSON fusion law record or a named law "
                                    f"({', '.join(sorted(NAMED_LAWS))}).")
    parser.add_argument("--no-rules", dest="rules", action="store_false",
                        help="Skip the useful fusion rules.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        law = _load_law(args.law)
        print(describe(law, rules=args.rules), flush=True)
    except FusionLawError as exc:
        print(f"Error: {exc}", file=sys.stderr, flush=True)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
