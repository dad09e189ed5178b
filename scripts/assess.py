from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from compatiblah.core.errors import CompatibilityError  # noqa: E402
from compatiblah.core.observability import configure_logging  # noqa: E402
from compatiblah.schemas import PersonData  # noqa: E402
from compatiblah.services.assessment_service import (  # noqa: E402
    assess_category,
    assess_compatibility,
    normalize_assessment,
    normalize_category_assessment,
)
from compatiblah.taxonomy import Category  # noqa: E402


def _read_text(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Normalize and score a compatibility assessment from model output."
    )
    parser.add_argument("input", help="Raw model response file, prompt file with --live, or '-' for stdin")
    parser.add_argument("--type1", required=True, help="Personality code of person 1, e.g. INFJ")
    parser.add_argument("--type2", required=True, help="Personality code of person 2, e.g. ENFP")
    parser.add_argument(
        "--category",
        choices=[member.value for member in Category],
        help="Score a single category instead of all three.",
    )
    parser.add_argument(
        "--live",
        action="store_true",
        help="Treat the input as a prompt and send it to the configured generative service.",
    )
    args = parser.parse_args()

    configure_logging()

    person1 = PersonData(name="Person 1", mbti=args.type1)
    person2 = PersonData(name="Person 2", mbti=args.type2)
    text = _read_text(args.input)

    try:
        if args.category and args.live:
            result = assess_category(person1, person2, args.category, prompt=text)
        elif args.category:
            result = normalize_category_assessment(text, person1, person2, args.category)
        elif args.live:
            result = assess_compatibility(person1, person2, prompt=text)
        else:
            result = normalize_assessment(text, person1, person2)
    except CompatibilityError as exc:
        print(json.dumps({"error": str(exc), "code": exc.code}), file=sys.stderr)
        return 1

    print(json.dumps(result.model_dump(), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
