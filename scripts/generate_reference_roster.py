from __future__ import annotations

import argparse
from pathlib import Path

from roster_dedupe.cli import write_roster
from roster_dedupe.datasets import ReferenceRosterGenerator


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate synthetic class roster with duplicates")
    parser.add_argument("--size", type=int, default=500)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--duplicate-rate", type=float, default=0.15)
    parser.add_argument("--output", type=Path, default=Path("data/reference_roster.csv"))
    args = parser.parse_args()

    records = ReferenceRosterGenerator(seed=args.seed).generate(
        size=args.size,
        duplicate_rate=args.duplicate_rate,
    )

    args.output.parent.mkdir(parents=True, exist_ok=True)
    write_roster(args.output, records)


if __name__ == "__main__":
    main()
