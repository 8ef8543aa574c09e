from __future__ import annotations

import argparse
import csv
import json
import logging
import sys
from pathlib import Path
from typing import Any

from roster_dedupe.datasets import ROSTER_COLUMNS, ReferenceRosterGenerator
from roster_dedupe.errors import RosterDedupeError, RosterFormatError
from roster_dedupe.models import AttendeeRecord, DuplicateGroup
from roster_dedupe.runners import LocalResolutionSession
from roster_dedupe.steps import MergeResolver, NameNormalizer, SimilarityGrouper, collapse_whitespace
from roster_dedupe.store import InMemoryRosterStore

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        if args.command == "scan":
            scan(
                input_path=args.input,
                output_path=args.output,
                exclude=args.exclude,
                grouper=_build_grouper(args),
            )
            return 0
        if args.command == "resolve":
            resolve(
                input_path=args.input,
                output_path=args.output or args.input,
                group_id=args.group_id,
                survivor_id=args.survivor_id,
                merge_sessions=args.merge_sessions,
                exclude=args.exclude,
                grouper=_build_grouper(args),
            )
            return 0
        if args.command == "generate":
            generate(size=args.size, duplicate_rate=args.duplicate_rate, seed=args.seed, output_path=args.output)
            return 0
    except RosterDedupeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    parser.print_help()
    return 1


def scan(
    *,
    input_path: Path,
    output_path: Path | None,
    exclude: list[str],
    grouper: SimilarityGrouper | None = None,
) -> list[DuplicateGroup]:
    records = read_roster(input_path)
    session = LocalResolutionSession(store=InMemoryRosterStore(records), grouper=grouper)
    groups = session.ignore(exclude)
    summary = _build_summary(record_count=len(records), groups=groups)

    if output_path is not None:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        _write_json(output_path, {"summary": summary, "groups": _groups_payload(groups)})
        print(f"Groups: {output_path}")

    print(f"records={summary['record_count']}")
    print(f"groups={summary['group_count']}")
    print(f"grouped_records={summary['grouped_record_count']}")
    print(f"max_group_size={summary['max_group_size']}")
    for item in _groups_payload(groups):
        print(json.dumps(item))
    return groups


def resolve(
    *,
    input_path: Path,
    output_path: Path,
    group_id: int,
    survivor_id: str | None,
    merge_sessions: bool,
    exclude: list[str],
    grouper: SimilarityGrouper | None = None,
) -> None:
    # Group ids only line up with ``scan`` when both passes group the same way.
    store = InMemoryRosterStore(read_roster(input_path))
    session = LocalResolutionSession(store=store, grouper=grouper, resolver=MergeResolver())
    session.ignore(exclude)
    resolution = session.resolve(group_id, survivor_id=survivor_id, merge_sessions=merge_sessions)

    write_roster(output_path, store.list_records())
    print(f"kept={resolution.survivor_id}")
    print(f"removed={','.join(resolution.removed_ids)}")
    print(f"sessions={resolution.final_record.sessions_remaining}/{resolution.final_record.total_sessions}")
    print(f"Roster: {output_path}")


def generate(*, size: int, duplicate_rate: float, seed: int, output_path: Path) -> None:
    records = ReferenceRosterGenerator(seed=seed).generate(size=size, duplicate_rate=duplicate_rate)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    write_roster(output_path, records)
    print(f"Roster: {output_path}")


def read_roster(path: Path) -> list[AttendeeRecord]:
    if path.suffix.lower() == ".csv":
        return _read_records_csv(path)
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
        return [AttendeeRecord.from_dict(item) for item in payload]
    except (ValueError, KeyError, TypeError) as exc:
        raise RosterFormatError(f"Cannot read roster {path}: {exc!r}") from exc


def write_roster(path: Path, records: list[AttendeeRecord]) -> None:
    if path.suffix.lower() == ".csv":
        _write_records_csv(path, records)
        return
    _write_json(path, [record.to_dict() for record in records])


def _build_grouper(args: argparse.Namespace) -> SimilarityGrouper:
    normalizer = NameNormalizer(transforms=[collapse_whitespace] if args.collapse_spaces else None)
    return SimilarityGrouper(
        normalizer=normalizer,
        long_name_max_edits=args.long_name_max_edits,
        short_name_max_edits=args.short_name_max_edits,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="roster-dedupe", description="Roster duplicate resolution CLI")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    subparsers = parser.add_subparsers(dest="command")

    grouping_parser = argparse.ArgumentParser(add_help=False)
    grouping_parser.add_argument("input", type=Path)
    grouping_parser.add_argument("--exclude", action="append", default=[], metavar="RECORD_ID")
    grouping_parser.add_argument("--long-name-max-edits", type=int, default=2)
    grouping_parser.add_argument("--short-name-max-edits", type=int, default=1)
    grouping_parser.add_argument("--collapse-spaces", action="store_true")

    scan_parser = subparsers.add_parser(
        "scan",
        parents=[grouping_parser],
        help="Group likely duplicate attendees and print them",
    )
    scan_parser.add_argument("--output", type=Path, default=None)

    resolve_parser = subparsers.add_parser(
        "resolve",
        parents=[grouping_parser],
        help="Resolve one duplicate group and rewrite the roster (use the same grouping flags as scan)",
    )
    resolve_parser.add_argument("--group-id", type=int, required=True)
    resolve_parser.add_argument("--survivor-id", type=str, default=None)
    resolve_parser.add_argument("--merge-sessions", action="store_true")
    resolve_parser.add_argument("--output", type=Path, default=None)

    generate_parser = subparsers.add_parser("generate", help="Write a synthetic roster with intentional duplicates")
    generate_parser.add_argument("--size", type=int, default=200)
    generate_parser.add_argument("--duplicate-rate", type=float, default=0.15)
    generate_parser.add_argument("--seed", type=int, default=42)
    generate_parser.add_argument("--output", type=Path, default=Path("data/reference_roster.json"))

    return parser


def _build_summary(*, record_count: int, groups: list[DuplicateGroup]) -> dict[str, object]:
    group_sizes = [len(group.members) for group in groups]
    return {
        "record_count": record_count,
        "group_count": len(groups),
        "grouped_record_count": sum(group_sizes),
        "max_group_size": max(group_sizes) if group_sizes else 0,
    }


def _groups_payload(groups: list[DuplicateGroup]) -> list[dict[str, Any]]:
    return [
        {
            "group_id": group.group_id,
            "display_name": group.display_name,
            "members": [
                {
                    "id": member.id,
                    "name": member.name,
                    "class_type": member.class_type,
                    "sessions": f"{member.sessions_remaining}/{member.total_sessions}",
                    "payment_status": member.payment_status.value,
                }
                for member in group.members
            ],
        }
        for group in groups
    ]


def _write_json(path: Path, payload: object) -> None:
    with path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2)


def _write_records_csv(path: Path, records: list[AttendeeRecord]) -> None:
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=ROSTER_COLUMNS)
        writer.writeheader()
        for record in records:
            writer.writerow(record.to_dict())


def _read_records_csv(path: Path) -> list[AttendeeRecord]:
    records: list[AttendeeRecord] = []
    with path.open("r", newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        for row in reader:
            if not row.get("id"):
                logger.warning("Skipping CSV row without an id: %s", row)
                continue
            try:
                records.append(AttendeeRecord.from_dict(row))
            except (ValueError, TypeError) as exc:
                raise RosterFormatError(f"Cannot read roster {path}, row {reader.line_num}: {exc!r}") from exc
    return records


if __name__ == "__main__":
    sys.exit(main())
