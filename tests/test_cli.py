import json

from roster_dedupe.cli import main, read_roster, write_roster
from roster_dedupe.datasets import SAMPLE_ROSTER

from factories import make_record


def _write_roster(tmp_path, name="roster.json"):
    path = tmp_path / name
    write_roster(
        path,
        [
            *SAMPLE_ROSTER,
            make_record("5", "sarah connor", sessions_remaining=3, total_sessions=5, notes="Injured knee"),
        ],
    )
    return path


def test_scan_writes_groups_and_summary(tmp_path, capsys) -> None:
    roster = _write_roster(tmp_path)
    output = tmp_path / "out" / "groups.json"

    assert main(["scan", str(roster), "--output", str(output)]) == 0

    payload = json.loads(output.read_text(encoding="utf-8"))
    assert payload["summary"]["group_count"] == 1
    assert payload["summary"]["grouped_record_count"] == 2
    assert [member["id"] for member in payload["groups"][0]["members"]] == ["1", "5"]
    assert "groups=1" in capsys.readouterr().out


def test_scan_honours_exclusions(tmp_path, capsys) -> None:
    roster = _write_roster(tmp_path)

    assert main(["scan", str(roster), "--exclude", "5"]) == 0

    assert "groups=0" in capsys.readouterr().out


def test_resolve_rewrites_roster(tmp_path) -> None:
    roster = _write_roster(tmp_path)
    output = tmp_path / "resolved.csv"

    exit_code = main(
        ["resolve", str(roster), "--group-id", "0", "--survivor-id", "1", "--merge-sessions", "--output", str(output)]
    )

    assert exit_code == 0
    records = read_roster(output)
    assert [record.id for record in records] == ["1", "2", "3", "4"]
    assert (records[0].sessions_remaining, records[0].total_sessions) == (11, 15)
    assert records[0].notes == "Merged: Injured knee"


def test_resolve_with_unknown_survivor_fails(tmp_path, capsys) -> None:
    roster = _write_roster(tmp_path)

    assert main(["resolve", str(roster), "--group-id", "0", "--survivor-id", "nope"]) == 2

    assert "not a member" in capsys.readouterr().err
    assert len(read_roster(roster)) == 5


def test_generate_writes_requested_size(tmp_path) -> None:
    output = tmp_path / "generated.json"

    assert main(["generate", "--size", "25", "--seed", "3", "--output", str(output)]) == 0

    assert len(read_roster(output)) == 25


def test_resolve_uses_same_grouping_flags_as_scan(tmp_path) -> None:
    roster = tmp_path / "roster.json"
    write_roster(
        roster,
        [
            make_record("b1", "Bob    Lind"),
            make_record("b2", "bob lind"),
            make_record("z1", "Zed Zed"),
            make_record("z2", "zed zed"),
        ],
    )
    groups_path = tmp_path / "groups.json"

    assert main(["scan", str(roster), "--collapse-spaces", "--output", str(groups_path)]) == 0
    first_group = json.loads(groups_path.read_text(encoding="utf-8"))["groups"][0]
    assert [member["id"] for member in first_group["members"]] == ["b1", "b2"]

    assert main(["resolve", str(roster), "--collapse-spaces", "--group-id", str(first_group["group_id"])]) == 0

    assert [record.id for record in read_roster(roster)] == ["b1", "z1", "z2"]


def test_malformed_json_roster_exits_with_error(tmp_path, capsys) -> None:
    roster = tmp_path / "roster.json"
    roster.write_text(json.dumps([{"id": "1", "name": "Ann Lee", "paymentStatus": "Refunded"}]), encoding="utf-8")

    assert main(["scan", str(roster)]) == 2

    assert "Cannot read roster" in capsys.readouterr().err


def test_malformed_csv_roster_exits_with_error(tmp_path, capsys) -> None:
    roster = tmp_path / "roster.csv"
    roster.write_text("id,name,totalSessions\n1,Ann Lee,ten\n", encoding="utf-8")

    assert main(["resolve", str(roster), "--group-id", "0"]) == 2

    assert "row 2" in capsys.readouterr().err
