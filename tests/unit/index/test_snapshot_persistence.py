from __future__ import annotations

from pathlib import Path

import pytest

from mdlinks.index import (
    FileHash,
    SnapshotFormatError,
    SnapshotLookups,
    load_snapshot,
    parse_snapshot_line,
    save_snapshot,
)


def test_save_then_load_preserves_order_and_format(tmp_path: Path) -> None:
    state = tmp_path / "state.txt"
    records = [
        FileHash(name="docs/my notes.md", hash="aa" * 32),
        FileHash(name="b.md", hash="bb" * 32),
    ]

    save_snapshot(records, state)

    assert state.read_text(encoding="utf-8") == (
        f"{'aa' * 32}  docs/my notes.md\n{'bb' * 32}  b.md\n"
    )
    assert load_snapshot(state) == records
    assert [item.name for item in tmp_path.iterdir()] == ["state.txt"]


def test_save_replaces_existing_state(tmp_path: Path) -> None:
    state = tmp_path / "state.txt"
    state.write_text("stale\n", encoding="utf-8")

    save_snapshot([FileHash(name="a.md", hash="cc")], state)

    assert load_snapshot(state) == [FileHash(name="a.md", hash="cc")]


def test_missing_state_raises_file_not_found(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_snapshot(tmp_path / "absent.txt")


@pytest.mark.parametrize("line", ["", "   ", "deadbeef", "deadbeef   "])
def test_malformed_lines_are_rejected(line: str) -> None:
    with pytest.raises(SnapshotFormatError) as excinfo:
        parse_snapshot_line(line, 3)

    assert excinfo.value.line_number == 3
    assert str(excinfo.value).startswith("invalid snapshot line 3:")


def test_load_reports_offending_line_number(tmp_path: Path) -> None:
    state = tmp_path / "state.txt"
    state.write_text("aa  a.md\n\nbb  b.md\n", encoding="utf-8")

    with pytest.raises(SnapshotFormatError) as excinfo:
        load_snapshot(state)

    assert excinfo.value.line_number == 2


def test_lookups_prefer_the_last_duplicate() -> None:
    old = [
        FileHash(name="a.md", hash="h1"),
        FileHash(name="copy.md", hash="h1"),
        FileHash(name="b.md", hash="h2"),
    ]
    new = [
        FileHash(name="x/a.md", hash="h1"),
        FileHash(name="y/a.md", hash="h1"),
    ]

    lookups = SnapshotLookups.build(old, new)

    assert lookups.old_hash_to_name == {"h1": "copy.md", "h2": "b.md"}
    assert lookups.old_name_to_hash == {"a.md": "h1", "copy.md": "h1", "b.md": "h2"}
    assert lookups.new_hash_to_name == {"h1": "y/a.md"}
