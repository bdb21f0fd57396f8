from __future__ import annotations

from pathlib import Path

from mdlinks.config import ScanConfig
from mdlinks.index import FileHash, SnapshotLookups, build_snapshot, load_snapshot
from mdlinks.logging import Diagnostics
from mdlinks.reconcile import reconcile, reconcile_document


def _write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def _move(src: Path, dst: Path) -> None:
    dst.parent.mkdir(parents=True, exist_ok=True)
    src.rename(dst)


def _reconcile(tree: Path, state: Path) -> tuple:
    diagnostics = Diagnostics()
    outcome = reconcile(state, str(tree), diagnostics, ScanConfig())
    return outcome, diagnostics


def test_first_run_records_state_without_touching_documents(tmp_path: Path) -> None:
    tree = tmp_path / "tree"
    state = tmp_path / "state.txt"
    _write(tree / "a.md", "[b](b.md)\n")
    _write(tree / "b.md", "# B\n")

    outcome, diagnostics = _reconcile(tree, state)

    assert outcome.initialized is True
    assert outcome.snapshot_saved is True
    assert [record.name for record in load_snapshot(state)] == [
        str(tree / "a.md"),
        str(tree / "b.md"),
    ]
    assert "not found, building one" in diagnostics.findings[0].message
    assert (tree / "a.md").read_text(encoding="utf-8") == "[b](b.md)\n"


def test_moved_target_is_relinked_with_fragment(tmp_path: Path) -> None:
    tree = tmp_path / "tree"
    state = tmp_path / "state.txt"
    _write(tree / "a.md", "[b](b.md#setup) ![img](img.png)\n")
    _write(tree / "b.md", "# Setup\n")
    _write(tree / "img.png", "png")
    _reconcile(tree, state)

    _move(tree / "b.md", tree / "sub" / "c.md")
    _move(tree / "img.png", tree / "assets" / "img.png")
    outcome, diagnostics = _reconcile(tree, state)

    assert (tree / "a.md").read_text(encoding="utf-8") == (
        "[b](sub/c.md#setup) ![img](assets/img.png)\n"
    )
    assert outcome.updated_documents == [str(tree / "a.md")]
    assert outcome.replacements == 2
    assert outcome.snapshot_saved is True
    assert len(diagnostics.by_code("replacement")) == 2
    saved = {record.name for record in load_snapshot(state)}
    assert str(tree / "sub" / "c.md") in saved


def test_document_and_target_moved_together(tmp_path: Path) -> None:
    tree = tmp_path / "tree"
    state = tmp_path / "state.txt"
    _write(tree / "docs" / "guide.md", "[readme](../README.md)\n")
    _write(tree / "README.md", "# Readme\n")
    _reconcile(tree, state)

    _move(tree / "docs" / "guide.md", tree / "guide.md")
    _move(tree / "README.md", tree / "meta" / "README.md")
    _reconcile(tree, state)

    assert (tree / "guide.md").read_text(encoding="utf-8") == "[readme](meta/README.md)\n"


def test_parentheses_in_destinations_stay_escaped(tmp_path: Path) -> None:
    tree = tmp_path / "tree"
    state = tmp_path / "state.txt"
    _write(tree / "a.md", "[x](b\\(1\\).md)\n")
    _write(tree / "b(1).md", "# B\n")
    _reconcile(tree, state)

    _move(tree / "b(1).md", tree / "c(2).md")
    _reconcile(tree, state)

    assert (tree / "a.md").read_text(encoding="utf-8") == "[x](c\\(2\\).md)\n"


def test_working_links_and_external_urls_are_left_alone(tmp_path: Path) -> None:
    tree = tmp_path / "tree"
    state = tmp_path / "state.txt"
    text = "[b](b.md) [web](https://example.com/gone.md) [x](#top)\n"
    _write(tree / "a.md", text)
    _write(tree / "b.md", "# B\n")
    _write(tree / "other.txt", "other")
    _reconcile(tree, state)
    before = state.read_text(encoding="utf-8")

    _move(tree / "other.txt", tree / "moved.txt")
    outcome, _ = _reconcile(tree, state)

    assert outcome.did_updates is False
    assert outcome.snapshot_saved is False
    assert (tree / "a.md").read_text(encoding="utf-8") == text
    assert state.read_text(encoding="utf-8") == before


def test_edited_document_is_skipped_with_warning(tmp_path: Path) -> None:
    tree = tmp_path / "tree"
    state = tmp_path / "state.txt"
    _write(tree / "a.md", "[b](b.md)\n")
    _write(tree / "b.md", "# B\n")
    _reconcile(tree, state)

    _move(tree / "b.md", tree / "c.md")
    _write(tree / "a.md", "[b](b.md)\nedited\n")
    outcome, diagnostics = _reconcile(tree, state)

    assert outcome.did_updates is False
    [warning] = diagnostics.by_code("unknown_former_name")
    assert warning.severity == "warning"
    assert "cannot figure out old name" in warning.message


def test_second_reconcile_after_update_is_a_no_op(tmp_path: Path) -> None:
    tree = tmp_path / "tree"
    state = tmp_path / "state.txt"
    _write(tree / "a.md", "[b](b.md)\n")
    _write(tree / "b.md", "# B\n")
    _reconcile(tree, state)
    _move(tree / "b.md", tree / "c.md")
    _reconcile(tree, state)

    outcome, diagnostics = _reconcile(tree, state)

    assert outcome.did_updates is False
    assert diagnostics.by_code("unknown_former_name") == ()
    assert (tree / "a.md").read_text(encoding="utf-8") == "[b](c.md)\n"


def test_vanished_document_is_reported(tmp_path: Path) -> None:
    lookups = SnapshotLookups.build([FileHash(name="a.md", hash="h")], [])
    diagnostics = Diagnostics()

    applied = reconcile_document(str(tmp_path / "gone.md"), lookups, diagnostics)

    assert applied == 0
    assert diagnostics.findings[0].code == "document_missing"


def test_snapshot_matches_tree_after_update(tmp_path: Path) -> None:
    tree = tmp_path / "tree"
    state = tmp_path / "state.txt"
    _write(tree / "a.md", "[b](b.md)\n")
    _write(tree / "b.md", "# B\n")
    _reconcile(tree, state)
    _move(tree / "b.md", tree / "c.md")

    _reconcile(tree, state)

    assert load_snapshot(state) == build_snapshot(str(tree), ScanConfig())
