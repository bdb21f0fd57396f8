from __future__ import annotations

import os
from pathlib import Path

from mdlinks.links import (
    file_exists,
    file_or_dir_exists,
    join_clean,
    relative_destination_path,
    resolve_destination_path,
)


def test_resolution_is_relative_to_the_referencing_document() -> None:
    assert resolve_destination_path("docs/a.md", "img.png") == os.path.join("docs", "img.png")
    assert resolve_destination_path("a.md", "img.png") == "img.png"
    assert resolve_destination_path("docs/sub/a.md", "../b.md") == os.path.join("docs", "b.md")


def test_leading_slash_stays_relative_to_document_dir() -> None:
    assert resolve_destination_path("docs/a.md", "/img.png") == os.path.join("docs", "img.png")


def test_join_clean_normalizes() -> None:
    assert join_clean(".", "./x/../y.md") == "y.md"
    assert join_clean("", "y.md") == "y.md"


def test_image_and_link_existence_semantics_differ(tmp_path: Path) -> None:
    (tmp_path / "folder").mkdir()
    (tmp_path / "file.txt").write_text("x", encoding="utf-8")

    assert file_or_dir_exists(str(tmp_path / "folder")) is True
    assert file_exists(str(tmp_path / "folder")) is False
    assert file_exists(str(tmp_path / "file.txt")) is True
    assert file_or_dir_exists(str(tmp_path / "missing")) is False


def test_relative_destination_path_uses_forward_slashes() -> None:
    target = os.path.join("docs", "moved", "b.md")
    assert relative_destination_path("docs", target) == "moved/b.md"
    assert relative_destination_path(os.path.join("docs", "sub"), "c.md") == "../../c.md"
