from __future__ import annotations

from mdlinks.anchors import MAX_DUPLICATE_SUFFIX, extract_anchors, unique_heading_id
from mdlinks.document import Document, Heading, Link, RawMarkupBlock, RawMarkupSpan, parse_document


def test_duplicate_headings_get_numbered_suffixes() -> None:
    document = parse_document(b"# Intro\n\n## Intro\n\n### Intro\n\n# Usage\n")
    assert extract_anchors(document) == frozenset({"intro", "intro-1", "intro-2", "usage"})


def test_n_identical_headings_produce_n_distinct_anchors_up_to_bound() -> None:
    count = MAX_DUPLICATE_SUFFIX + 1
    document = Document(nodes=tuple(Heading(id="same") for _ in range(count)))
    anchors = extract_anchors(document)

    assert len(anchors) == count
    assert "same" in anchors
    assert f"same-{MAX_DUPLICATE_SUFFIX}" in anchors


def test_headings_past_the_bound_contribute_nothing() -> None:
    document = Document(nodes=tuple(Heading(id="same") for _ in range(MAX_DUPLICATE_SUFFIX + 5)))
    anchors = extract_anchors(document)

    assert len(anchors) == MAX_DUPLICATE_SUFFIX + 1
    assert f"same-{MAX_DUPLICATE_SUFFIX + 1}" not in anchors


def test_explicit_html_anchor_shifts_heading_suffix() -> None:
    document = Document(
        nodes=(
            RawMarkupBlock(data=b'<a name="faq-1"></a>'),
            Heading(id="faq"),
            Heading(id="faq"),
        )
    )
    assert extract_anchors(document) == frozenset({"faq", "faq-1", "faq-2"})


def test_raw_markup_anchors_and_empty_heading_ids() -> None:
    document = Document(
        nodes=(
            Heading(id=""),
            RawMarkupSpan(data=b'<span id="inline"></span>'),
            RawMarkupBlock(data=b'<div id="\xff"></div>'),
            Link(destination="#inline"),
        )
    )
    assert extract_anchors(document) == frozenset({"inline"})


def test_unique_heading_id_returns_none_when_exhausted() -> None:
    taken = {"x"} | {f"x-{index}" for index in range(1, MAX_DUPLICATE_SUFFIX + 1)}
    assert unique_heading_id("x", taken) is None
    assert unique_heading_id("y", taken) == "y"
    assert unique_heading_id("x", {"x", "x-1"}) == "x-2"
