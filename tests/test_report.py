"""Tests for report ordering and rendering."""

from __future__ import annotations

import pytest

from gomodsize.graph.resolver import SizeResolver
from gomodsize.models import ReportRow
from gomodsize.report import NAME_WIDTH, Reporter, format_size
from tests._fixtures.nodes import build_nodes


@pytest.mark.parametrize(
    ("size", "expected"),
    [
        (0, "0B"),
        (1023, "1023B"),
        (1024, "1.0K"),
        (1536, "1.5K"),
        (1048575, "1024.0K"),
        (1048576, "1.0M"),
        (5 * 1024**3, "5.0G"),
        (1024**4, "1.0T"),
        (1024**5, "1.0P"),
        (3 * 1024**6, "3.0E"),
    ],
)
def test_format_size(size: int, expected: str) -> None:
    assert format_size(size) == expected


def test_format_size_rejects_negative() -> None:
    with pytest.raises(ValueError):
        format_size(-1)


def test_rows_are_sorted_by_total_then_identifier() -> None:
    nodes = build_nodes(
        [("app", "b"), ("app", "a")],
        {"app": 1, "a": 50, "b": 50, "c": 10},
    )
    SizeResolver().resolve(nodes)

    rows = Reporter().rows(nodes)

    assert [row.id for row in rows] == ["app", "a", "b", "c"]
    totals = [row.total_size for row in rows]
    assert totals == sorted(totals, reverse=True)


def test_row_order_is_stable_across_runs() -> None:
    sizes = {f"m{index}": 10 for index in range(10)}
    first = build_nodes([], sizes)
    second = build_nodes([], dict(reversed(list(sizes.items()))))
    SizeResolver().resolve(first)
    SizeResolver().resolve(second)

    assert Reporter().rows(first) == Reporter().rows(second)


def test_limit_keeps_largest_rows() -> None:
    nodes = build_nodes([], {"a": 1, "b": 2, "c": 3})
    SizeResolver().resolve(nodes)

    rows = Reporter(limit=2).rows(nodes)

    assert [row.id for row in rows] == ["c", "b"]


def test_render_pads_columns_and_marks_approximate_totals() -> None:
    rows = [
        ReportRow(id="example.com/app", direct_size=2048, total_size=1048576, approximate=True),
        ReportRow(id="rsc.io/quote@v1.5.2", direct_size=12, total_size=12, approximate=False),
    ]

    output = Reporter().render(rows)

    lines = output.splitlines()
    assert output.endswith("\n")
    assert lines[0] == "example.com/app".ljust(NAME_WIDTH) + "       2.0K" + "      ~1.0M"
    assert lines[1] == "rsc.io/quote@v1.5.2".ljust(NAME_WIDTH) + "        12B" + "        12B"


def test_render_without_rows_is_empty() -> None:
    assert Reporter().render([]) == ""
