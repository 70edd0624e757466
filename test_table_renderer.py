"""Tests for table measurement and row pagination."""
import pytest

from clearance_report.config import NO_ITEMS_TEXT
from clearance_report.document_builder import TableBlock, TableRenderer

CONTENT_TOP = 100.0
ROW = 17.0  # one 9pt line at a fixed 11pt line height plus 3pt padding top and bottom


def make_table(rows, widths=(100, 200)):
    return TableBlock(headers=["Item", "Location"][: len(widths)], rows=rows, column_widths=list(widths))


class PageBreaker:
    """Stands in for the layout engine's page break callback."""

    def __init__(self, ctx):
        self.ctx = ctx
        self.calls = 0

    def __call__(self):
        self.calls += 1
        self.ctx.start_page("flowing", CONTENT_TOP)


@pytest.fixture
def tables(fonts):
    return TableRenderer(fonts)


@pytest.fixture
def page(ctx):
    ctx.start_page("flowing", CONTENT_TOP)
    return ctx


def test_single_line_row_height(tables):
    table = make_table([["1", "Kitchen"]])
    wrapped = tables.wrap_row(["1", "Kitchen"], table.column_widths, tables.body_font(table))
    assert tables.row_height(wrapped, table) == pytest.approx(ROW)


def test_row_height_follows_tallest_cell(tables):
    long_text = "Ceiling void above the north-eastern corridor adjoining the plant room"
    table = make_table([["1", long_text]])
    wrapped = tables.wrap_row(["1", long_text], table.column_widths, tables.body_font(table))
    assert len(wrapped[1]) > 1
    assert tables.row_height(wrapped, table) == pytest.approx(len(wrapped[1]) * 11 + 6)


def test_empty_table_renders_placeholder_row(tables, page):
    breaker = PageBreaker(page)
    tables.render_table(page, make_table([]), bottom_limit=800, page_break=breaker)

    rows = page.current_page.labels("table_row")
    assert rows == [NO_ITEMS_TEXT]
    assert page.current_page.labels("table_header") == ["Item | Location"]
    assert breaker.calls == 0


def test_placeholder_row_spans_all_columns(tables):
    table = make_table([])
    wrapped = tables.wrap_row([NO_ITEMS_TEXT], table.column_widths, tables.body_font(table))
    assert len(wrapped) == 1


def test_exactly_one_break_before_row_that_does_not_fit(tables, page):
    # Room for the header and two rows, not the third
    bottom = CONTENT_TOP + 3 * ROW + 5
    breaker = PageBreaker(page)
    table = make_table([["1", "a"], ["2", "b"], ["3", "c"]])

    breaks = tables.render_table(page, table, bottom_limit=bottom, page_break=breaker)

    assert breaks == 1
    assert breaker.calls == 1
    first, second = page.pages
    assert first.labels("table_row") == ["1 | a", "2 | b"]
    assert second.labels("table_row") == ["3 | c"]
    # Header row is repeated on the continuation page
    assert second.labels("table_header") == ["Item | Location"]
    assert second.elements[0].top == CONTENT_TOP


def test_rows_are_never_split(tables, page):
    bottom = 400.0
    text = "Removal of bonded fibre cement sheeting from the eastern eaves and soffits"
    table = make_table([[str(n), text * (1 + n % 3)] for n in range(1, 30)])

    breaks = tables.render_table(page, table, bottom_limit=bottom, page_break=PageBreaker(page))

    assert breaks >= 2
    for record in page.pages:
        for element in record.elements:
            assert element.bottom <= bottom + 0.01
    drawn = [label for record in page.pages for label in record.labels("table_row")]
    assert [label.split(" | ")[0] for label in drawn] == [str(n) for n in range(1, 30)]


def test_row_taller_than_page_overflows_without_looping(tables, page):
    bottom = CONTENT_TOP + 10
    table = make_table([["1", "a"], ["2", "b"]])
    breaker = PageBreaker(page)

    breaks = tables.render_table(page, table, bottom_limit=bottom, page_break=breaker)

    # One break per row after the first; never a break for a page holding only the header
    assert breaks == 1
    assert [len(p.labels("table_row")) for p in page.pages] == [1, 1]
    assert page.pages[0].elements[-1].bottom > bottom


def test_cursor_advances_past_table(tables, page):
    tables.render_table(page, make_table([["1", "a"], ["2", "b"]]), bottom_limit=800,
                        page_break=PageBreaker(page))
    assert page.cursor_y == pytest.approx(CONTENT_TOP + 3 * ROW)
