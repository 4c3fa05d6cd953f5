import pytest

from db_explorer.core.browser.pagination import ROWS_PER_PAGE, Page, parse_page


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, 1),
        ("", 1),
        ("abc", 1),
        ("0", 1),
        ("-4", 1),
        ("-", 1),
        ("1_000", 1),
        (" 7 ", 1),
        ("\u0667", 1),
        ("99999999999999999999", 1),
        ("1", 1),
        ("+3", 3),
        ("7", 7),
    ],
)
def test_parse_page(raw, expected):
    """Missing, unparsable and non-positive pages fall back to 1"""
    assert parse_page(raw) == expected


@pytest.mark.parametrize("number", [1, 2, 3, 10])
def test_offset_follows_page_number(number):
    page = Page.build(number, total_rows=1000)
    assert page.offset == (number - 1) * ROWS_PER_PAGE
    assert page.limit == ROWS_PER_PAGE == 50


@pytest.mark.parametrize("number", [1, 2, 5])
def test_empty_table_has_no_pages(number):
    """0 rows means 0 pages and no next page, whatever page was asked for"""
    page = Page.build(number, total_rows=0)
    assert page.total_pages == 0
    assert page.has_next is False


def test_page_metadata_for_125_rows():
    first = Page.build(1, total_rows=125)
    assert first.total_pages == 3
    assert first.has_next is True
    assert first.has_prev is False
    assert first.next_page == 2

    last = Page.build(3, total_rows=125)
    assert last.has_next is False
    assert last.has_prev is True
    assert last.prev_page == 2


def test_exact_multiple_of_page_size():
    assert Page.build(1, total_rows=100).total_pages == 2
    assert Page.build(1, total_rows=50).total_pages == 1
    assert Page.build(1, total_rows=51).total_pages == 2


def test_build_clamps_page_number():
    assert Page.build(0, total_rows=10).number == 1
