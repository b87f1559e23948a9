"""
Tests for pagination metadata.
"""

import pytest

from eventlist.search.pagination import PageInfo


@pytest.mark.parametrize("total, limit, pages", [
    (0, 10, 0),
    (1, 10, 1),
    (10, 10, 1),
    (11, 10, 2),
    (25, 10, 3),
    (100, 1, 100),
    (99, 100, 1),
])
def test_total_pages_is_ceiling(total, limit, pages):
    assert PageInfo(page=1, limit=limit, total=total).total_pages == pages


def test_last_page_of_three():
    info = PageInfo(page=3, limit=10, total=25)
    assert info.total_pages == 3
    assert info.has_next is False
    assert info.has_prev is True
    assert info.offset == 20


def test_first_page_of_many():
    info = PageInfo(page=1, limit=10, total=25)
    assert info.has_next is True
    assert info.has_prev is False
    assert info.offset == 0


def test_zero_results():
    info = PageInfo(page=1, limit=10, total=0)
    assert info.total_pages == 0
    assert info.has_next is False
    assert info.has_prev is False


def test_page_past_the_end_is_representable():
    info = PageInfo(page=7, limit=10, total=0)
    assert info.total_pages == 0
    assert info.has_next is False
    assert info.has_prev is True

    info = PageInfo(page=5, limit=10, total=25)
    assert info.has_next is False
    assert info.has_prev is True
