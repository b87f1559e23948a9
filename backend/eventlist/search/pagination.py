"""
Pagination window arithmetic.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class PageInfo:
    page: int
    limit: int
    total: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def total_pages(self) -> int:
        # ceil(0 / limit) == 0: an empty result has no pages, not one empty page
        return -(-self.total // self.limit)

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        # A page past the end still points back
        return self.page > 1
