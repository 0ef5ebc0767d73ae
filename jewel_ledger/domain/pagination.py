"""
Statement pagination.

Tiles an ordered entry list over pages of fixed capacity. The first page
gives up one row to the opening balance, the last page one row to the
closing balance / totals row. Entries are never reordered or split.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from .exceptions import InvalidCapacityError

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    number: int
    entries: tuple[T, ...]
    opening_row: bool = False
    closing_row: bool = False

    @property
    def row_count(self) -> int:
        return len(self.entries) + int(self.opening_row) + int(self.closing_row)


def rows_per_page(table_height: float, row_height: float, header_height: float = 0) -> int:
    """Usable table height divided by the row height, minus the header band."""
    return math.floor((table_height - header_height) / row_height)


class StatementPaginator:
    """
    Service - Lays ledger entries out over report pages.

    With ``n`` entries and ``reserved`` synthetic rows the document has
    ``ceil((n + reserved) / max_rows_per_page)`` pages. An empty entry list
    with no synthetic rows yields no pages at all.
    """

    def __init__(self, max_rows_per_page: int):
        self.max_rows_per_page = max_rows_per_page

    def _check_capacity(self, reserved_rows: int) -> None:
        if self.max_rows_per_page < 1 or self.max_rows_per_page <= reserved_rows:
            raise InvalidCapacityError(self.max_rows_per_page, reserved_rows)

    def page_count(self, entry_count: int, opening_row: bool = True, closing_row: bool = True) -> int:
        reserved = int(opening_row) + int(closing_row)
        self._check_capacity(reserved)
        return math.ceil((entry_count + reserved) / self.max_rows_per_page)

    def paginate(
        self,
        entries: Sequence[T],
        opening_row: bool = True,
        closing_row: bool = True,
    ) -> list[Page[T]]:
        total_pages = self.page_count(len(entries), opening_row, closing_row)

        pages: list[Page[T]] = []
        cursor = 0
        for number in range(1, total_pages + 1):
            is_first = number == 1
            is_last = number == total_pages
            capacity = self.max_rows_per_page
            if is_first and opening_row:
                capacity -= 1
            if is_last and closing_row:
                capacity -= 1
            chunk = tuple(entries[cursor:cursor + capacity])
            cursor += len(chunk)
            pages.append(Page(
                number=number,
                entries=chunk,
                opening_row=is_first and opening_row,
                closing_row=is_last and closing_row,
            ))
        return pages
