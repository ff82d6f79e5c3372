"""Pagination result value object."""
import math
from dataclasses import dataclass
from typing import Generic, List, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class PaginationResult(Generic[T]):
    """One page of results plus metadata derived from the total count."""
    items: List[T]
    current_page: int
    total_items: int
    items_per_page: int

    @property
    def total_pages(self) -> int:
        if self.items_per_page <= 0:
            return 0
        return math.ceil(self.total_items / self.items_per_page)

    @property
    def has_next_page(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def has_prev_page(self) -> bool:
        return self.current_page > 1
