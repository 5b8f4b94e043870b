"""Page window arithmetic for admin listings."""

from __future__ import annotations

from dataclasses import dataclass, replace

DEFAULT_PAGE_SIZE = 10


@dataclass(frozen=True)
class PageWindow:
    """Position of one page within a listing of ``total`` records (1-based)."""

    page: int
    total: int
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError(f"page must be >= 1, got {self.page}")
        if self.page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {self.page_size}")
        if self.total < 0:
            raise ValueError(f"total must be >= 0, got {self.total}")

    @property
    def past_end(self) -> bool:
        """True when the page starts after the last record."""
        return (self.page - 1) * self.page_size >= self.total

    @property
    def first_index(self) -> int:
        if self.past_end:
            return 0
        return (self.page - 1) * self.page_size + 1

    @property
    def last_index(self) -> int:
        if self.past_end:
            return 0
        return min(self.page * self.page_size, self.total)

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page * self.page_size < self.total

    def previous(self) -> PageWindow:
        return replace(self, page=max(1, self.page - 1))

    def next(self) -> PageWindow:
        if not self.has_next:
            return self
        return replace(self, page=self.page + 1)

    def describe(self, noun: str) -> str:
        """Human-readable range, e.g. ``Showing 11 to 20 of 42 users``."""
        if self.past_end and self.total > 0:
            return f"Page {self.page} is past the end: {self.total} {noun} in total"
        return f"Showing {self.first_index} to {self.last_index} of {self.total} {noun}"
