"""Fixed-size page windows over a user's phrase list."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from math import ceil

from vocabbot.constants import DEFAULT_PAGE_SIZE

PAGE_ICON = "📄"
PAGE_SEPARATOR = "-" * 41


@dataclass(frozen=True, slots=True)
class PhrasePage:
    page: int
    page_size: int
    max_page: int
    total: int
    start: int
    end: int
    items: tuple[str, ...]

    @property
    def numbered_items(self) -> list[tuple[int, str]]:
        return list(enumerate(self.items, start=self.start + 1))

    @property
    def has_previous(self) -> bool:
        return self.page > 0 and self.max_page > 0

    @property
    def has_next(self) -> bool:
        return self.page < self.max_page - 1

    @property
    def previous_page(self) -> int:
        # A stored page past the end leads back to the last real page.
        return max(0, min(self.page - 1, self.max_page - 1))


def max_page_for(total: int, page_size: int) -> int:
    if page_size <= 0:
        raise ValueError(f"page_size must be positive, got {page_size}")
    if total <= 0:
        return 0
    return ceil(total / page_size)


def paginate(
    phrases: Sequence[str], page: int, page_size: int = DEFAULT_PAGE_SIZE
) -> PhrasePage:
    total = len(phrases)
    page = max(0, page)
    max_page = max_page_for(total, page_size)
    start = min(page * page_size, total)
    end = min(start + page_size, total)
    return PhrasePage(
        page=page,
        page_size=page_size,
        max_page=max_page,
        total=total,
        start=start,
        end=end,
        items=tuple(phrases[start:end]),
    )


def format_page(page: PhrasePage, header: str) -> str:
    lines = [
        f"{PAGE_ICON}{header} {page.page + 1}/{page.max_page}:",
        PAGE_SEPARATOR,
    ]
    lines.extend(f"{number}. *{text}*" for number, text in page.numbered_items)
    return "\n".join(lines) + "\n"
