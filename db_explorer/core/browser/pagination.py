from dataclasses import dataclass
from typing import Optional

# Fixed number of rows shown per table page
ROWS_PER_PAGE = 50

# Largest page number accepted; anything bigger falls back to 1 like any bad value
MAX_PAGE = 2**63 - 1


def parse_page(raw: Optional[str]) -> int:
    """
    Turn the ?page= value into a 1-based page number, falling back to 1.
    Only an optional sign followed by ASCII digits counts as a number,
    so "1_000", " 7 " and non-ASCII digits all mean page 1.
    """
    if not raw:
        return 1
    digits = raw[1:] if raw[0] in "+-" else raw
    if not (digits.isascii() and digits.isdigit()):
        return 1
    page = int(raw)
    return page if 0 < page <= MAX_PAGE else 1


@dataclass(frozen=True)
class Page:
    number: int
    total_rows: int
    size: int = ROWS_PER_PAGE

    @classmethod
    def build(cls, number: int, total_rows: int) -> "Page":
        return cls(number=max(number, 1), total_rows=total_rows)

    @property
    def offset(self) -> int:
        return (self.number - 1) * self.size

    @property
    def limit(self) -> int:
        return self.size

    @property
    def total_pages(self) -> int:
        if self.total_rows <= 0:
            return 0
        return (self.total_rows - 1) // self.size + 1

    @property
    def next_page(self) -> int:
        return self.number + 1

    @property
    def prev_page(self) -> int:
        return self.number - 1

    @property
    def has_next(self) -> bool:
        return self.number < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.number > 1
