"""
TableRenderer — Listings as aligned columns

    [ ] BACKLOG (2)
      Slug            Name            Created
      --------------  --------------  ----------
      invoice-chaser  Invoice Chaser  2026-01-12
      habit-tracker   Habit Tracker   2026-02-03

Rows are dicts; each Column names the key it reads. When the table is
wider than the terminal the widest column gives way first, and clipped
cells end in the symbol set's ellipsis.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Sequence

from .base import BaseRenderer, MIN_WIDTH, cell_text

if TYPE_CHECKING:
    from . import OutputSpec

INDENT = "  "
GAP = "  "


@dataclass(frozen=True)
class Column:
    header: str
    key: str
    align: str = "left"  # "right" for scores and counts


class TableRenderer(BaseRenderer):

    def render(self, spec: "OutputSpec") -> str:
        lines = [spec.title] if spec.title else []
        rows = spec.data or []
        if not rows:
            lines.append(f"{INDENT}{spec.empty_message}")
            return "\n".join(lines)

        columns = spec.columns
        cells = [[cell_text(row.get(column.key)) for column in columns] for row in rows]
        widths = self._fit([
            max([len(column.header)] + [len(row[i]) for row in cells])
            for i, column in enumerate(columns)
        ])

        lines.append(self._line([column.header for column in columns], columns, widths))
        lines.append(self._line([self.symbols.rule * w for w in widths], columns, widths))
        lines.extend(self._line(row, columns, widths) for row in cells)
        return "\n".join(lines)

    def _fit(self, widths: List[int]) -> List[int]:
        """Shrink the widest column, one character at a time, until the row fits."""
        available = self.width - len(INDENT) - len(GAP) * (len(widths) - 1)
        widths = list(widths)
        while widths and sum(widths) > available:
            widest = widths.index(max(widths))
            if widths[widest] <= MIN_WIDTH:
                break
            widths[widest] -= 1
        return widths

    def _line(self, values: Sequence[str], columns: Sequence[Column], widths: Sequence[int]) -> str:
        parts = []
        for value, column, width in zip(values, columns, widths):
            text = self.clip(value, width)
            parts.append(text.rjust(width) if column.align == "right" else text.ljust(width))
        return (INDENT + GAP.join(parts)).rstrip()
