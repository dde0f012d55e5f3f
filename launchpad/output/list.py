"""
ListRenderer — One bulleted line per item (SOP search excerpts)
"""

from typing import TYPE_CHECKING

from .base import BaseRenderer, cell_text

if TYPE_CHECKING:
    from . import OutputSpec


class ListRenderer(BaseRenderer):

    def render(self, spec: "OutputSpec") -> str:
        lines = [spec.title] if spec.title else []
        items = spec.data or []
        if not items:
            lines.append(f"  {spec.empty_message}")
            return "\n".join(lines)

        bullet = self.symbols.bullet
        room = self.width - len(bullet) - 3
        lines.extend(f"  {bullet} {self.clip(cell_text(item), room)}" for item in items)
        return "\n".join(lines)
