"""
DetailRenderer — One idea, audit or project

    [>] Invoice Chaser [invoice-chaser]
      Status: [ ] backlog
      Audit: [!] none
      Problem:
        Freelancers chase invoices.

        ## Evidence
      Criteria:
        Market Size: 40/100 [ERR]

      Next steps:
        -> Run SOP 01a (Rigorous Idea Audit)

Field labels are the data keys as given. Single-line values are clipped
to the terminal; multi-line values and the body are printed in full.
"""

from typing import TYPE_CHECKING, Any, List

from .base import BaseRenderer, cell_text

if TYPE_CHECKING:
    from . import OutputSpec


def indent(text: str, prefix: str) -> List[str]:
    return [prefix + line if line.strip() else "" for line in text.split("\n")]


class DetailRenderer(BaseRenderer):

    def render(self, spec: "OutputSpec") -> str:
        lines = [spec.title] if spec.title else []
        if not spec.data and not spec.body:
            lines.append(f"  {spec.empty_message}")
            return "\n".join(lines)

        for label, value in (spec.data or {}).items():
            lines.extend(self._field(label, value))

        if spec.body:
            lines.append("")
            lines.extend(indent(spec.body, "  "))

        if spec.actions:
            lines.append("")
            lines.append("  Next steps:")
            lines.extend(f"    {self.symbols.arrow} {action}" for action in spec.actions)

        return "\n".join(lines)

    def _field(self, label: str, value: Any) -> List[str]:
        if isinstance(value, dict):
            lines = [f"  {label}:"]
            for key, item in value.items():
                text = f"{key}: {cell_text(item)}"
                lines.append(f"    {self.clip(text, self.width - 4)}")
            return lines

        if isinstance(value, str) and "\n" in value:
            return [f"  {label}:"] + indent(value, "    ")

        text = cell_text(value)
        return [f"  {label}: {self.clip(text, self.width - len(label) - 4)}".rstrip()]
