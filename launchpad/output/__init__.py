"""
Output — Views for human-readable CLI output

A command turns an operation's result dict into an OutputSpec and hands
it to LaunchpadCLI.render(). Each shape matches one kind of screen:

    table   idea, audit and project listings
    list    SOP search excerpts
    detail  one idea, audit or project

--json bypasses this package entirely and prints the result dict with
dumps().
"""

import builtins
import shutil
from dataclasses import dataclass, field
from typing import Any, List, Optional, TYPE_CHECKING

from .base import BaseRenderer
from .table import Column, TableRenderer
from .list import ListRenderer
from .detail import DetailRenderer
from .json import dumps

if TYPE_CHECKING:
    from ..presentation.symbols import SymbolSet


@dataclass
class OutputSpec:
    """
    What a command wants shown.

    Attributes:
        data: Rows (table), items (list) or label -> value fields (detail)
        shape: "table" | "list" | "detail"
        title: Header line
        columns: Table columns, in order
        body: Free text after the detail fields, never clipped
        actions: Suggested next commands under the detail view
        empty_message: Shown under the title when there is no data
    """
    data: Any
    shape: str = "detail"
    title: Optional[str] = None
    columns: List[Column] = field(default_factory=builtins.list)
    body: Optional[str] = None
    actions: List[str] = field(default_factory=builtins.list)
    empty_message: str = "Nothing to show."


RENDERERS = {
    "table": TableRenderer,
    "list": ListRenderer,
    "detail": DetailRenderer,
}


def render(spec: OutputSpec, symbols: "SymbolSet" = None, width: int = 0) -> str:
    """
    Render a view to text.

    Args:
        spec: View built by a command
        symbols: Marker set (detected from stdout when None)
        width: Line budget; 0 means the terminal width

    Raises:
        ValueError: Unknown shape
    """
    renderer = RENDERERS.get(spec.shape)
    if renderer is None:
        raise ValueError(f"Unknown shape '{spec.shape}'. Valid: {', '.join(RENDERERS)}")

    if symbols is None:
        from ..presentation.symbols import get_symbols
        symbols = get_symbols()
    if not width:
        width = shutil.get_terminal_size().columns

    return renderer(symbols, width).render(spec)


__all__ = [
    "OutputSpec", "Column", "render", "dumps", "RENDERERS",
    "BaseRenderer", "TableRenderer", "ListRenderer", "DetailRenderer",
]
