"""
BaseRenderer — Shared state and text helpers for the renderers
"""

from abc import ABC, abstractmethod
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from ..presentation.symbols import SymbolSet
    from . import OutputSpec

# Narrowest a clipped cell or line may get
MIN_WIDTH = 4


def cell_text(value: Any) -> str:
    """Display text for one value: None is blank, booleans read Yes/No."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "Yes" if value else "No"
    return str(value).replace("\n", " ")


class BaseRenderer(ABC):
    """A renderer turns one OutputSpec into text no wider than `width`."""

    def __init__(self, symbols: "SymbolSet", width: int):
        self.symbols = symbols
        self.width = width

    @abstractmethod
    def render(self, spec: "OutputSpec") -> str:
        ...

    def clip(self, text: str, length: int) -> str:
        """Cut text to length, ending in the symbol set's ellipsis when cut."""
        length = max(MIN_WIDTH, length)
        if len(text) <= length:
            return text
        ellipsis = self.symbols.ellipsis
        return text[:length - len(ellipsis)] + ellipsis
