"""
Presentation — Terminal display helpers
"""

from .symbols import (
    SymbolSet, UNICODE, ASCII, get_symbols,
    safe_print, sanitize_control_chars,
    symbol_for_status, format_status,
)

__all__ = [
    'SymbolSet', 'UNICODE', 'ASCII', 'get_symbols',
    'safe_print', 'sanitize_control_chars',
    'symbol_for_status', 'format_status',
]
