"""
Launchpad utilities — Cross-cutting helpers
"""

from .parallel import map_parallel
from .fuzzy import suggest

__all__ = ['map_parallel', 'suggest']
