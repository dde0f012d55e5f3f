"""
Launchpad — Idea vault, audits and SOPs on plain Markdown files

Ideas live in status folders (backlog, active, shipped, killed); the
folder IS the status. Audits and SOPs are read, never written.

Usage:
    launchpad ideas backlog
    launchpad new invoice-chaser "Invoice Chaser" --problem "..." --solution "..."
    launchpad move invoice-chaser active --reason "Audit passed"
    launchpad audits --min-score 400
    launchpad search checklist
    launchpad stats
"""

__version__ = "0.1.0"

# Core layer (data)
from .core.markdown import Record, parse_record, read_record
from .core.paths import STATUSES, VaultPaths
from .core.results import Outcome, Result
from .core.extractors import VERDICTS, extract_score, extract_verdict, extract_criteria

# Stores
from .vault import IdeaStore, AuditStore, SOPCatalog, ProjectRegistry, VaultAggregator

# Services layer
from .services.providers import get_provider, LLMProvider
from .services.assistant import SOPAssistant

# Operation surface
from .api import Launchpad, OPERATIONS

# Config (stays at root)
from .config import Config, ConfigManager, get_config

__all__ = [
    # Core
    'Record', 'parse_record', 'read_record',
    'STATUSES', 'VaultPaths',
    'Outcome', 'Result',
    'VERDICTS', 'extract_score', 'extract_verdict', 'extract_criteria',
    # Stores
    'IdeaStore', 'AuditStore', 'SOPCatalog', 'ProjectRegistry', 'VaultAggregator',
    # Services
    'get_provider', 'LLMProvider', 'SOPAssistant',
    # API
    'Launchpad', 'OPERATIONS',
    # Config
    'Config', 'ConfigManager', 'get_config',
]
