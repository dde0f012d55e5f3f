"""
Errors — Programmer-facing failures of the data layer

Only misuse raises. Everything a caller can trigger with bad input
(malformed slug, missing idea, duplicate) comes back as a Result
(see results.py), never as one of these.
"""


class LaunchpadError(Exception):
    """Base class for Launchpad failures."""


class UnknownStatusError(LaunchpadError, ValueError):
    """Raised when a path is requested for a status outside the lifecycle."""

    def __init__(self, status: str):
        self.status = status
        super().__init__(f"Unknown vault status: {status}")


class UnknownSOPError(LaunchpadError, ValueError):
    """Raised when a path is requested for an SOP number not in the catalog."""

    def __init__(self, number: str):
        self.number = number
        super().__init__(f"Unknown SOP number: {number}")
