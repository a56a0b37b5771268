from typing import Optional


class PathwayCardsError(Exception):
    """Base class for errors raised by pathway_cards."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class MalformedCardError(PathwayCardsError, ValueError):
    """An index card does not have the expected shape."""


class UnknownPatternError(PathwayCardsError, ValueError):
    """No miner is registered for the requested pattern name."""
