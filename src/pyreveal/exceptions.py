"""Custom exception hierarchy for pyreveal."""

from __future__ import annotations


class RevealError(Exception):
    """Base exception for all pyreveal errors."""


class RevealConfigError(RevealError):
    """Invalid or missing configuration."""


class RevealStateError(RevealError):
    """Operation not allowed in the current session state.

    Raised when a closed sequencer is asked to start a new reveal.
    Stale completion callbacks never raise; they are discarded.
    """


class RevealTransportError(RevealError):
    """HTTP-level failure (network, non-200, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str = "",
    ) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message)
