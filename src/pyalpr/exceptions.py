"""Custom exception hierarchy for pyalpr."""

from __future__ import annotations


class AlprError(Exception):
    """Base exception for all pyalpr errors."""


class AlprConfigError(AlprError):
    """Invalid configuration or registry unavailable at startup.

    Fatal to the scanner: the loop is never started.
    """


class AlprLookupError(AlprError):
    """Registry lookup failed (unreachable store or malformed record)."""

    def __init__(self, message: str, *, plate: str = "") -> None:
        self.plate = plate
        super().__init__(message)


class AlprRegistryError(AlprLookupError):
    """Local registry database query failed."""


class AlprTransportError(AlprLookupError):
    """HTTP-level failure talking to a remote registry (network, non-200, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        plate: str = "",
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message, plate=plate)
