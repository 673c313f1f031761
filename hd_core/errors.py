from __future__ import annotations


class InvalidInputError(ValueError):
    """Raised when chart input is structurally invalid (non-finite longitude, missing body, bad date)."""
