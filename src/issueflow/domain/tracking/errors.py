"""Errors raised by the tracking layer."""

from __future__ import annotations


class TrackingError(ValueError):
    """Raised when a tracking result breaks its partition invariants."""
