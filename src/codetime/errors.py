"""Exceptions raised for invalid client input."""

from __future__ import annotations


class CodetimeError(Exception):
    """Base class for codetime errors."""


class InvalidHeartbeatError(CodetimeError, ValueError):
    """A submitted heartbeat is missing its entity or has no usable time."""


class InvalidRangeError(CodetimeError, ValueError):
    """A summary was requested with the start date after the end date."""


class InvalidDateError(CodetimeError, ValueError):
    """A date parameter is not in ``YYYY-MM-DD`` format."""
