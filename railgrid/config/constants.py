"""Centralized domain constants for reservation simulations.

Values that appear across multiple modules are defined here. Consuming
modules should import from this module rather than defining their own
inline literals.
"""

from __future__ import annotations

DAYS = 7
"""Default scheduling horizon in days."""

STATIONS = 6
"""Default number of stations on the line."""

SEATS = 10
"""Default number of seats per train."""

TOTAL_REQUESTS = 150
"""Default number of customer requests in the live phase."""

BACKGROUND_BOOKINGS = 50
"""Default number of pre-existing bookings placed before the live phase."""

CANCELLATION_PROBABILITY = 0.2
"""Per-occupied-segment probability of being freed by the cancellation pass."""

DEFAULT_WORKERS = 4
"""Default number of workers in the partitioned phase."""

AVAILABILITY_THREADS = 4
"""Default fan-out width of a single availability query."""
