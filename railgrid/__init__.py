"""Multi-day train reservation simulation with partitioned waitlist resolution."""

__version__ = "0.1.0"
