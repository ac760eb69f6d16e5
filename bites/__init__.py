"""Restaurant and review data-access layer over Redis Stack."""

__version__ = "1.0.0"
