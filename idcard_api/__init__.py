"""Multi-school ID card administration API."""

__version__ = "1.0.0"
