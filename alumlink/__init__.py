"""alumlink: resilient client for the alumni platform API."""

__version__ = "0.1.0"
