"""Open, merge and release pull requests across many GitHub repositories."""

__version__ = "0.1.0"
