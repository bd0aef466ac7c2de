"""Two-person realtime chat with online presence."""

__version__ = "0.1.0"
