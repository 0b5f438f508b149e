"""LinkUp: creator/subscriber content platform API."""

__version__ = "0.1.0"
