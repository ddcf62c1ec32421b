"""Version information for nexus-sync."""

__version__ = "1.0.0"
