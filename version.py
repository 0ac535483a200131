"""Version metadata for the p2w plugin."""

__version__ = "1.0.0"
