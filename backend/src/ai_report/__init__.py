"""AI Report Gateway — multi-provider report generation with ordered fallback."""

__version__ = "0.1.0"
