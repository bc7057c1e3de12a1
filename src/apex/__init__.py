"""Apex - reports and deduplicated document attachments."""

__version__ = "0.1.0"
