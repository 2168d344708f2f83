"""Publish Android builds to Google Play."""

__version__ = "0.1.0"
