"""Utilities: logging setup and the event feed."""
