"""Manage treasure hunts kept as directories of fixed-size treasure records, with an action log."""

__version__ = "1.0.0"
__all__ = ["actionlog", "cli", "hunt", "record"]