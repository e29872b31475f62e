"""Wayfarer: a terminal branching-narrative engine with quick-time-event combat."""

__version__ = "0.4.0"
