"""Async task-approval workflow simulator."""

__version__ = "0.1.0"
