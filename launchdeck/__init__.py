"""Launchdeck - inspect, edit and reconcile launchd launch items."""

__version__ = "0.1.0"
