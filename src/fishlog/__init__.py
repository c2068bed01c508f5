"""Fishing-log computation packages."""
