"""Packaged data files (seed tables)."""
