"""Bundled leap-second data files."""
