"""Bundled reference data (catalog.json)."""
