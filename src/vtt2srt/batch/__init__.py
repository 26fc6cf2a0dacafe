"""Batch coordination for many independent subtitle files."""
