"""Subtitle transcoding and export."""
