"""Packaged JSON schemas."""
