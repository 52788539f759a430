"""Bundled JSON schemas for the emitted artifacts."""
