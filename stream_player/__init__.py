"""Resilient playback controller for a single streaming audio source."""

__version__ = "0.1.0"
