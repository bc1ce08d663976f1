"""Concrete media primitives."""

from .vlc_backend import VlcMediaPrimitive

__all__ = ["VlcMediaPrimitive"]
