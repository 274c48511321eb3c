"""Slot pools, scene hierarchy and plane model lookup for a small flight game engine."""

__version__ = "0.1.0"
__all__ = ["bitmask", "pools", "hierarchy", "plane"]