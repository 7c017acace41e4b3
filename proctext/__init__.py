"""Simplex noise, geodesic sky-sphere meshes and a text-editing engine with undo/redo."""

__version__ = "0.1.0"
__all__ = ["noise", "geosphere", "layout", "undo", "editor"]