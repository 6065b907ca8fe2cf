"""Diamond Terrain Domain Layer.

This package contains the core generation logic organized by bounded contexts:
- terrain: Toroidal coordinates, traversal planning, diamond-square steps, meshing
"""

from domain import terrain

__all__ = ["terrain"]
