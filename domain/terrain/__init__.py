"""Terrain Bounded Context.

Responsible for generating tileable terrain with diamond-square:
- Value Objects: GridSize, TraversalPoint, Heightfield, TerrainMesh
- Services: plan_traversal, generate_terrain, build_mesh
"""
