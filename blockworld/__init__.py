"""Voxel world simulation: chunks, terrain generation, face meshing, a player and a game loop."""

__version__ = "0.1.0"