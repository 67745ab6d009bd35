# Tile constants centralized for modular imports
WALL = "#"
OPEN = "."

__all__ = ["WALL", "OPEN"]
