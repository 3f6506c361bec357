"""
Dungeon systems for Dungeon Descent.

Contains the tile kinds, the bounds-checked level map, the per-depth level
generator and the spawn pool used to place entities on Floor tiles.
"""
