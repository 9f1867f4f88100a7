"""Maze filling game core - generation, dead-end tracking and search services.

Generates grid mazes, applies agent moves with undo, keeps dead ends up to
date incrementally, and answers shortest-path and nearest-dead-end queries
against read-only snapshots of the grid.
"""

__version__ = "1.0.0"
__author__ = "Maze Fill Demo"
