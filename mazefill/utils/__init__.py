"""Maze factory, random source, persistence and text rendering."""
