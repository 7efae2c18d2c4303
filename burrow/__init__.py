"""Procedural dungeon level generation."""
