"""Flappy: an arcade flight simulation core with a pygame frontend."""
