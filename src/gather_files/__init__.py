"""Gather files from a path or a preset and stitch them into one text blob."""

__version__ = "0.1.0"
