"""Shapes: points, distances and colors."""

VERSION = "1.0.0"
