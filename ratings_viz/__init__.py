"""Ratings Visualizer — personal IMDb ratings analytics."""

__version__ = "1.0.0"
