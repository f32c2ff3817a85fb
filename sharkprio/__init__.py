"""
Conservation priority scoring for shark habitat on raster grids.
"""

__version__ = "0.1.0"
