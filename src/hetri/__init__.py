"""hetri - Incremental (constrained) Delaunay triangulation on a half edge
mesh
"""

__version__ = '0.1.0.dev0'
__license__ = 'MIT License'
__author__ = 'Martijn Meijers'

from hetri.delaunay import triangulate, ToPointsAndSegments, \
    DelaunayTriangulation, ConstrainedDelaunayTriangulation

__all__ = ["triangulate", "ToPointsAndSegments", "DelaunayTriangulation",
           "ConstrainedDelaunayTriangulation"]
