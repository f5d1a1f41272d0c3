"""hetri.delaunay - Incremental Delaunay triangulation with constraint edges
"""

import logging

from hetri.delaunay.tds import Triangulation, TopologyViolationError
from hetri.delaunay.position import Position
from hetri.delaunay.dt import DelaunayTriangulation
from hetri.delaunay.cdt import ConstrainedDelaunayTriangulation, \
    ConstraintIntersectionError, triangulate
from hetri.delaunay.helpers import ToPointsAndSegments


__all__ = ("triangulate", "ToPointsAndSegments", "Triangulation",
           "TopologyViolationError", "Position", "DelaunayTriangulation",
           "ConstrainedDelaunayTriangulation", "ConstraintIntersectionError")


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    from hetri.delaunay.helpers import random_circle_vertices
    pts = random_circle_vertices(15000)
    triangulate(pts)
