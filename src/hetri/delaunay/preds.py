'''
Geometric predicates and helpers derived from them.

The orientation and incircle tests come from geompreds (adaptive, robust
floating point versions of Shewchuk's predicates).
'''
from math import isfinite

from geompreds import orient2d, incircle

__all__ = ["orient2d", "incircle", "sign", "side_query", "in_circumcircle",
           "intersects_edge_non_collinear", "segments_cross",
           "PointProjection", "project_point", "edge_intersection",
           "distance2", "distance2_to_segment", "validate_coordinate"]


def sign(value):
    """Sign of a determinant: 1, 0 or -1"""
    if value > 0:
        return 1
    elif value < 0:
        return -1
    return 0


def side_query(p1, p2, q):
    """On which side of the directed line p1 -> p2 lies q

    left:     + [ = ccw ]
    straight: 0.
    right:    - [ = cw ]
    """
    return orient2d(p1, p2, q)


def in_circumcircle(a, b, c, d):
    """Tests whether d lies *strictly* inside the circle through the
    counterclockwise oriented points a, b and c.

    Co-circular points give False.
    """
    return incircle(a, b, c, d) > 0


def intersects_edge_non_collinear(a1, a2, b1, b2):
    """Whether segment a1-a2 intersects segment b1-b2 (touching counts),
    assuming the segments are not collinear.
    """
    s1 = sign(side_query(a1, a2, b1))
    s2 = sign(side_query(a1, a2, b2))
    if s1 == s2 and s1 != 0:
        return False
    s3 = sign(side_query(b1, b2, a1))
    s4 = sign(side_query(b1, b2, a2))
    if s3 == s4 and s3 != 0:
        return False
    return True


def segments_cross(a1, a2, b1, b2):
    """Whether the interiors of segments a1-a2 and b1-b2 properly cross
    (a shared point that is not an end point of either segment)
    """
    s1 = sign(side_query(a1, a2, b1))
    s2 = sign(side_query(a1, a2, b2))
    if s1 == 0 or s2 == 0 or s1 == s2:
        return False
    s3 = sign(side_query(b1, b2, a1))
    s4 = sign(side_query(b1, b2, a2))
    if s3 == 0 or s4 == 0 or s3 == s4:
        return False
    return True


class PointProjection(object):
    """Projection of a point on the line through an edge.

    factor is the (unnormalized) dot product of the point, relative to the
    start of the edge, with the direction of the edge; length2 is the squared
    length of the edge.
    """
    __slots__ = ('factor', 'length2')

    def __init__(self, factor, length2):
        self.factor = factor
        self.length2 = length2

    @property
    def is_before_edge(self):
        return self.factor < 0

    @property
    def is_behind_edge(self):
        return self.factor > self.length2

    @property
    def is_on_edge(self):
        return not self.is_before_edge and not self.is_behind_edge

    @property
    def is_strictly_on_edge(self):
        return 0 < self.factor < self.length2

    def relative_position(self):
        return self.factor / self.length2


def project_point(p1, p2, q):
    """Project q onto the line p1 -> p2"""
    dx = p2[0] - p1[0]
    dy = p2[1] - p1[1]
    factor = (q[0] - p1[0]) * dx + (q[1] - p1[1]) * dy
    return PointProjection(factor, dx * dx + dy * dy)


def edge_intersection(p1, p2, p3, p4):
    """Intersection point of the line through p1, p2 and the line through
    p3, p4. Parallel lines give (inf, inf).
    """
    a1 = p2[1] - p1[1]
    b1 = p1[0] - p2[0]
    c1 = a1 * p1[0] + b1 * p1[1]
    a2 = p4[1] - p3[1]
    b2 = p3[0] - p4[0]
    c2 = a2 * p3[0] + b2 * p3[1]
    det = a1 * b2 - a2 * b1
    if det == 0:
        return (float("inf"), float("inf"))
    return ((b2 * c1 - b1 * c2) / det, (a1 * c2 - a2 * c1) / det)


def distance2(p, q):
    """Cartesian distance *squared* between p and q"""
    return pow(p[0] - q[0], 2) + pow(p[1] - q[1], 2)


def distance2_to_segment(p1, p2, q):
    """Squared distance between q and the closest point of segment p1-p2"""
    projection = project_point(p1, p2, q)
    if projection.is_before_edge or projection.length2 == 0:
        return distance2(p1, q)
    elif projection.is_behind_edge:
        return distance2(p2, q)
    t = projection.relative_position()
    foot = (p1[0] + t * (p2[0] - p1[0]), p1[1] + t * (p2[1] - p1[1]))
    return distance2(foot, q)


def validate_coordinate(value):
    """Returns value as float, rejects NaN and infinity"""
    value = float(value)
    if not isfinite(value):
        raise ValueError("Coordinate is not finite: {}".format(value))
    return value
