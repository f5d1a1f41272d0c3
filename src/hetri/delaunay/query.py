'''
Shape queries: vertices and edges of a triangulation that lie in (or touch)
an axis aligned rectangle or a circle, and the test whether a point lies
inside the convex hull.
'''
from hetri.delaunay.preds import side_query, project_point, distance2, \
    distance2_to_segment
from hetri.delaunay.position import OUTSIDE_CONVEX_HULL
from hetri.delaunay.iter import VertexIterator, UndirectedEdgeIterator
from hetri.delaunay.tds import directed


class CircleMetric(object):
    """Circle given by its center and squared radius"""

    def __init__(self, center, radius2):
        if radius2 < 0.0:
            raise ValueError("Radius squared must be non-negative")
        self.center = (center[0], center[1])
        self.radius2 = radius2

    def is_edge_inside(self, p0, p1):
        return distance2_to_segment(p0, p1, self.center) <= self.radius2

    def is_point_inside(self, point):
        return distance2(self.center, point) <= self.radius2


class RectangleMetric(object):
    """Axis aligned rectangle given by its lower left and upper right
    corner
    """

    def __init__(self, lower, upper):
        self.lower = (lower[0], lower[1])
        self.upper = (upper[0], upper[1])

    def sides(self):
        lower, upper = self.lower, self.upper
        v0 = lower
        v1 = (lower[0], upper[1])
        v2 = upper
        v3 = (upper[0], lower[1])
        return [(v0, v1), (v1, v2), (v2, v3), (v3, v0)]

    def is_point_inside(self, point):
        return (self.lower[0] <= point[0] <= self.upper[0] and
                self.lower[1] <= point[1] <= self.upper[1])

    def is_edge_inside(self, p0, p1):
        """Whether segment p0-p1 has a point in common with the rectangle"""
        if self.is_point_inside(p0) or self.is_point_inside(p1):
            return True
        if self.lower == self.upper:
            return side_query(p0, p1, self.lower) == 0
        for v0, v1 in self.sides():
            s0, s1 = intersection_parameters(v0, v1, p0, p1)
            if s0 is None:
                # parallel
                if side_query(p0, p1, v0) != 0:
                    continue
                if project_point(p0, p1, v0).is_on_edge or \
                        project_point(p0, p1, v1).is_on_edge:
                    return True
            elif 0.0 <= s0 <= 1.0 and 0.0 <= s1 <= 1.0:
                return True
        return False


def intersection_parameters(v0, v1, e0, e1):
    """Parameters (s0 along v0-v1, s1 along e0-e1) of the intersection of
    the lines through both segments, (None, None) when they are parallel
    """
    divisor = ((v1[1] - v0[1]) * (e1[0] - e0[0]) -
               (v1[0] - v0[0]) * (e1[1] - e0[1]))
    if divisor == 0.0:
        return (None, None)
    s0 = ((e1[0] - e0[0]) * (e0[1] - v0[1]) -
          (e1[1] - e0[1]) * (e0[0] - v0[0])) / divisor
    s1 = ((v1[0] - v0[0]) * (e0[1] - v0[1]) -
          (v1[1] - v0[1]) * (e0[0] - v0[0])) / divisor
    return (s0, s1)


def vertices_in(triangulation, metric):
    """Yields the vertices for which the metric says they lie inside"""
    for v in VertexIterator(triangulation):
        if metric.is_point_inside(triangulation.position(v)):
            yield v


def edges_in(triangulation, metric):
    """Yields the undirected edges that the metric considers inside"""
    for u in UndirectedEdgeIterator(triangulation):
        p0, p1 = triangulation.segment(directed(u))
        if metric.is_edge_inside(p0, p1):
            yield u


def vertices_in_rectangle(triangulation, lower, upper):
    return vertices_in(triangulation, RectangleMetric(lower, upper))


def vertices_in_circle(triangulation, center, radius2):
    return vertices_in(triangulation, CircleMetric(center, radius2))


def edges_in_rectangle(triangulation, lower, upper):
    return edges_in(triangulation, RectangleMetric(lower, upper))


def edges_in_circle(triangulation, center, radius2):
    return edges_in(triangulation, CircleMetric(center, radius2))


def is_inside_convex_hull(dt, point):
    """Whether point lies inside (or on) the convex hull of the
    triangulation.

    Gives None when there are fewer than 3 vertices (no hull yet).
    """
    if dt.num_vertices < 3:
        return None
    return dt.locate(point).kind != OUTSIDE_CONVEX_HULL
