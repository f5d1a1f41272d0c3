'''
Input helpers: random point sets and conversion of polygons and linestrings
to points and segments.
'''
from math import sqrt, pi, cos, sin
import random as _random
# ------------------------------------------------------------------------------
# Generate randomized point sets (for testing purposes)
#


def random_sorted_vertices(n=10, rng=None):
    """Returns a sorted list with (at most) n random vertices on a grid
    in the unit square. Pass a random.Random instance for reproducible sets.
    """
    if rng is None:
        rng = _random
    W = n
    vertices = []
    for _ in range(n):
        x = rng.randint(0, W)
        y = rng.randint(0, W)
        vertices.append((x / float(W), y / float(W)))
    vertices = list(set(vertices))
    vertices.sort()
    return vertices


def random_circle_vertices(n=10, cx=0, cy=0, rng=None):
    """Returns a list with n random vertices in a circle

    Method according to:

    http://www.anderswallin.net/2009/05/uniform-random-points-in-a-circle-using-polar-coordinates/
    """
    if rng is None:
        rng = _random
    vertices = []
    for _ in range(n):
        r = sqrt(rng.random())
        t = 2 * pi * rng.random()
        x = r * cos(t)
        y = r * sin(t)
        vertices.append((x + cx, y + cy))
    vertices = list(set(vertices))
    vertices.sort()
    return vertices


class ToPointsAndSegments(object):
    """Helper class to convert a set of polygons to points and segments.
    De-dups duplicate points.

    infos runs parallel to points; the info of a duplicate point is the info
    given when it was added first.
    """

    def __init__(self):
        self.points = []
        self.segments = []
        self.infos = []
        self._points_idx = {}
        self._segments_idx = {}

    def add_polygon(self, polygon, info=None):
        """Add a polygon its points and segments to the global collection

        A polygon is a list of lists (rings), where every ring contains vertex
        objects (e.g. tuples with 2 elements).
        Important: The first and last point of a ring have to be the same
        vertex.

        For all points in the polygon the same info will be added.
        """
        for ring in polygon:
            if ring[0] != ring[-1]:
                raise ValueError('ring is not closed')
            # skip last point of ring; should be duplicate of first
            for pt in ring[:-1]:
                self.add_point(pt, info)
            for start, end in zip(ring[:-1], ring[1:]):
                self.add_segment(start, end)

    def add_point(self, point, info=None):
        """Add a point and its info, returns the index of the point.
        """
        point = tuple(map(float, point))
        if point not in self._points_idx:
            idx = len(self.points)
            self._points_idx[point] = idx
            self.points.append(point)
            self.infos.append(info)
        else:
            idx = self._points_idx[point]
        return idx

    def add_linestring(self, ln, info=None):
        """Add a linestring its points.
        If info is given it is added to all the points of the line.
        """
        for pt in ln:
            self.add_point(pt, info)
        for start, end in zip(ln, ln[1:]):
            self.add_segment(start, end)

    def add_segment(self, start, end):
        """Add a segment.
        Note that points should have been added before.
        """
        start = tuple(map(float, start))
        end = tuple(map(float, end))
        start_idx, end_idx = self._points_idx[start], self._points_idx[end]
        swapped = False
        if start_idx < end_idx:
            seg = (start_idx, end_idx)
        elif start_idx > end_idx:
            seg = (end_idx, start_idx)
            swapped = True
        else:
            raise ValueError('same start as end point')
        if seg not in self._segments_idx:
            idx = len(self.segments)
            self._segments_idx[seg] = idx
            self.segments.append(seg)
        else:
            idx = self._segments_idx[seg]
        # returns signed segment index
        # (if reverse return 2-complement using ~)
        if swapped:
            return ~idx
        else:
            return idx
