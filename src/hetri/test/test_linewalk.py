import unittest

from hetri.delaunay.dt import DelaunayTriangulation
from hetri.delaunay.preds import side_query
from hetri.delaunay.linewalk import LineIntersectionIterator, Intersection, \
    EDGE_OVERLAP


def square():
    dt = DelaunayTriangulation()
    for pt in [(0, 0), (1, 0), (0, 1), (1, 1)]:
        dt.insert(pt)
    return dt


class TestIntersection(unittest.TestCase):

    def test_kinds(self):
        assert Intersection.vertex(3).is_vertex
        assert Intersection.edge(3).is_edge
        assert Intersection.overlap(3).is_overlap
        assert Intersection.edge(3) == Intersection.edge(3)
        assert Intersection.edge(3) != Intersection.overlap(3)
        assert Intersection.vertex(1) != Intersection.vertex(2)


class TestLineWalk(unittest.TestCase):

    def setUp(self):
        self.dt = square()
        self.tds = self.dt.triangulation

    def test_across_diagonal(self):
        crossed = self.tds.get_edge_from_neighbours(2, 1)
        result = list(LineIntersectionIterator.from_vertices(self.dt, 0, 3))
        assert result == [Intersection.vertex(0),
                          Intersection.edge(crossed),
                          Intersection.vertex(3)]
        # the walk continues into the face on the left of the crossed edge
        assert self.tds.opposite_vertex(crossed) == 3

    def test_along_edge(self):
        edge = self.tds.get_edge_from_neighbours(0, 1)
        result = list(LineIntersectionIterator.from_vertices(self.dt, 0, 1))
        assert result == [Intersection.vertex(0),
                          Intersection.overlap(edge),
                          Intersection.vertex(1)]

    def test_along_edge_reversed(self):
        edge = self.tds.get_edge_from_neighbours(3, 1)
        result = list(LineIntersectionIterator.from_vertices(self.dt, 3, 1))
        assert result == [Intersection.vertex(3),
                          Intersection.overlap(edge),
                          Intersection.vertex(1)]

    def test_inside_points(self):
        crossed = self.tds.get_edge_from_neighbours(2, 1)
        result = list(LineIntersectionIterator(self.dt, (0.1, 0.5),
                                               (0.9, 0.5)))
        assert result == [Intersection.edge(crossed)]

    def test_inside_one_face(self):
        result = list(LineIntersectionIterator(self.dt, (0.1, 0.1),
                                               (0.2, 0.3)))
        assert result == []

    def test_from_outside(self):
        hull = self.tds.get_edge_from_neighbours(2, 0)
        crossed = self.tds.get_edge_from_neighbours(2, 1)
        result = list(LineIntersectionIterator(self.dt, (-1, 0.25),
                                               (0.9, 0.25)))
        assert result == [Intersection.edge(hull),
                          Intersection.edge(crossed)]

    def test_missing_hull(self):
        result = list(LineIntersectionIterator(self.dt, (-1, -1),
                                               (-1, 2)))
        assert result == []

    def test_events_in_order_along_segment(self):
        dt = DelaunayTriangulation()
        for x in range(5):
            for y in range(3):
                dt.insert((x, y + 0.25 * x))
        tds = dt.triangulation
        start = dt.locate((0, 1)).handle
        end = dt.locate((4, 2)).handle
        result = list(LineIntersectionIterator.from_vertices(dt, start, end))
        assert result[0] == Intersection.vertex(start)
        assert result[-1] == Intersection.vertex(end)
        vertices = [r.handle for r in result if r.is_vertex]
        xs = [tds.position(v)[0] for v in vertices]
        assert xs == sorted(xs)
        # the segment runs exactly over the middle row of vertices
        assert len(vertices) == 5
        assert [r.kind for r in result if not r.is_vertex] == \
            [EDGE_OVERLAP] * 4

    def test_nearly_collinear_vertices(self):
        # 1 + 0.1 * x is not exact, the middle row is not a straight line
        dt = DelaunayTriangulation()
        for x in range(5):
            for y in range(3):
                dt.insert((x, y + 0.1 * x))
        tds = dt.triangulation
        start = dt.locate((0, 1)).handle
        end = dt.locate((4, 1 + 0.1 * 4)).handle
        a, b = tds.position(start), tds.position(end)
        result = list(LineIntersectionIterator.from_vertices(dt, start, end))
        assert result[0] == Intersection.vertex(start)
        assert result[-1] == Intersection.vertex(end)
        for r in result:
            if r.is_vertex:
                # only vertices exactly on the segment are reported
                assert side_query(a, b, tds.position(r.handle)) == 0
            elif r.is_edge:
                p, q = tds.segment(r.handle)
                assert side_query(a, b, p) * side_query(a, b, q) < 0
            else:
                p, q = tds.segment(r.handle)
                assert side_query(a, b, p) == 0
                assert side_query(a, b, q) == 0


if __name__ == "__main__":
    unittest.main()
