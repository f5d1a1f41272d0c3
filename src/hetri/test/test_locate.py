import unittest
from random import Random

from hetri.delaunay.dt import DelaunayTriangulation
from hetri.delaunay.position import Position, ON_VERTEX, ON_EDGE, ON_FACE, \
    OUTSIDE_CONVEX_HULL, NO_TRIANGULATION
from hetri.delaunay.preds import side_query
from hetri.delaunay.check import brute_force_locate, same_location
from hetri.delaunay.helpers import random_circle_vertices
from hetri.delaunay.hints import FixedHintGenerator


def build(points, hint_generator=None):
    dt = DelaunayTriangulation(hint_generator=hint_generator)
    for pt in points:
        dt.insert(pt)
    return dt


class TestLocateSmall(unittest.TestCase):

    def test_empty(self):
        dt = DelaunayTriangulation()
        assert dt.locate((0, 0)) == Position.no_triangulation()

    def test_single_vertex(self):
        dt = build([(1, 1)])
        assert dt.locate((1, 1)) == Position.on_vertex(0)
        assert dt.locate((0, 0)).kind == NO_TRIANGULATION

    def test_on_line(self):
        dt = build([(0, 0), (1, 0), (2, 0)])
        tds = dt.triangulation
        assert dt.locate((1, 0)) == Position.on_vertex(1)

        pos = dt.locate((0.5, 0))
        assert pos.kind == ON_EDGE
        assert set([tds.origin(pos.handle), tds.dest(pos.handle)]) == \
            set([0, 1])

        pos = dt.locate((3, 0))
        assert pos.kind == OUTSIDE_CONVEX_HULL
        assert tds.origin(pos.handle) == 2

        for query in [(0.5, 1), (0.5, -1)]:
            pos = dt.locate(query)
            assert pos.kind == OUTSIDE_CONVEX_HULL
            a, b = tds.segment(pos.handle)
            assert side_query(a, b, query) > 0

    def test_on_line_notifies_hint_generator(self):
        dt = build([(0, 0), (1, 0), (2, 0)])
        tds = dt.triangulation
        hints = dt.hint_generator
        assert hints.get_hint((0, 0)) == 2
        dt.locate((0, 0))
        assert hints.get_hint((0, 0)) == 0
        pos = dt.locate((1.5, 0))
        assert hints.get_hint((0, 0)) == tds.origin(pos.handle)
        dt.locate((-1, 0))
        assert hints.get_hint((0, 0)) == 0
        dt.locate((3, 0))
        assert hints.get_hint((0, 0)) == 2
        pos = dt.locate((0.5, 1))
        assert hints.get_hint((0, 0)) == tds.origin(pos.handle)

    def test_triangle(self):
        dt = build([(0, 0), (1, 0), (0, 1)])
        tds = dt.triangulation
        assert dt.locate((0.2, 0.2)) == Position.on_face(1)
        assert dt.locate((0, 1)) == Position.on_vertex(2)
        pos = dt.locate((0.5, 0.5))
        assert pos.kind == ON_EDGE
        assert set([tds.origin(pos.handle), tds.dest(pos.handle)]) == \
            set([1, 2])
        pos = dt.locate((2, 2))
        assert pos.kind == OUTSIDE_CONVEX_HULL
        assert tds.is_outer(pos.handle)
        a, b = tds.segment(pos.handle)
        assert side_query(a, b, (2, 2)) > 0

    def test_hint_does_not_change_result(self):
        dt = build([(0, 0), (4, 0), (0, 4), (4, 4), (2, 1), (1, 3)])
        expected = dt.locate((3, 3.5))
        for hint in range(dt.num_vertices):
            assert dt.locate((3, 3.5), hint) == expected

    def test_lookup_notifies_hint_generator(self):
        dt = build([(0, 0), (1, 0), (0, 1), (1, 1)])
        pos = dt.locate((0, 0))
        assert pos == Position.on_vertex(0)
        assert dt.hint_generator.get_hint((0, 0)) == 0


class TestLocateAgreement(unittest.TestCase):

    def _compare(self, dt, queries):
        tds = dt.triangulation
        for query in queries:
            found = dt.locate(query)
            expected = brute_force_locate(tds, query)
            if expected is None:
                assert found.kind == OUTSIDE_CONVEX_HULL, (query, found)
                assert tds.is_outer(found.handle)
                a, b = tds.segment(found.handle)
                assert side_query(a, b, query) > 0
            else:
                assert same_location(found, expected), \
                    (query, found, expected)

    def test_random(self):
        rng = Random(3)
        points = random_circle_vertices(100, rng=rng)
        dt = build(points)
        queries = [(rng.uniform(-1.2, 1.2), rng.uniform(-1.2, 1.2))
                   for _ in range(300)]
        queries.extend(points[:20])
        self._compare(dt, queries)

    def test_grid_with_fixed_hint(self):
        points = [(x, y) for x in range(6) for y in range(6)]
        dt = build(points, FixedHintGenerator(0))
        queries = [(x + 0.5, y + 0.25) for x in range(-1, 6)
                   for y in range(-1, 6)]
        # on grid lines (edges) and grid points (vertices)
        queries.extend([(x, y + 0.5) for x in range(6) for y in range(5)])
        queries.extend(points)
        self._compare(dt, queries)

    def test_kinds_present(self):
        dt = build([(0, 0), (1, 0), (0, 1), (1, 1)])
        kinds = set(dt.locate(q).kind for q in
                    [(0, 0), (0.5, 0), (0.2, 0.1), (5, 5)])
        assert kinds == set([ON_VERTEX, ON_EDGE, ON_FACE,
                             OUTSIDE_CONVEX_HULL])


if __name__ == "__main__":
    unittest.main()
