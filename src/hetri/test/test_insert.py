import unittest
from random import Random

from hetri.delaunay.dt import DelaunayTriangulation
from hetri.delaunay.check import check_consistency, is_delaunay
from hetri.delaunay.helpers import random_circle_vertices
from hetri.delaunay.iter import InnerFaceIterator


def build(points):
    dt = DelaunayTriangulation()
    for pt in points:
        dt.insert(pt)
    return dt


def triangle_set(tds):
    """Triangles as sets of vertex coordinates"""
    return set(frozenset(tds.position(v) for v in tds.face_vertices(f))
               for f in InnerFaceIterator(tds))


class TestScenarios(unittest.TestCase):

    def test_triangle(self):
        dt = build([(0, 0), (1, 0), (0, 1)])
        tds = dt.triangulation
        assert tds.num_vertices == 3
        assert tds.num_faces == 2
        assert tds.num_edges == 3
        check_consistency(tds)

    def test_square(self):
        dt = build([(0, 0), (1, 0), (0, 1), (1, 1)])
        tds = dt.triangulation
        assert tds.num_vertices == 4
        assert tds.num_faces == 3
        assert tds.num_edges == 5
        # co-circular: the diagonal made first is kept
        assert tds.get_edge_from_neighbours(1, 2) is not None
        assert tds.get_edge_from_neighbours(0, 3) is None
        check_consistency(tds)

    def test_collinear_then_off_line(self):
        dt = build([(2, 0), (0, 0), (4, 0), (1, 0), (3, 0)])
        tds = dt.triangulation
        assert tds.all_vertices_on_line()
        assert tds.num_edges == 4
        check_consistency(tds)
        dt.insert((2, 1))
        assert not tds.all_vertices_on_line()
        assert tds.num_faces == 5
        assert tds.num_edges == 9
        # check_consistency verifies all triangles are strictly ccw
        check_consistency(tds)
        assert is_delaunay(tds)

    def test_collinear_small(self):
        dt = build([(0, 0), (1, 0), (0.5, 0), (1, 0)])
        tds = dt.triangulation
        assert tds.num_vertices == 3
        assert tds.num_edges == 2
        dt.insert((0.5, 1))
        assert tds.num_faces == 3
        assert tds.num_edges == 5
        check_consistency(tds)


class TestInsert(unittest.TestCase):

    def test_duplicate_updates_info(self):
        dt = DelaunayTriangulation()
        a = dt.insert((0, 0), info='a')
        b = dt.insert((0, 0), info='b')
        assert a == b
        assert dt.triangulation.vertices[a].info == 'b'
        for pt in [(1, 0), (0, 1)]:
            dt.insert(pt)
        c = dt.insert((1, 0), info='c')
        assert c == 1
        assert dt.num_vertices == 3
        assert dt.triangulation.vertices[1].info == 'c'

    def test_non_finite_rejected(self):
        dt = build([(0, 0), (1, 0), (0, 1)])
        with self.assertRaises(ValueError):
            dt.insert((float('nan'), 0.))
        with self.assertRaises(ValueError):
            dt.insert((0., float('inf')))
        with self.assertRaises(ValueError):
            dt.insert((float('-inf'), 0.))
        assert dt.num_vertices == 3
        check_consistency(dt.triangulation)

    def test_insert_on_hull_edge(self):
        dt = build([(0, 0), (2, 0), (0, 2)])
        dt.insert((1, 0))
        tds = dt.triangulation
        assert tds.num_faces == 3
        check_consistency(tds)
        assert is_delaunay(tds)

    def test_insert_on_inner_edge(self):
        dt = build([(0, 0), (1, 0), (0, 1), (1, 1)])
        v = dt.insert((0.5, 0.5))
        tds = dt.triangulation
        assert tds.num_faces == 5
        assert len(list(tds.out_edges(v))) == 4
        check_consistency(tds)

    def test_with_hint(self):
        dt = build([(0, 0), (1, 0), (0, 1), (1, 1)])
        v = dt.insert_with_hint((0.25, 0.75), 3)
        assert dt.num_vertices == 5
        assert dt.triangulation.position(v) == (0.25, 0.75)
        # out of range hint is replaced
        dt.insert_with_hint((0.75, 0.25), 100)
        check_consistency(dt.triangulation)

    def test_hint_generator_is_notified(self):
        dt = build([(0, 0), (1, 0), (0, 1)])
        v = dt.insert((0.2, 0.2))
        assert dt.hint_generator.get_hint((0, 0)) == v


class TestProperties(unittest.TestCase):

    def test_euler_after_every_insertion(self):
        rng = Random(1)
        points = random_circle_vertices(60, rng=rng)
        dt = DelaunayTriangulation()
        for pt in points:
            dt.insert(pt)
            check_consistency(dt.triangulation)
        assert is_delaunay(dt.triangulation)

    def test_grid(self):
        # many co-circular quadruples, ties must not flip forever
        points = [(x, y) for x in range(8) for y in range(8)]
        dt = build(points)
        tds = dt.triangulation
        assert tds.num_vertices == 64
        # 2n - h - 2 triangles, with 28 points on the hull
        assert tds.num_faces - 1 == 2 * 64 - 28 - 2
        check_consistency(tds)
        assert is_delaunay(tds)

    def test_insertion_order_independence(self):
        rng = Random(7)
        points = random_circle_vertices(80, rng=rng)
        first = build(points)
        shuffled = points[:]
        Random(11).shuffle(shuffled)
        second = build(shuffled)
        assert triangle_set(first.triangulation) == \
            triangle_set(second.triangulation)


if __name__ == "__main__":
    unittest.main()
