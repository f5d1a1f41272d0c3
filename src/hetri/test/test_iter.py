import unittest

from hetri.delaunay.cdt import ConstrainedDelaunayTriangulation
from hetri.delaunay.iter import VertexIterator, DirectedEdgeIterator, \
    UndirectedEdgeIterator, InnerFaceIterator, ConvexHullEdgeIterator, \
    StarEdgeIterator, RegionatedFaceIterator, constraint_segments
from hetri.delaunay.tds import rev


def square():
    cdt = ConstrainedDelaunayTriangulation()
    for pt in [(0, 0), (1, 0), (0, 1), (1, 1), (0.5, 0.25)]:
        cdt.insert(pt)
    return cdt


class TestIterators(unittest.TestCase):

    def setUp(self):
        self.cdt = square()
        self.tds = self.cdt.triangulation

    def test_vertices(self):
        assert list(VertexIterator(self.tds)) == [0, 1, 2, 3, 4]

    def test_edges(self):
        directed_edges = list(DirectedEdgeIterator(self.tds))
        undirected_edges = list(UndirectedEdgeIterator(self.tds))
        assert len(directed_edges) == 2 * len(undirected_edges)
        # 4 hull edges, 4 edges to the inner vertex
        assert len(undirected_edges) == 8
        assert list(UndirectedEdgeIterator(self.tds, True)) == []

    def test_faces(self):
        faces = list(InnerFaceIterator(self.tds))
        assert len(faces) == 4
        assert 0 not in faces

    def test_convex_hull(self):
        hull = list(ConvexHullEdgeIterator(self.tds))
        assert len(hull) == 4
        for e in hull:
            assert self.tds.is_outer(e)
            assert not self.tds.is_outer(rev(e))
        assert set(self.tds.origin(e) for e in hull) == set([0, 1, 2, 3])

    def test_star(self):
        star = list(StarEdgeIterator(self.tds, 4))
        assert len(star) == 4
        assert set(self.tds.dest(e) for e in star) == set([0, 1, 2, 3])
        for e, nxt in zip(star, star[1:]):
            assert self.tds.ccw(e) == nxt

    def test_star_unconnected(self):
        cdt = ConstrainedDelaunayTriangulation()
        cdt.insert((0, 0))
        assert list(StarEdgeIterator(cdt.triangulation, 0)) == []

    def test_constraint_segments(self):
        self.cdt.add_constraint(0, 1)
        segments = list(constraint_segments(self.tds))
        assert len(segments) == 1
        assert set(segments[0]) == set([(0.0, 0.0), (1.0, 0.0)])


class TestRegions(unittest.TestCase):

    def test_nested(self):
        cdt = ConstrainedDelaunayTriangulation()
        outer = [(0, 0), (10, 0), (10, 10), (0, 10)]
        inner = [(4, 4), (6, 4), (6, 6), (4, 6)]
        for ring in (outer, inner):
            handles = [cdt.insert(pt) for pt in ring]
            for a, b in zip(handles, handles[1:] + handles[:1]):
                cdt.add_constraint(a, b)
        depths = {}
        for group, depth, face in RegionatedFaceIterator(cdt.triangulation):
            depths.setdefault(depth, []).append(face)
        # the hull is the outer ring, so nothing lies at depth 0
        assert sorted(depths) == [1, 2]
        assert len(depths[1]) == 8
        assert len(depths[2]) == 2
        total = sum(len(faces) for faces in depths.values())
        assert total == cdt.triangulation.num_faces - 1

    def test_no_constraints(self):
        cdt = square()
        result = list(RegionatedFaceIterator(cdt.triangulation))
        assert len(result) == 4
        assert set(depth for _, depth, _ in result) == set([0])


if __name__ == "__main__":
    unittest.main()
