'''
Iterators over the elements of a triangulation
'''

# ------------------------------------------------------------------------------
# Iterators
#
from hetri.delaunay.tds import OUTER_FACE, TopologyViolationError, rev, \
    directed


class VertexIterator(object):
    """Iterator over the vertex handles"""

    def __init__(self, triangulation):
        self.triangulation = triangulation
        self.current_idx = 0

    def __iter__(self):
        return self

    def __next__(self):
        if self.current_idx < self.triangulation.num_vertices:
            self.current_idx += 1
            return self.current_idx - 1
        raise StopIteration()


class DirectedEdgeIterator(object):
    """Iterator over all half edges (both directions of every edge)"""

    def __init__(self, triangulation):
        self.triangulation = triangulation
        self.current_idx = 0

    def __iter__(self):
        return self

    def __next__(self):
        if self.current_idx < self.triangulation.num_half_edges:
            self.current_idx += 1
            return self.current_idx - 1
        raise StopIteration()


class UndirectedEdgeIterator(object):
    """Iterator over the undirected edges, optionally only the constraint
    edges
    """

    def __init__(self, triangulation, constraints_only=False):
        self.triangulation = triangulation
        self.constraints_only = constraints_only
        self.current_idx = 0

    def __iter__(self):
        return self

    def __next__(self):
        edges = self.triangulation.edges
        while self.current_idx < len(edges):
            u = self.current_idx
            self.current_idx += 1
            if not self.constraints_only or edges[u].constrained:
                return u
        raise StopIteration()


class InnerFaceIterator(object):
    """Iterator over all triangles (every face, except the outer face)"""

    def __init__(self, triangulation):
        self.triangulation = triangulation
        self.current_idx = OUTER_FACE + 1

    def __iter__(self):
        return self

    def __next__(self):
        if self.current_idx < self.triangulation.num_faces:
            self.current_idx += 1
            return self.current_idx - 1
        raise StopIteration()


class ConvexHullEdgeIterator(object):
    """Iterator over the half edges that bound the outer face.

    The half edges have the outer face on their left, so they go around the
    convex hull clockwise.
    """

    def __init__(self, triangulation):
        self.triangulation = triangulation
        self.start = triangulation.faces[OUTER_FACE].edge
        self.current = self.start
        self.steps = 0

    def __iter__(self):
        return self

    def __next__(self):
        if self.current is None:
            raise StopIteration()
        self.steps += 1
        if self.steps > self.triangulation.num_half_edges:
            raise TopologyViolationError("Convex hull does not form a cycle")
        ret = self.current
        self.current = self.triangulation.next(ret)
        if self.current == self.start:
            self.current = None
        return ret


class StarEdgeIterator(object):
    """Returns iterator over edges in the star of the vertex

    The edges all start at the vertex and are returned in counterclockwise
    order around it.
    """

    def __init__(self, triangulation, vertex):
        self.triangulation = triangulation
        self.start = triangulation.vertices[vertex].out_edge
        self.current = self.start
        self.steps = 0

    def __iter__(self):
        return self

    def __next__(self):
        if self.current is None:
            raise StopIteration()
        self.steps += 1
        if self.steps > self.triangulation.num_half_edges:
            raise TopologyViolationError("Star does not form a cycle")
        ret = self.current
        self.current = self.triangulation.ccw(ret)
        if self.current == self.start:
            self.current = None
        return ret


class RegionatedFaceIterator(object):
    """Iterator over all triangles that are fenced off by constraints.
    The constraints fencing off triangles determine the regions.
    The iterator yields a tuple: (region number, depth, face).

    Note:

    - The region number can increase in unexpected ways, e.g. 0, 1, 4, 9,
    ..., etc.
    - The depth gives the nesting of the regions.

    The first group is always the part outside the features (at depth 0),
    reachable from the outer face without crossing a constraint edge.
    """

    def __init__(self, triangulation):
        # start at the exterior
        self.triangulation = triangulation
        self.visited = set()
        self.to_visit_stack = [(OUTER_FACE, 0)]
        self.later = []
        self.group = 0

    def __iter__(self):
        return self

    def _sides(self, face):
        if face == OUTER_FACE:
            return list(ConvexHullEdgeIterator(self.triangulation))
        return self.triangulation.face_edges(face)

    def __next__(self):
        tds = self.triangulation
        while self.to_visit_stack or self.later:
            # visit all faces in the exterior, subsequently visit
            # all faces that are enclosed by a set of constraint edges
            while self.to_visit_stack:
                face, depth = self.to_visit_stack.pop()
                if face in self.visited:
                    continue
                self.visited.add(face)
                for e in self._sides(face):
                    neighbour = tds.face(rev(e))
                    if neighbour in self.visited:
                        continue
                    if tds.edges[e >> 1].constrained:
                        self.later.append((neighbour, depth + 1))
                    else:
                        self.to_visit_stack.append((neighbour, depth))
                if face != OUTER_FACE:
                    return (self.group, depth, face)
            # flip the next level with this
            while self.later:
                self.group += 1
                f, d = self.later.pop()
                if f not in self.visited:
                    self.to_visit_stack = [(f, d)]
                    break
        raise StopIteration()


def constraint_segments(triangulation):
    """Yields the end points of all constraint edges"""
    for u in UndirectedEdgeIterator(triangulation, constraints_only=True):
        yield triangulation.segment(directed(u))
