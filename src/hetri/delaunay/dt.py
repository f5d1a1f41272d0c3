'''
Incremental Delaunay triangulation.

Points are inserted one at a time: the point is located, the mesh is
updated locally (split a triangle, split an edge, or extend the convex hull)
and the Delaunay criterion is restored by flipping edges (Lawson's
incremental algorithm).
'''
from hetri.delaunay.preds import side_query, in_circumcircle, \
    validate_coordinate
from hetri.delaunay.position import ON_VERTEX, ON_EDGE, ON_FACE, \
    OUTSIDE_CONVEX_HULL
from hetri.delaunay.tds import Triangulation, TopologyViolationError, \
    rev, undirected
from hetri.delaunay.hints import LastUsedVertexHintGenerator
from hetri.delaunay.locate import PointLocator, ON_LINE_VERTEX, \
    ON_LINE_EDGE, NOT_ON_LINE, EXTENDING_LINE


def _never_constraint(edge):
    return False


def _ignore_split(parts):
    pass


class DelaunayTriangulation(object):
    """Class to insert points into a Triangulation.

    It is ensured that the triangles that are made, are obeying the Delaunay
    criterion by flipping.

    The is_constraint hook tells whether an undirected edge is frozen (never
    flipped), on_constraint_split is called with the two half edges that
    result from splitting such a frozen edge by an insertion.
    """

    __slots__ = ('triangulation', 'hint_generator', 'locator',
                 'is_constraint', 'on_constraint_split', 'flips')

    def __init__(self, triangulation=None, hint_generator=None,
                 is_constraint=None, on_constraint_split=None):
        if triangulation is None:
            triangulation = Triangulation()
        if hint_generator is None:
            hint_generator = LastUsedVertexHintGenerator()
        self.triangulation = triangulation
        self.hint_generator = hint_generator
        self.locator = PointLocator(triangulation, hint_generator)
        self.is_constraint = is_constraint or _never_constraint
        self.on_constraint_split = on_constraint_split or _ignore_split
        self.flips = 0

    @property
    def num_vertices(self):
        return self.triangulation.num_vertices

    def locate(self, point, hint=None):
        return self.locator.locate(point, hint)

    def insert(self, point, info=None):
        """Insert a point, returns the handle of its vertex.

        When a vertex with exactly the same coordinates exists, its info is
        replaced and its handle returned.
        """
        return self.insert_with_hint(point, None, info)

    def insert_with_hint(self, point, hint, info=None):
        """Insert a point, start locating it from vertex hint"""
        x = validate_coordinate(point[0])
        y = validate_coordinate(point[1])
        v = self._insert((x, y), hint, info)
        self.hint_generator.notify_vertex_inserted(v, (x, y))
        return v

    def _update(self, v, info):
        self.triangulation.vertices[v].info = info
        return v

    def _insert(self, pos, hint, info):
        tds = self.triangulation
        n = tds.num_vertices
        if n == 0:
            return tds.append_vertex(pos[0], pos[1], info)
        if n == 1:
            if tds.position(0) == pos:
                return self._update(0, info)
            v = tds.append_vertex(pos[0], pos[1], info)
            tds.setup_initial_two_vertices(0, v)
            return v
        if tds.all_vertices_on_line():
            kind, handle = self.locator.locate_when_all_vertices_on_line(pos)
            if kind == ON_LINE_VERTEX:
                return self._update(handle, info)
            v = tds.append_vertex(pos[0], pos[1], info)
            if kind == ON_LINE_EDGE:
                tds.split_edge_when_all_vertices_on_line(handle, v)
            elif kind == NOT_ON_LINE:
                self.insert_outside_convex_hull(handle, v)
            elif kind == EXTENDING_LINE:
                tds.extend_line(handle, v)
            else:
                raise ValueError("Unknown location on line: {}".format(kind))
            return v

        position = self.locator.locate(pos, hint)
        if position.kind == ON_VERTEX:
            return self._update(position.handle, info)
        v = tds.append_vertex(pos[0], pos[1], info)
        if position.kind == OUTSIDE_CONVEX_HULL:
            self.insert_outside_convex_hull(position.handle, v)
        elif position.kind == ON_FACE:
            tds.insert_into_triangle(v, position.handle)
            self.legalize_vertex(v)
        elif position.kind == ON_EDGE:
            self.insert_on_edge(position.handle, v)
        else:
            raise TopologyViolationError(
                "Unexpected location {} in triangulation".format(position))
        return v

    def insert_on_edge(self, edge, v):
        tds = self.triangulation
        was_constraint = self.is_constraint(undirected(edge))
        if tds.is_outer(edge):
            p0, p1 = tds.split_half_edge(rev(edge), v)
            parts = (rev(p1), rev(p0))
        elif tds.is_outer(rev(edge)):
            parts = tds.split_half_edge(edge, v)
        else:
            parts = tds.split_edge(edge, v)
        if was_constraint:
            self.on_constraint_split(parts)
        self.legalize_vertex(v)
        return v

    def insert_outside_convex_hull(self, edge, v):
        """Connect v, lying outside the convex hull, to all hull edges it
        can see. edge must be a hull edge having v on its left side.
        """
        tds = self.triangulation
        pos = tds.position(v)

        def sees(e):
            return side_query(tds.position(tds.origin(e)),
                              tds.position(tds.dest(e)),
                              pos) > 0

        if not sees(edge):
            raise TopologyViolationError(
                "Point must be on left side of convex hull edge")

        tds.create_new_face_adjacent_to_edge(edge, v)
        ccw_start = rev(tds.prev(edge))
        cw_start = rev(tds.next(edge))
        self.legalize_edge(edge)

        # walk over the hull in both directions, closing the gaps
        current = ccw_start
        while True:
            current = tds.prev(current)
            if not sees(current):
                break
            new_edge = tds.create_single_face_between_edge_and_next(current)
            self.legalize_edge(current)
            current = new_edge

        current = cw_start
        while True:
            nxt = tds.next(current)
            if not sees(nxt):
                break
            new_edge = tds.create_single_face_between_edge_and_next(current)
            self.legalize_edge(nxt)
            current = new_edge
        return v

    def legalize_vertex(self, v):
        """Restore the Delaunay criterion around newly inserted vertex v"""
        tds = self.triangulation
        edges = [tds.next(e) for e in tds.out_edges(v) if not tds.is_outer(e)]
        for e in edges:
            self.legalize_edge(e)

    def legalize_edge(self, edge, fully_legalize=False):
        """Performs flips for edges, starting at edge, if the Delaunay
        criterion does not hold.

        If an edge was flipped, the edges of the quadrilateral are checked
        next (only the two far ones, unless fully_legalize is set).
        Returns whether a flip happened.
        """
        tds = self.triangulation
        stack = [edge]
        result = False
        budget = 4 * tds.num_edges * tds.num_edges + 16
        while stack:
            budget -= 1
            if budget < 0:
                raise TopologyViolationError(
                    "Legalization of edge {} does not terminate".format(edge))
            e = stack.pop()
            # -- skip constrained edge - these should not be flipped
            if self.is_constraint(undirected(e)):
                continue
            t = rev(e)
            # -- skip convex hull edges
            if tds.is_outer(e) or tds.is_outer(t):
                continue
            if tds.face(e) == tds.face(t):
                raise TopologyViolationError(
                    "Edge {} has face {} on both sides".format(
                        undirected(e), tds.face(e)))
            v0 = tds.position(tds.origin(e))
            v1 = tds.position(tds.dest(e))
            v2 = tds.position(tds.dest(tds.next(e)))
            v3 = tds.position(tds.dest(tds.next(t)))
            if in_circumcircle(v0, v1, v2, v3):
                result = True
                stack.append(tds.next(t))
                stack.append(tds.prev(t))
                if fully_legalize:
                    stack.append(tds.next(e))
                    stack.append(tds.prev(e))
                tds.flip_cw(undirected(e))
                self.flips += 1
        return result
