'''
Walking along a line segment through the triangulation, reporting every
vertex, edge and overlapping edge that the segment meets on its way.
'''
from hetri.delaunay.preds import side_query, project_point, \
    intersects_edge_non_collinear, edge_intersection, distance2
from hetri.delaunay.position import ON_VERTEX, ON_EDGE, ON_FACE, \
    OUTSIDE_CONVEX_HULL
from hetri.delaunay.tds import TopologyViolationError, OUTER_FACE, rev

VERTEX_INTERSECTION = 'vertex'
EDGE_INTERSECTION = 'edge'
EDGE_OVERLAP = 'overlap'


class Intersection(object):
    """Something the segment meets: a vertex, a half edge that is crossed
    (the segment continues into the face on its left) or a half edge that
    lies on the segment (pointing in the direction of the segment).
    """
    __slots__ = ('kind', 'handle')

    def __init__(self, kind, handle):
        self.kind = kind
        self.handle = handle

    @classmethod
    def vertex(cls, v):
        return cls(VERTEX_INTERSECTION, v)

    @classmethod
    def edge(cls, e):
        return cls(EDGE_INTERSECTION, e)

    @classmethod
    def overlap(cls, e):
        return cls(EDGE_OVERLAP, e)

    @property
    def is_vertex(self):
        return self.kind == VERTEX_INTERSECTION

    @property
    def is_edge(self):
        return self.kind == EDGE_INTERSECTION

    @property
    def is_overlap(self):
        return self.kind == EDGE_OVERLAP

    def __eq__(self, other):
        if not isinstance(other, Intersection):
            return NotImplemented
        return self.kind == other.kind and self.handle == other.handle

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return hash((self.kind, self.handle))

    def __repr__(self):
        return "Intersection({0}, {1})".format(self.kind, self.handle)


class LineIntersectionIterator(object):
    """Iterator over the intersections of segment line_from -> line_to with
    the mesh of a DelaunayTriangulation, in order along the segment.
    """

    def __init__(self, dt, line_from, line_to):
        self.dt = dt
        self.triangulation = dt.triangulation
        self.line_from = (line_from[0], line_from[1])
        self.line_to = (line_to[0], line_to[1])
        self.current = None
        self._first = True
        self._pending = False
        self._budget = (self.triangulation.num_half_edges +
                        self.triangulation.num_vertices + 2)

    @classmethod
    def from_vertices(cls, dt, start, end):
        """Walk from vertex start to vertex end"""
        tds = dt.triangulation
        it = cls(dt, tds.position(start), tds.position(end))
        it.current = Intersection.vertex(start)
        it._first = False
        it._pending = True
        return it

    def __iter__(self):
        return self

    def __next__(self):
        if self._pending:
            self._pending = False
            return self.current
        if self._first:
            self._first = False
            self.current = self.first_intersection()
        elif self.current is not None:
            self.current = self.next_intersection()
        if self.current is None:
            raise StopIteration
        self._budget -= 1
        if self._budget < 0:
            raise TopologyViolationError(
                "Walk from {} to {} does not terminate".format(
                    self.line_from, self.line_to))
        return self.current

    # -- helpers

    def _pos(self, v):
        return self.triangulation.position(v)

    def _side(self, p):
        """Side of p relative to the segment"""
        return side_query(self.line_from, self.line_to, p)

    def _crosses(self, e):
        tds = self.triangulation
        return intersects_edge_non_collinear(
            self.line_from, self.line_to,
            self._pos(tds.origin(e)), self._pos(tds.dest(e)))

    def _on_segment(self, p):
        return (self._side(p) == 0 and
                project_point(self.line_from, self.line_to, p).is_on_edge)

    # -- first intersection

    def first_intersection(self):
        tds = self.triangulation
        location = self.dt.locate(self.line_from)
        if location.kind == ON_VERTEX:
            return Intersection.vertex(location.handle)
        elif location.kind == ON_FACE:
            for e in tds.face_edges(location.handle):
                if self._crosses(e):
                    if self._side(self._pos(tds.origin(e))) == 0:
                        return Intersection.vertex(tds.origin(e))
                    elif self._side(self._pos(tds.dest(e))) == 0:
                        return Intersection.vertex(tds.dest(e))
                    return Intersection.edge(rev(e))
            return None
        elif location.kind == ON_EDGE:
            e = location.handle
            p_from = self._pos(tds.origin(e))
            p_to = self._pos(tds.dest(e))
            if self._side(p_from) == 0 and self._side(p_to) == 0:
                # edge lies on the segment
                if distance2(p_to, self.line_to) < \
                        distance2(p_from, self.line_to):
                    return Intersection.overlap(e)
                return Intersection.overlap(rev(e))
            if side_query(p_from, p_to, self.line_to) > 0:
                return Intersection.edge(e)
            return Intersection.edge(rev(e))
        elif location.kind == OUTSIDE_CONVEX_HULL:
            return self._enter_convex_hull()
        else:
            # no triangulation: at most a single vertex
            if tds.num_vertices == 1 and self._on_segment(self._pos(0)):
                return Intersection.vertex(0)
            return None

    def _enter_convex_hull(self):
        """First hull feature hit by a segment that starts outside the
        convex hull, None if the segment misses the hull
        """
        tds = self.triangulation
        start = tds.faces[OUTER_FACE].edge
        if start is None:
            return None
        best = None
        best_factor = None
        e = start
        for _ in range(tds.num_half_edges + 1):
            a = self._pos(tds.origin(e))
            b = self._pos(tds.dest(e))
            candidate = None
            if self._on_segment(a):
                candidate = Intersection.vertex(tds.origin(e))
                point = a
            elif (self._side(b) != 0 and
                    intersects_edge_non_collinear(
                        self.line_from, self.line_to, a, b)):
                candidate = Intersection.edge(rev(e))
                point = edge_intersection(self.line_from, self.line_to, a, b)
            if candidate is not None:
                factor = project_point(
                    self.line_from, self.line_to, point).factor
                if best is None or factor < best_factor:
                    best = candidate
                    best_factor = factor
            e = tds.next(e)
            if e == start:
                return best
        raise TopologyViolationError("Convex hull does not form a cycle")

    # -- next intersection

    def next_intersection(self):
        current = self.current
        if current.is_edge:
            return self.trace_out_of_edge(current.handle)
        elif current.is_vertex:
            if self._pos(current.handle) == self.line_to:
                return None
            return self.trace_out_of_vertex(current.handle)
        else:
            if self.line_from == self.line_to:
                return None
            v = self.triangulation.dest(current.handle)
            if project_point(self.line_from, self.line_to,
                             self._pos(v)).is_on_edge:
                return Intersection.vertex(v)
            return None

    def trace_out_of_edge(self, edge):
        """The segment entered the face left of edge, find where it leaves
        that face
        """
        tds = self.triangulation
        if tds.is_outer(edge):
            # left the convex hull
            return None
        e_prev = tds.prev(edge)
        o_next = tds.next(edge)
        prev_hit = self._crosses(e_prev)
        next_hit = self._crosses(o_next)
        if prev_hit and next_hit:
            return Intersection.vertex(tds.origin(e_prev))
        elif prev_hit:
            return Intersection.edge(rev(e_prev))
        elif next_hit:
            return Intersection.edge(rev(o_next))
        return None

    def trace_out_of_vertex(self, v):
        """Rotate around vertex v to find where the segment continues"""
        tds = self.triangulation
        start = tds.vertices[v].out_edge
        if start is None:
            return None

        def side_of(e):
            return side_query(self._pos(tds.origin(e)), self._pos(tds.dest(e)),
                              self.line_to)

        def points_ahead(e):
            return not project_point(self._pos(tds.origin(e)),
                                     self._pos(tds.dest(e)),
                                     self.line_to).is_before_edge

        current = start
        current_side = side_of(current)
        iterate_ccw = current_side > 0
        for _ in range(tds.num_half_edges + 1):
            if current_side == 0 and points_ahead(current):
                return Intersection.overlap(current)
            nxt = tds.ccw(current) if iterate_ccw else tds.cw(current)
            next_side = side_of(nxt)
            if next_side == 0 and points_ahead(nxt):
                return Intersection.overlap(nxt)
            face_between = tds.face(current) if iterate_ccw else tds.face(nxt)
            if face_between == OUTER_FACE:
                return None
            if iterate_ccw == (next_side < 0):
                if iterate_ccw:
                    segment_edge = tds.next(current)
                else:
                    segment_edge = tds.prev(rev(current))
                return Intersection.edge(rev(segment_edge))
            current = nxt
            current_side = next_side
            if current == start:
                return None
        raise TopologyViolationError(
            "Edges around vertex {} do not form a cycle".format(v))
