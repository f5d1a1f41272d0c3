'''
Triangulation data structure: a doubly connected edge list (half edges).

Vertices, half edges, undirected edges and faces are stored in lists, and
they refer to each other by their index in those lists (handles). The lists
only grow, so a handle stays valid as long as the triangulation exists.

The two half edges of an undirected edge u are stored at index 2u and 2u+1,
hence the twin of half edge e is e ^ 1 and its undirected edge is e >> 1.

Face 0 is the outer face (outside the convex hull), all other faces are
triangles.
'''

# ------------------------------------------------------------------------------
# Helpers
#

OUTER_FACE = 0


def rev(e):
    """Give the twin of half edge e (same edge, opposite direction)"""
    return e ^ 1


def undirected(e):
    """Give the undirected edge that half edge e belongs to"""
    return e >> 1


def directed(u):
    """Give the (normalized) half edge of undirected edge u"""
    return u << 1


class TopologyViolationError(Exception):
    """Raised when the mesh does not satisfy its invariants any more.

    This signals a defect (or corrupted input) and is not meant to be
    recovered from.
    """
    pass


class Vertex(object):
    """A vertex in the triangulation.
    Can carry extra information via its info property.
    """
    __slots__ = ('x', 'y', 'info', 'out_edge')

    def __init__(self, x, y, info=None):
        self.x = x
        self.y = y
        self.info = info
        self.out_edge = None

    def __str__(self):
        return "{0} {1}".format(self.x, self.y)

    def __repr__(self):
        return "Vertex({0}, {1}, info={2!r})".format(self.x, self.y, self.info)

    def __getitem__(self, i):
        if i == 0:
            return self.x
        elif i == 1:
            return self.y
        else:
            raise IndexError("No such ordinate: {}".format(i))

    def __len__(self):
        return 2

    @property
    def position(self):
        return (self.x, self.y)


class HalfEdge(object):
    """One direction of an edge, bounding the face on its left"""
    __slots__ = ('origin', 'next', 'prev', 'face')

    def __init__(self, origin, face=OUTER_FACE):
        self.origin = origin
        self.face = face
        self.next = None
        self.prev = None


class Edge(object):
    """Data shared by the two half edges of an undirected edge"""
    __slots__ = ('constrained', 'info')

    def __init__(self):
        self.constrained = False
        self.info = None


class Face(object):
    __slots__ = ('edge', 'info')

    def __init__(self, edge=None):
        self.edge = edge
        self.info = None


class Triangulation(object):
    """Triangulation data structure"""
    # This represents the mesh

    def __init__(self):
        self.vertices = []
        self.half_edges = []
        self.edges = []
        self.faces = [Face()]  # outer face

    # -- counts

    @property
    def num_vertices(self):
        return len(self.vertices)

    @property
    def num_edges(self):
        """Number of undirected edges"""
        return len(self.edges)

    @property
    def num_half_edges(self):
        return len(self.half_edges)

    @property
    def num_faces(self):
        """Number of faces, including the outer face"""
        return len(self.faces)

    def all_vertices_on_line(self):
        """True as long as no triangle exists (0, 1 or only collinear
        vertices)
        """
        return len(self.faces) == 1

    # -- navigation

    def position(self, v):
        return self.vertices[v].position

    def origin(self, e):
        return self.half_edges[e].origin

    def dest(self, e):
        return self.half_edges[e ^ 1].origin

    def next(self, e):
        return self.half_edges[e].next

    def prev(self, e):
        return self.half_edges[e].prev

    def face(self, e):
        return self.half_edges[e].face

    def is_outer(self, e):
        """Whether half edge e bounds the outer face"""
        return self.half_edges[e].face == OUTER_FACE

    def ccw(self, e):
        """Next half edge counterclockwise around the origin of e"""
        return self.half_edges[e].prev ^ 1

    def cw(self, e):
        """Next half edge clockwise around the origin of e"""
        return self.half_edges[e ^ 1].next

    def opposite_vertex(self, e):
        """Vertex opposite to e in the triangle on the left of e,
        None if e bounds the outer face
        """
        he = self.half_edges[e]
        if he.face == OUTER_FACE:
            return None
        return self.half_edges[he.prev].origin

    def segment(self, e):
        """Coordinates of start and end of half edge e"""
        return self.position(self.origin(e)), self.position(self.dest(e))

    def out_edges(self, v):
        """Yields the half edges leaving vertex v, counterclockwise"""
        start = self.vertices[v].out_edge
        if start is None:
            return
        current = start
        for _ in range(len(self.half_edges) + 1):
            yield current
            current = self.ccw(current)
            if current == start:
                return
        raise TopologyViolationError(
            "Edges around vertex {} do not form a cycle".format(v))

    def face_edges(self, f):
        """The three half edges of inner face f"""
        if f == OUTER_FACE:
            raise TopologyViolationError(
                "Outer face found where a triangle was expected")
        e0 = self.faces[f].edge
        e1 = self.half_edges[e0].next
        e2 = self.half_edges[e1].next
        return e0, e1, e2

    def face_vertices(self, f):
        """The three vertices of inner face f, counterclockwise"""
        return tuple(self.half_edges[e].origin for e in self.face_edges(f))

    def get_edge_from_neighbours(self, a, b):
        """Half edge from vertex a to vertex b, None if a and b are not
        connected
        """
        for e in self.out_edges(a):
            if self.dest(e) == b:
                return e
        return None

    # -- local mutation primitives

    def _new_edge(self, origin, twin_origin, face=OUTER_FACE,
                  twin_face=OUTER_FACE):
        e = len(self.half_edges)
        self.half_edges.append(HalfEdge(origin, face))
        self.half_edges.append(HalfEdge(twin_origin, twin_face))
        self.edges.append(Edge())
        return e

    def _new_face(self, edge):
        self.faces.append(Face(edge))
        return len(self.faces) - 1

    def _link(self, e, nxt, prv):
        he = self.half_edges[e]
        he.next = nxt
        he.prev = prv

    def append_vertex(self, x, y, info=None):
        """Add an unconnected vertex, returns its handle"""
        self.vertices.append(Vertex(x, y, info))
        return len(self.vertices) - 1

    def setup_initial_two_vertices(self, first, second):
        """Connect the first two vertices with an edge (in the outer face)"""
        e = self._new_edge(first, second)
        t = rev(e)
        self._link(e, t, t)
        self._link(t, e, e)
        self.vertices[first].out_edge = e
        self.vertices[second].out_edge = t
        self.faces[OUTER_FACE].edge = e
        return e

    def insert_into_triangle(self, v, f0):
        """Split triangle f0 in three around vertex v (lying inside f0)"""
        he = self.half_edges
        e0, e1, e2 = self.face_edges(f0)
        v0, v1, v2 = he[e0].origin, he[e1].origin, he[e2].origin

        f1 = self._new_face(e1)
        f2 = self._new_face(e2)

        e3 = self._new_edge(v1, v, f0, f1)
        e4 = rev(e3)
        e5 = self._new_edge(v2, v, f1, f2)
        e6 = rev(e5)
        e7 = self._new_edge(v0, v, f2, f0)
        e8 = rev(e7)

        self._link(e0, e3, e8)
        self._link(e3, e8, e0)
        self._link(e8, e0, e3)

        self._link(e1, e5, e4)
        self._link(e5, e4, e1)
        self._link(e4, e1, e5)
        he[e1].face = f1

        self._link(e2, e7, e6)
        self._link(e7, e6, e2)
        self._link(e6, e2, e7)
        he[e2].face = f2

        self.vertices[v].out_edge = e4
        return v

    def split_half_edge(self, edge, v):
        """Split an edge of the convex hull at vertex v.

        The half edge *edge* must bound a triangle, its twin the outer face.
        One new triangle is made. Returns the two half edges that now make up
        the old edge (in the direction of *edge*).
        """
        he = self.half_edges
        edge_next = he[edge].next
        edge_prev = he[edge].prev
        apex = he[edge_prev].origin
        to = he[edge_next].origin
        twin = rev(edge)
        twin_prev = he[twin].prev
        twin_face = he[twin].face
        f1 = he[edge].face

        nf = len(self.faces)
        e1 = self._new_edge(apex, v, nf, f1)
        t1 = rev(e1)
        e2 = self._new_edge(v, to, nf, twin_face)
        t2 = rev(e2)
        self._new_face(e2)

        self._link(e1, e2, edge_next)
        self._link(t1, edge_prev, edge)
        self._link(e2, edge_next, e1)
        self._link(t2, twin, twin_prev)

        he[twin_prev].next = t2
        self._link(edge_next, e1, e2)
        he[edge_next].face = nf
        he[edge_prev].prev = t1
        he[twin].prev = t2
        he[twin].origin = v
        he[edge].next = t1

        self.vertices[v].out_edge = e2
        self.vertices[to].out_edge = t2
        self.faces[f1].edge = edge
        return edge, e2

    def split_edge(self, edge, v):
        """Split an interior edge (two triangles) at vertex v into four
        triangles. Returns the two half edges that now make up the old edge
        (in the direction of *edge*).
        """
        he = self.half_edges
        e0 = edge
        t0 = rev(e0)
        f0 = he[e0].face
        f1 = he[t0].face
        ep, en = he[e0].prev, he[e0].next
        tp, tn = he[t0].prev, he[t0].next

        v1 = he[e0].origin
        v2 = he[tp].origin
        v3 = he[t0].origin
        v4 = he[ep].origin

        f2 = len(self.faces)
        f3 = f2 + 1
        e1 = self._new_edge(v2, v, f1, f2)
        t1 = rev(e1)
        e2 = self._new_edge(v3, v, f2, f3)
        t2 = rev(e2)
        e3 = self._new_edge(v4, v, f3, f0)
        t3 = rev(e3)
        self._new_face(e2)
        self._new_face(e3)

        self._link(e0, t3, ep)
        he[t0].origin = v
        self._link(t0, tn, e1)
        self._link(e1, t0, tn)
        self._link(t1, tp, e2)
        self._link(e2, t1, tp)
        self._link(t2, en, e3)
        self._link(e3, t2, en)
        self._link(t3, ep, e0)

        self._link(en, e3, t2)
        he[en].face = f3
        self._link(tp, e2, t1)
        he[tp].face = f2
        he[tn].next = e1
        he[ep].prev = t3

        self.vertices[v].out_edge = t0
        self.vertices[v3].out_edge = e2
        self.faces[f0].edge = e0
        self.faces[f1].edge = e1
        return e0, rev(e2)

    def split_edge_when_all_vertices_on_line(self, edge, v):
        """Split an edge while no triangle exists yet"""
        he = self.half_edges
        twin = rev(edge)
        edge_next = he[edge].next
        twin_prev = he[twin].prev
        to = he[edge_next].origin
        face = he[edge].face
        isolated = edge_next == twin

        new = self._new_edge(v, to, face, face)
        new_twin = rev(new)

        he[edge].next = new
        he[twin].prev = new_twin
        he[twin].origin = v
        self.vertices[to].out_edge = new_twin

        if isolated:
            self._link(new, new_twin, edge)
            self._link(new_twin, twin, new)
        else:
            he[edge_next].prev = new
            he[twin_prev].next = new_twin
            self._link(new, edge_next, edge)
            self._link(new_twin, twin, twin_prev)

        self.vertices[v].out_edge = new
        return edge, new

    def extend_line(self, end, v):
        """Connect v to the vertex *end* at one end of a line of vertices"""
        out_edge = self.vertices[end].out_edge
        if out_edge is None:
            raise TopologyViolationError(
                "End vertex {} of line is not connected".format(end))
        in_edge = rev(out_edge)
        face = self.half_edges[out_edge].face

        new = self._new_edge(v, end, face, face)
        new_twin = rev(new)
        self.half_edges[out_edge].prev = new
        self.half_edges[in_edge].next = new_twin
        self._link(new, out_edge, new_twin)
        self._link(new_twin, new, in_edge)

        self.vertices[v].out_edge = new
        return v

    def create_new_face_adjacent_to_edge(self, edge, v):
        """Make a triangle of convex hull edge *edge* (bounding the outer
        face) and vertex v that lies on its left side
        """
        he = self.half_edges
        edge_from = he[edge].origin
        en = he[edge].next
        ep = he[edge].prev
        edge_to = he[en].origin
        outer = he[edge].face

        nf = len(self.faces)
        new_next = self._new_edge(edge_to, v, nf, outer)
        new_prev = self._new_edge(v, edge_from, nf, outer)
        self._new_face(edge)

        self._link(new_next, new_prev, edge)
        self._link(rev(new_next), en, rev(new_prev))
        self._link(new_prev, edge, new_next)
        self._link(rev(new_prev), rev(new_next), ep)

        self._link(edge, new_next, new_prev)
        he[edge].face = nf
        he[en].prev = rev(new_next)
        he[ep].next = rev(new_prev)

        self.vertices[v].out_edge = new_prev
        self.faces[outer].edge = rev(new_prev)
        return v

    def create_single_face_between_edge_and_next(self, edge):
        """Close the gap between hull edge *edge* and its successor on the
        hull with a triangle. Returns the new hull edge.
        """
        he = self.half_edges
        en = he[edge].next
        ep = he[edge].prev
        enn = he[en].next
        next_to = he[enn].origin

        nf = len(self.faces)
        inner = self._new_edge(next_to, he[edge].origin, nf, OUTER_FACE)
        outer = rev(inner)
        self._new_face(inner)

        self._link(inner, edge, en)
        self._link(outer, enn, ep)
        he[ep].next = outer
        he[edge].prev = inner
        he[edge].face = nf
        he[en].next = inner
        he[en].face = nf
        he[enn].prev = outer

        self.faces[OUTER_FACE].edge = outer
        return outer

    def flip_cw(self, u):
        """Flip undirected edge u (the diagonal of the two triangles it
        separates), rotating it clockwise
        """
        he = self.half_edges
        e = directed(u)
        t = rev(e)
        en, ep = he[e].next, he[e].prev
        tn, tp = he[t].next, he[t].prev
        e_face, t_face = he[e].face, he[t].face
        e_origin, t_origin = he[e].origin, he[t].origin

        he[e].origin = he[ep].origin
        he[t].origin = he[tp].origin

        self._link(en, e, tp)
        self._link(e, tp, en)
        self._link(tp, en, e)
        he[tp].face = e_face

        self._link(tn, t, ep)
        self._link(t, ep, tn)
        self._link(ep, tn, t)
        he[ep].face = t_face

        self.vertices[e_origin].out_edge = tn
        self.vertices[t_origin].out_edge = en
        self.faces[e_face].edge = e
        self.faces[t_face].edge = t
