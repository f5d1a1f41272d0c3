'''
Result of locating a point in the triangulation
'''

ON_VERTEX = 'on_vertex'
ON_EDGE = 'on_edge'
ON_FACE = 'on_face'
OUTSIDE_CONVEX_HULL = 'outside_convex_hull'
NO_TRIANGULATION = 'no_triangulation'


class Position(object):
    """Where a query point lies relative to the triangulation.

    handle is a vertex handle for ON_VERTEX, a half edge for ON_EDGE and
    OUTSIDE_CONVEX_HULL (a convex hull half edge that has the point on its
    left side), a face for ON_FACE, and None for NO_TRIANGULATION.
    """
    __slots__ = ('kind', 'handle')

    def __init__(self, kind, handle=None):
        self.kind = kind
        self.handle = handle

    @classmethod
    def on_vertex(cls, v):
        return cls(ON_VERTEX, v)

    @classmethod
    def on_edge(cls, e):
        return cls(ON_EDGE, e)

    @classmethod
    def on_face(cls, f):
        return cls(ON_FACE, f)

    @classmethod
    def outside_convex_hull(cls, e):
        return cls(OUTSIDE_CONVEX_HULL, e)

    @classmethod
    def no_triangulation(cls):
        return cls(NO_TRIANGULATION)

    def __eq__(self, other):
        if not isinstance(other, Position):
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
        return "Position({0}, {1})".format(self.kind, self.handle)
