'''
Point location by walking over the mesh.

From a starting vertex (given by a hint generator) we first greedily move
to the vertex nearest to the query point, then rotate around and cross
edges until the face, edge or vertex containing the point is found.
'''
from hetri.delaunay.preds import side_query, distance2
from hetri.delaunay.position import Position
from hetri.delaunay.tds import TopologyViolationError, rev

# results of locating in a mesh with all vertices on one line
ON_LINE_VERTEX = 'on_vertex'
ON_LINE_EDGE = 'on_edge'
NOT_ON_LINE = 'not_on_line'
EXTENDING_LINE = 'extending_line'


class PointLocator(object):
    """Locates points in a Triangulation"""

    def __init__(self, triangulation, hint_generator):
        self.triangulation = triangulation
        self.hint_generator = hint_generator

    def locate(self, position, hint=None):
        """Where does position lie in the triangulation

        Returns a Position.
        """
        tds = self.triangulation
        n = tds.num_vertices
        if n < 2:
            if n == 1 and tds.position(0) == tuple(position):
                return Position.on_vertex(0)
            return Position.no_triangulation()
        if tds.all_vertices_on_line():
            kind, handle = self.locate_when_all_vertices_on_line(position)
            if kind == ON_LINE_VERTEX:
                self.hint_generator.notify_vertex_lookup(handle)
                return Position.on_vertex(handle)
            elif kind == EXTENDING_LINE:
                self.hint_generator.notify_vertex_lookup(handle)
                return Position.outside_convex_hull(
                    tds.vertices[handle].out_edge)
            self.hint_generator.notify_vertex_lookup(tds.origin(handle))
            if kind == ON_LINE_EDGE:
                return Position.on_edge(handle)
            return Position.outside_convex_hull(handle)
        return self.locate_with_walk(position, hint)

    def locate_when_all_vertices_on_line(self, position):
        """Locate a point relative to a line of vertices (no faces yet).

        Returns tuple (kind, handle) with kind one of ON_LINE_VERTEX (vertex),
        ON_LINE_EDGE (half edge), NOT_ON_LINE (half edge with the point on its
        left) or EXTENDING_LINE (vertex at the end of the line, the point
        lies beyond it).
        """
        tds = self.triangulation
        from_pos, to_pos = tds.segment(0)
        side = side_query(from_pos, to_pos, position)
        if side > 0:
            return (NOT_ON_LINE, 0)
        elif side < 0:
            return (NOT_ON_LINE, 1)
        key = (position[0], position[1])
        ordered = sorted(range(tds.num_vertices),
                         key=lambda v: tds.position(v))
        previous = None
        for i, v in enumerate(ordered):
            here = tds.position(v)
            if here == key:
                return (ON_LINE_VERTEX, v)
            elif key < here:
                if i == 0:
                    return (EXTENDING_LINE, v)
                edge = tds.get_edge_from_neighbours(previous, v)
                if edge is None:
                    raise TopologyViolationError(
                        "Vertices {} and {} on line are not connected".format(
                            previous, v))
                return (ON_LINE_EDGE, edge)
            previous = v
        return (EXTENDING_LINE, ordered[-1])

    def walk_to_nearest_neighbour(self, start, position):
        """Greedily move from start to a vertex closer to position, until no
        neighbour is closer.
        """
        tds = self.triangulation
        current = start
        current_dist = distance2(tds.position(current), position)
        for _ in range(tds.num_vertices + 1):
            improved = False
            for e in tds.out_edges(current):
                neighbour = tds.dest(e)
                dist = distance2(tds.position(neighbour), position)
                if dist < current_dist:
                    current = neighbour
                    current_dist = dist
                    improved = True
                    break
            if not improved:
                return current
        raise TopologyViolationError(
            "Nearest neighbour walk does not terminate")

    def locate_with_walk(self, position, hint=None):
        tds = self.triangulation
        hints = self.hint_generator
        target = (position[0], position[1])
        if hint is None:
            hint = hints.get_hint(target)
        if hint is None or not 0 <= hint < tds.num_vertices:
            hint = 0

        def orient(e):
            return side_query(tds.position(tds.origin(e)),
                              tds.position(tds.dest(e)),
                              target)

        closest = self.walk_to_nearest_neighbour(hint, target)
        e0 = tds.vertices[closest].out_edge
        side = orient(e0)
        rotate_ccw = side >= 0

        for _ in range(tds.num_half_edges):
            for v in (tds.origin(e0), tds.dest(e0)):
                if tds.position(v) == target:
                    hints.notify_vertex_lookup(v)
                    return Position.on_vertex(v)

            if side == 0:
                # on the line through e0, move to an edge beside it
                if tds.is_outer(e0):
                    e0 = rev(e0)
                e0 = tds.prev(e0)
                side = orient(e0)
                rotate_ccw = side >= 0
                continue

            e1 = e0 if rotate_ccw else rev(e0)
            if tds.is_outer(e1):
                hints.notify_vertex_lookup(tds.origin(e1))
                return Position.outside_convex_hull(e1)

            rotated = tds.ccw(e0) if rotate_ccw else tds.cw(e0)
            rotated_side = orient(rotated)
            if rotated_side == 0 or (rotated_side > 0) == rotate_ccw:
                # point still on the same side, keep rotating
                e0 = rotated
                side = rotated_side
                continue

            # point lies in the wedge between e0 and rotated, test the edge
            # of the face that closes the wedge
            e2 = tds.next(e1) if rotate_ccw else tds.prev(e1)
            e2_side = orient(e2)
            if e2_side == 0:
                hints.notify_vertex_lookup(tds.dest(e2))
                return Position.on_edge(e2)
            elif e2_side > 0:
                hints.notify_vertex_lookup(tds.dest(e2))
                return Position.on_face(tds.face(e1))

            # cross e2 and continue on the other side
            e0 = rev(e2)
            side = -e2_side
            if not tds.is_outer(e0):
                e0 = tds.prev(e0)
                side = orient(e0)
            rotate_ccw = side >= 0

        raise TopologyViolationError(
            "Point location of {} did not terminate".format(target))
