'''
Constrained Delaunay triangulation.

Constraint edges are inserted by walking from the start to the end vertex:
triangles whose edges are crossed form a conflict region, which is
retriangulated by flipping until the constraint edge exists, after which the
rest of the region is made Delaunay again.
'''
import logging
import time
from collections import deque

from hetri.delaunay.preds import side_query, sign, segments_cross, \
    project_point, edge_intersection, distance2, validate_coordinate
from hetri.delaunay.tds import Triangulation, TopologyViolationError, \
    rev, undirected, directed
from hetri.delaunay.dt import DelaunayTriangulation
from hetri.delaunay.linewalk import LineIntersectionIterator


class ConstraintIntersectionError(ValueError):
    """The new constraint edge would cross an existing constraint edge"""
    pass


def strictly_inside(a, b, c, q):
    """Whether q lies in the interior of counterclockwise triangle a, b, c"""
    return (side_query(a, b, q) > 0 and
            side_query(b, c, q) > 0 and
            side_query(c, a, q) > 0)


class ConstrainedDelaunayTriangulation(object):
    """Delaunay triangulation in which edges can be forced to be present
    (constraint edges). Constraint edges are never flipped.
    """

    def __init__(self, hint_generator=None):
        self.triangulation = Triangulation()
        self.num_constraints = 0
        self.dt = DelaunayTriangulation(
            self.triangulation,
            hint_generator,
            is_constraint=self.is_constraint_edge,
            on_constraint_split=self._constraint_split)

    # -- delegation to the Delaunay triangulation

    @property
    def num_vertices(self):
        return self.triangulation.num_vertices

    @property
    def vertices(self):
        return self.triangulation.vertices

    def insert(self, point, info=None):
        return self.dt.insert(point, info)

    def insert_with_hint(self, point, hint, info=None):
        return self.dt.insert_with_hint(point, hint, info)

    def locate(self, point, hint=None):
        return self.dt.locate(point, hint)

    # -- constraint bookkeeping

    def is_constraint_edge(self, edge):
        """Whether undirected edge is a constraint edge"""
        return self.triangulation.edges[edge].constrained

    def _make_constraint(self, edge):
        data = self.triangulation.edges[edge]
        if data.constrained:
            return False
        data.constrained = True
        self.num_constraints += 1
        return True

    def _constraint_split(self, parts):
        # the split constraint now consists of two edges
        self.num_constraints += 1
        for half in parts:
            self.triangulation.edges[undirected(half)].constrained = True

    def _validate_vertex(self, v):
        if not 0 <= v < self.triangulation.num_vertices:
            raise ValueError("No such vertex: {}".format(v))

    # -- queries

    def can_add_constraint(self, start, end):
        """Whether a constraint between vertex start and vertex end can be
        added without crossing an existing constraint edge
        """
        it = LineIntersectionIterator.from_vertices(self.dt, start, end)
        return not self._crosses_constraint(it)

    def intersects_constraint(self, line_from, line_to):
        """Whether the segment between two points crosses a constraint edge"""
        it = LineIntersectionIterator(self.dt, line_from, line_to)
        return self._crosses_constraint(it)

    def _crosses_constraint(self, intersections):
        for intersection in intersections:
            if intersection.is_edge and \
                    self.is_constraint_edge(undirected(intersection.handle)):
                return True
        return False

    # -- insertion of constraints

    def add_constraint(self, start, end):
        """Add a constraint edge between two vertices.

        Returns whether the number of constraint edges changed. Raises
        ConstraintIntersectionError (without modifying the triangulation)
        when the edge would cross an existing constraint edge.
        """
        self._validate_vertex(start)
        self._validate_vertex(end)
        if start == end:
            raise ValueError('same start as end point')
        if not self.can_add_constraint(start, end):
            raise ConstraintIntersectionError(
                "Constraint from {} to {} crosses a constraint edge".format(
                    start, end))
        logging.debug(" - adding constraint {} - {}".format(start, end))
        initial = self.num_constraints
        self._resolve(start, end, None)
        return self.num_constraints != initial

    def add_constraint_edge(self, p, q):
        """Insert the points p and q, and add a constraint edge between them
        """
        start = self.insert(p)
        end = self.insert(q)
        return self.add_constraint(start, end)

    def add_constraint_with_splitting(self, start, end, vertex_constructor):
        """Add a constraint edge between two vertices, where crossings with
        existing constraint edges are resolved by adding vertices.

        vertex_constructor gets the intersection point of the two lines and
        gives the position of the vertex to add.
        """
        self._validate_vertex(start)
        self._validate_vertex(end)
        if start == end:
            raise ValueError('same start as end point')
        logging.debug(" - adding constraint {} - {} with splitting".format(
            start, end))
        initial = self.num_constraints
        self._resolve(start, end, vertex_constructor)
        return self.num_constraints != initial

    def _resolve(self, start, end, vertex_constructor):
        tds = self.triangulation
        pending = [(start, end)]
        steps = 0
        while pending:
            steps += 1
            if steps > 8 * tds.num_edges + 64:
                raise TopologyViolationError(
                    "Adding constraint {} - {} does not terminate".format(
                        start, end))
            frm, to = pending.pop()
            if frm != to:
                self._resolve_segment(frm, to, vertex_constructor, pending)

    def _resolve_segment(self, frm, to, vertex_constructor, pending):
        tds = self.triangulation
        region_start = frm
        conflict = []
        iterator = LineIntersectionIterator.from_vertices(self.dt, frm, to)
        next(iterator)  # start vertex
        while True:
            intersection = next(iterator, None)
            if intersection is None:
                break
            if intersection.is_overlap:
                self._make_constraint(undirected(intersection.handle))
                region_start = tds.dest(intersection.handle)
            elif intersection.is_edge:
                edge = intersection.handle
                if not self.is_constraint_edge(undirected(edge)):
                    conflict.append(edge)
                    continue
                if vertex_constructor is None:
                    raise ConstraintIntersectionError(
                        "Constraint from {} to {} crosses a constraint "
                        "edge".format(frm, to))
                v, pieces = self._split_crossing(
                    edge, region_start, to, vertex_constructor)
                pending.append((v, to))
                pending.append((region_start, v))
                pending.extend(pieces)
                return
            else:
                v = intersection.handle
                if conflict:
                    self.resolve_conflict_region(conflict, region_start, v)
                    conflict = []
                elif v != region_start:
                    edge = tds.get_edge_from_neighbours(region_start, v)
                    if edge is None:
                        raise TopologyViolationError(
                            "Vertices {} and {} are not connected".format(
                                region_start, v))
                    self._make_constraint(undirected(edge))
                if v == to:
                    break
                region_start = v
                iterator = LineIntersectionIterator.from_vertices(
                    self.dt, v, to)
                next(iterator)
        if conflict:
            raise TopologyViolationError(
                "Walk from {} to {} ended in the middle of the mesh".format(
                    frm, to))

    def resolve_conflict_region(self, conflict, start, target):
        """Make the edge start - target exist and mark it as constraint.

        conflict are the half edges crossed by the segment start - target
        (in order).
        """
        tds = self.triangulation
        conflict_edges = set(undirected(e) for e in conflict)
        border = set()
        for e in conflict:
            for half in (e, rev(e)):
                for side in tds.face_edges(tds.face(half)):
                    u = undirected(side)
                    if u not in conflict_edges:
                        border.add(u)

        p_start = tds.position(start)
        p_target = tds.position(target)

        # flip conflict edges until none crosses the segment any more
        queue = deque(undirected(e) for e in conflict)
        new_edges = []
        budget = 4 * len(queue) * len(queue) + 16
        while queue:
            budget -= 1
            if budget < 0:
                raise TopologyViolationError(
                    "Conflict region {} - {} can not be resolved".format(
                        start, target))
            u = queue.popleft()
            e = directed(u)
            pa = tds.position(tds.origin(e))
            pb = tds.position(tds.dest(e))
            pc = tds.position(tds.opposite_vertex(e))
            pd = tds.position(tds.opposite_vertex(rev(e)))
            # only a strictly convex quadrilateral can be flipped
            if sign(side_query(pc, pd, pa)) * sign(side_query(pc, pd, pb)) \
                    < 0:
                tds.flip_cw(u)
                if segments_cross(pc, pd, p_start, p_target):
                    queue.append(u)
                else:
                    new_edges.append(u)
            else:
                queue.append(u)

        temporary = [u for u in border if not self.is_constraint_edge(u)]
        for u in temporary:
            tds.edges[u].constrained = True

        edge = tds.get_edge_from_neighbours(start, target)
        if edge is None:
            raise TopologyViolationError(
                "Constraint edge {} - {} not found after flipping".format(
                    start, target))
        constraint = undirected(edge)
        self._make_constraint(constraint)
        for u in new_edges:
            if u != constraint:
                self.dt.legalize_edge(directed(u), fully_legalize=True)

        for u in temporary:
            tds.edges[u].constrained = False
        return edge

    def _split_crossing(self, edge, frm, to, vertex_constructor):
        """Resolve crossing constraint edge by a new (or snapped) vertex.

        Returns the vertex to route through and the pieces of the crossed
        constraint that have to be constrained again (when it is rerouted).
        """
        tds = self.triangulation
        a = tds.origin(edge)
        b = tds.dest(edge)
        c = tds.opposite_vertex(edge)
        d = tds.opposite_vertex(rev(edge))
        if c is None or d is None:
            raise TopologyViolationError(
                "Crossed constraint edge {} lies on the convex hull".format(
                    undirected(edge)))
        pa, pb, pc, pd = [tds.position(v) for v in (a, b, c, d)]
        point = edge_intersection(tds.position(frm), tds.position(to),
                                  pa, pb)
        constructed = vertex_constructor(point)
        q = (validate_coordinate(constructed[0]),
             validate_coordinate(constructed[1]))
        logging.debug(" - crossing constraint {} - {}, new vertex at {}".format(
            a, b, q))

        corners = (a, b, c, d)
        for v in corners:
            if tds.position(v) == q:
                return v, self._reroute(edge, v)
        if side_query(pa, pb, q) == 0 and \
                project_point(pa, pb, q).is_strictly_on_edge:
            # split, both halves stay constrained
            v = self.dt.insert_with_hint(q, a)
            return v, []
        if strictly_inside(pa, pb, pc, q) or strictly_inside(pb, pa, pd, q):
            v = self.dt.insert_with_hint(q, a)
            return v, self._reroute(edge, v)
        nearest = min(corners, key=lambda v: distance2(tds.position(v), q))
        return nearest, self._reroute(edge, nearest)

    def _reroute(self, edge, v):
        """Remove the constraint flag of edge, when v is not one of its end
        points; gives the two pieces to constrain instead.
        """
        a = self.triangulation.origin(edge)
        b = self.triangulation.dest(edge)
        if v == a or v == b:
            return []
        self.triangulation.edges[undirected(edge)].constrained = False
        self.num_constraints -= 1
        self.dt.legalize_edge(edge, fully_legalize=True)
        return [(v, b), (a, v)]


def triangulate(points, infos=None, segments=None):
    """Triangulate a set of points (with optionally constraint segments,
    given as pairs of indices into points)

    Returns the ConstrainedDelaunayTriangulation.
    """
    start = time.perf_counter()
    cdt = ConstrainedDelaunayTriangulation()
    handles = []
    for i, pt in enumerate(points):
        info = None
        if infos is not None:
            info = infos[i]
        handles.append(cdt.insert(pt, info))
    end = time.perf_counter()
    logging.debug("Triangulating took: " + str(end - start) + " secs")
    logging.debug("{} vertices".format(cdt.num_vertices))
    logging.debug("{} faces".format(cdt.triangulation.num_faces - 1))
    logging.debug("{} flips".format(cdt.dt.flips))
    if cdt.num_vertices > 0:
        logging.debug(str(float(cdt.dt.flips) /
                          cdt.num_vertices) + " flips per insert")

    if segments:
        start = time.perf_counter()
        logging.debug("inserting " + str(len(segments)) + " constraints")
        for i, j in segments:
            a, b = handles[i], handles[j]
            if a == b:
                logging.warning(
                    "skipping constraint between equal points {} and {}".format(
                        i, j))
                continue
            cdt.add_constraint(a, b)
        end = time.perf_counter()
        logging.debug(" {time} secs".format(time=(end - start)))
        logging.debug(" {count} constraints".format(
            count=cdt.num_constraints))
    return cdt
