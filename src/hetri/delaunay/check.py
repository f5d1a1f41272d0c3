'''
Validation of a triangulation: topological consistency, the Delaunay
criterion and a (slow) brute force point locator to compare against.
'''
from hetri.delaunay.preds import side_query, incircle
from hetri.delaunay.position import Position, ON_EDGE
from hetri.delaunay.tds import OUTER_FACE, TopologyViolationError, rev, \
    undirected


def check_consistency(triangulation):
    """Check the half edge structure for consistent relationships

    Raises TopologyViolationError listing all the problems found.
    """
    tds = triangulation
    errors = []
    he = tds.half_edges
    if len(he) != 2 * len(tds.edges):
        errors.append("{} half edges for {} edges".format(
            len(he), len(tds.edges)))
    for e, half in enumerate(he):
        if half.next is None or half.prev is None:
            errors.append("half edge {} not linked".format(e))
            continue
        if he[half.next].prev != e:
            errors.append("next of {} does not point back".format(e))
        if he[half.prev].next != e:
            errors.append("prev of {} does not point back".format(e))
        if he[half.next].origin != he[rev(e)].origin:
            errors.append("next of {} does not start at its end".format(e))
        if he[half.next].face != half.face:
            errors.append("next of {} in other face".format(e))
        if half.origin == he[rev(e)].origin:
            errors.append("half edge {} is a loop".format(e))
    for v, vertex in enumerate(tds.vertices):
        if vertex.out_edge is None:
            if tds.num_vertices > 1:
                errors.append("vertex {} not connected".format(v))
        elif he[vertex.out_edge].origin != v:
            errors.append("out edge of vertex {} does not start there".format(
                v))
    for f, face in enumerate(tds.faces):
        if f == OUTER_FACE:
            continue
        if face.edge is None or he[face.edge].face != f:
            errors.append("edge of face {} does not bound it".format(f))
            continue
        e0 = face.edge
        e1 = he[e0].next
        e2 = he[e1].next
        if he[e2].next != e0:
            errors.append("face {} is not a triangle".format(f))
        elif side_query(tds.position(he[e0].origin),
                        tds.position(he[e1].origin),
                        tds.position(he[e2].origin)) <= 0:
            errors.append("face {} is not counterclockwise".format(f))
    if not errors and tds.num_faces > 1:
        # Euler: V - E + F = 2 (F includes the outer face)
        if tds.num_vertices - tds.num_edges + tds.num_faces != 2:
            errors.append("Euler characteristic violated")
    if len(errors) > 0:
        raise TopologyViolationError("\n".join(errors))
    return True


def non_delaunay_edges(triangulation, is_constraint=None):
    """Give the undirected edges that violate the Delaunay criterion
    (skipping constraint edges)
    """
    tds = triangulation
    result = []
    for u in range(tds.num_edges):
        if is_constraint is not None and is_constraint(u):
            continue
        e = u << 1
        if tds.is_outer(e) or tds.is_outer(rev(e)):
            continue
        v0 = tds.position(tds.origin(e))
        v1 = tds.position(tds.dest(e))
        v2 = tds.position(tds.opposite_vertex(e))
        v3 = tds.position(tds.opposite_vertex(rev(e)))
        if incircle(v0, v1, v2, v3) > 0:
            result.append(u)
    return result


def is_delaunay(triangulation, is_constraint=None):
    return not non_delaunay_edges(triangulation, is_constraint)


def brute_force_locate(triangulation, point):
    """Locate point by testing every vertex, edge and face.

    For edges the half edge with the smallest handle is given, for a point
    outside the convex hull None (any hull edge seeing the point would be
    correct).
    """
    tds = triangulation
    point = (point[0], point[1])
    for v in range(tds.num_vertices):
        if tds.position(v) == point:
            return Position.on_vertex(v)
    if tds.all_vertices_on_line():
        return None
    for e in range(tds.num_half_edges):
        a, b = tds.segment(e)
        if side_query(a, b, point) == 0 and \
                min(a, b) < point < max(a, b):
            return Position.on_edge(min(e, rev(e)))
    for f in range(OUTER_FACE + 1, tds.num_faces):
        a, b, c = [tds.position(v) for v in tds.face_vertices(f)]
        if side_query(a, b, point) > 0 and side_query(b, c, point) > 0 and \
                side_query(c, a, point) > 0:
            return Position.on_face(f)
    return None


def same_location(found, expected):
    """Whether two positions denote the same place (the two half edges of
    one edge count as the same edge)
    """
    if found.kind != expected.kind:
        return False
    if found.kind == ON_EDGE:
        return undirected(found.handle) == undirected(expected.handle)
    return found.handle == expected.handle
