'''
Output of a triangulation as WKT text files (for QGIS)
'''
from hetri.delaunay.iter import InnerFaceIterator, UndirectedEdgeIterator
from hetri.delaunay.tds import directed


def output_vertices(triangulation, fh):
    """Output vertices as WKT to text file (for QGIS)"""
    fh.write("id;wkt;info\n")
    for v, vertex in enumerate(triangulation.vertices):
        fh.write("{0};POINT({1});{2}\n".format(v, vertex, vertex.info))


def output_triangles(triangulation, fh):
    """Output the triangles as WKT to text file (for QGIS)"""
    fh.write("id;wkt;v0;v1;v2;c0;c1;c2;info\n")
    tds = triangulation
    for f in InnerFaceIterator(tds):
        edges = tds.face_edges(f)
        vertices = [tds.origin(e) for e in edges]
        ring = [str(tds.vertices[v]) for v in vertices]
        ring.append(ring[0])
        fh.write("{0};POLYGON(({1}));"
                 "{2[0]};{2[1]};{2[2]};"
                 "{3[0]};{3[1]};{3[2]};"
                 "{4}\n".format(
                    f, ", ".join(ring),
                    vertices,
                    [tds.edges[e >> 1].constrained for e in edges],
                    tds.faces[f].info))


def output_edges(triangulation, fh, constraints_only=False):
    """Output the (undirected) edges as WKT to text file (for QGIS)"""
    fh.write("id;constrained;wkt\n")
    tds = triangulation
    for u in UndirectedEdgeIterator(tds, constraints_only):
        segment = tds.segment(directed(u))
        fh.write("{0};{1};"
                 "LINESTRING({2[0][0]} {2[0][1]}, {2[1][0]} {2[1][1]})\n".format(
                    u, tds.edges[u].constrained, segment))
