# Copyright 2024, m3shware
#
# Permission is hereby granted, free of charge, to any person obtaining a
# copy of this software and associated documentation files (the "Software"),
# to deal in the Software without restriction, including without limitation
# the rights to use, copy, modify, merge, publish, distribute, sublicense,
# and/or sell copies of the Software, and to permit persons to whom the
# Software is furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in
# all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING
# FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS
# IN THE SOFTWARE.

""" Local geometric primitives.

Edge lengths, face areas and normals, halfedge vectors, and cotangent
weights of a triangle mesh, together with a few whole-mesh scalars. All
other operators of this package are built on top of these functions.

Values are recomputed from the current vertex coordinates on every call.
"""

import logging

import numpy as np

import ddgkit.hds as hds
import ddgkit.linalg as linalg


logger = logging.getLogger(__name__)


def _triangle(face):
    """ Halfedge loop of a triangle.

    Parameters
    ----------
    face : Face
        A triangular face.

    Raises
    ------
    InvariantViolation
        For non-triangular faces.

    Returns
    -------
    list[Halfedge]
        The three halfedges of `face`, starting at ``face.halfedge``.
    """
    loop = list(face._hiter())

    if len(loop) != 3:
        raise hds.InvariantViolation(f'face #{face.index} has {len(loop)} '
                                     f'vertices, triangle required')

    return loop


def halfedge_vector(halfedge):
    """ Halfedge vector.

    Parameters
    ----------
    halfedge : Halfedge
        Halfedge of a mesh.

    Returns
    -------
    ~numpy.ndarray, shape (3, )
        Target position minus origin position.
    """
    return halfedge.vector


def edge_length(item):
    """ Edge length.

    Parameters
    ----------
    item : Edge or Halfedge
        Edge or one of its halfedges.

    Returns
    -------
    float
        Distance between the endpoints.
    """
    if isinstance(item, hds.Edge):
        item = item.halfedge

    return linalg.norm(item.vector)


def face_area(face):
    """ Face area.

    Areas are only computed for triangular faces.

    Parameters
    ----------
    face : Face
        A triangular face.

    Raises
    ------
    InvariantViolation
        For non-triangular faces.

    Returns
    -------
    float
        Face area.
    """
    h = _triangle(face)[0]
    return 0.5 * linalg.norm(linalg.cross(h.vector, h.next.vector))


def face_normal(face):
    """ Face normal.

    Compute face normal as normalized cross product of edge vectors. The
    orientation is determined by the halfedge loop of the face.

    Parameters
    ----------
    face : Face
        A triangular face.

    Raises
    ------
    InvariantViolation
        For non-triangular faces.
    DegenerateGeometryError
        For degenerate faces, see :func:`degenerate`.

    Returns
    -------
    ~numpy.ndarray, shape (3, )
        Unit normal vector.
    """
    if degenerate(face):
        raise linalg.DegenerateGeometryError(f'face #{face.index} is '
                                             f'degenerate')

    h = face.halfedge
    n = linalg.cross(h.vector, h.next.vector)

    return n / linalg.norm(n)


def degenerate(face):
    r""" Degenerate triangle test.

    A triangle is degenerate if the cross product :math:`u \times v` of
    two edge vectors is negligible compared to :math:`\|u\| \|v\|`, i.e.,
    if the sine of the enclosed angle does not exceed
    :data:`~ddgkit.linalg.EPS`. The test does not depend on the scale of
    the mesh.

    Parameters
    ----------
    face : Face
        A triangular face.

    Raises
    ------
    InvariantViolation
        For non-triangular faces.

    Returns
    -------
    bool
        True for (numerically) collinear vertices.
    """
    h = _triangle(face)[0]
    u, v = h.vector, h.next.vector

    sin = linalg.norm(linalg.cross(u, v))

    return sin <= linalg.EPS * linalg.norm(u) * linalg.norm(v)


def cotan(halfedge):
    r""" Cotangent of opposite angle.

    Cotangent of the angle opposite to `halfedge` in its face, computed
    as :math:`\langle u, v \rangle / \| u \times v \|` from the two edge
    vectors :math:`u, v` meeting at the opposite vertex.

    Parameters
    ----------
    halfedge : Halfedge
        Halfedge of a triangle mesh.

    Returns
    -------
    float
        Cotangent value. Zero for boundary halfedges and for corners of
        triangles with (numerically) vanishing area.
    """
    if halfedge.boundary:
        return 0.0

    _triangle(halfedge.face)

    u = halfedge.next.vector
    v = halfedge.next.next.pair.vector

    sin = linalg.norm(linalg.cross(u, v))

    if sin <= linalg.EPS * linalg.norm(u) * linalg.norm(v):
        logger.debug('degenerate corner opposite to halfedge #%d, '
                     'cotangent set to zero', halfedge.index)
        return 0.0

    return linalg.dot(u, v) / sin


def edge_cotan_weight(edge):
    """ Cotangent edge weight.

    Half the sum of the cotangents of the angles opposite to `edge`. Along
    the boundary only the interior angle contributes.

    Parameters
    ----------
    edge : Edge
        Edge of a triangle mesh.

    Returns
    -------
    float
        Cotangent weight.
    """
    h = edge.halfedge
    return 0.5 * (cotan(h) + cotan(h.pair))


def euler_characteristic(mesh):
    """ Euler characteristic.

    Parameters
    ----------
    mesh : Mesh
        A mesh.

    Returns
    -------
    int
        The value ``V - E + F``.
    """
    nv, ne, nf = mesh.size
    return nv - ne + nf


def mean_edge_length(mesh):
    """ Mean edge length.

    Parameters
    ----------
    mesh : Mesh
        A mesh with at least one edge.

    Returns
    -------
    float
        Average length of all edges.
    """
    return sum(edge_length(e) for e in mesh.edges) / len(mesh.edges)


def total_area(mesh):
    """ Surface area.

    Parameters
    ----------
    mesh : Mesh
        Triangle mesh.

    Returns
    -------
    float
        Sum of all face areas.
    """
    return sum(face_area(f) for f in mesh.faces)


def edge_lengths(mesh):
    """ Edge lengths.

    Parameters
    ----------
    mesh : Mesh
        A mesh.

    Returns
    -------
    ~numpy.ndarray, shape (m, )
        Edge lengths indexed by edge.
    """
    return np.array([edge_length(e) for e in mesh.edges], dtype=float)


def face_areas(mesh):
    """ Face areas.

    Parameters
    ----------
    mesh : Mesh
        Triangle mesh.

    Returns
    -------
    ~numpy.ndarray, shape (k, )
        Face areas indexed by face.
    """
    return np.array([face_area(f) for f in mesh.faces], dtype=float)


def face_normals(mesh):
    """ Face normals.

    Parameters
    ----------
    mesh : Mesh
        Triangle mesh.

    Returns
    -------
    ~numpy.ndarray, shape (k, 3)
        Unit normal vectors indexed by face.
    """
    return np.array([face_normal(f) for f in mesh.faces], dtype=float)
