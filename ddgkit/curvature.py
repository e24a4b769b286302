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

""" Discrete curvature.

Corner and dihedral angles, vertex normal estimates, angle defect
(discrete Gaussian curvature), integrated mean curvature, and principal
curvatures of a triangle mesh.

Vertex normals are computed by a single accumulation loop whose terms
depend on a :class:`NormalWeighting` value. For a closed surface with
counter-clockwise faces every estimate points to the outside.
"""

import math
from enum import Enum
from enum import auto

import numpy as np

import ddgkit.duals as duals
import ddgkit.geometry as geometry
import ddgkit.iterators as iterators
import ddgkit.linalg as linalg


class NormalWeighting(Enum):
    """ Vertex normal weighting enumeration.
    """

    EQUAL = auto()
    """ Unweighted sum of incident face normals. """

    ANGLE = auto()
    """ Face normals weighted by the corner angle. """

    SPHERE_INSCRIBED = auto()
    """ Cross products of corner edges divided by their squared lengths,
    exact for vertices on a sphere. """

    AREA = auto()
    """ Face normals weighted by face area. """

    GAUSS_CURVATURE = auto()
    """ Edge directions weighted by dihedral angles. """

    MEAN_CURVATURE = auto()
    """ Edge vectors weighted by cotangent weights (area gradient). """


def angle(corner):
    r""" Corner angle.

    Parameters
    ----------
    corner : Corner
        Corner of a triangle mesh.

    Raises
    ------
    InvariantViolation
        If the face of `corner` is not a triangle.
    DegenerateGeometryError
        If one of the bounding edges has vanishing length.

    Returns
    -------
    float
        Angle in :math:`[0, \pi]`. Zero if the halfedge of the corner
        lies on a boundary edge.
    """
    geometry._triangle(corner.face)
    h = corner.halfedge

    if h.edge.boundary:
        return 0.0

    return linalg.angle(h.vector, h.next.next.pair.vector)


def dihedral_angle(halfedge):
    """ Signed dihedral angle.

    Angle between the normals of the two faces adjacent to `halfedge`.
    The angle is positive for convex edges.

    Parameters
    ----------
    halfedge : Halfedge
        Halfedge of a triangle mesh.

    Raises
    ------
    DegenerateGeometryError
        If one of the adjacent faces is degenerate.

    Returns
    -------
    float
        Angle in radians, zero along the boundary.
    """
    if halfedge.boundary or halfedge.pair.boundary:
        return 0.0

    n1 = geometry.face_normal(halfedge.face)
    n2 = geometry.face_normal(halfedge.pair.face)

    # Edges of non-degenerate faces have positive length.
    e = halfedge.vector / geometry.edge_length(halfedge)

    return math.atan2(linalg.dot(e, linalg.cross(n1, n2)), linalg.dot(n1, n2))


def _equal_terms(vertex):
    for f in iterators.faces(vertex):
        yield geometry.face_normal(f)


def _angle_terms(vertex):
    for c in iterators.corners(vertex):
        yield geometry.face_normal(c.face) * angle(c)


def _sphere_inscribed_terms(vertex):
    for c in iterators.corners(vertex):
        geometry._triangle(c.face)

        u = c.halfedge.vector
        v = c.halfedge.next.next.pair.vector
        a, b = linalg.norm(u), linalg.norm(v)

        if min(a, b) <= linalg.EPS * max(a, b):
            raise linalg.DegenerateGeometryError(f'zero-length edge at '
                                                 f'corner #{c.index}')

        yield linalg.cross(u, v) / (a * a * b * b)


def _area_terms(vertex):
    for f in iterators.faces(vertex):
        # Area times unit normal, without normalizing the cross product.
        h = geometry._triangle(f)[0]
        yield 0.5 * linalg.cross(h.vector, h.next.vector)


def _gauss_curvature_terms(vertex):
    for h in iterators.halfs(vertex):
        if not h.edge.boundary:
            theta = dihedral_angle(h)
            yield theta / geometry.edge_length(h) * h.pair.vector


def _mean_curvature_terms(vertex):
    for h in iterators.halfs(vertex):
        yield h.pair.vector * (geometry.cotan(h) + geometry.cotan(h.pair))


_TERMS = {
    NormalWeighting.EQUAL: _equal_terms,
    NormalWeighting.ANGLE: _angle_terms,
    NormalWeighting.SPHERE_INSCRIBED: _sphere_inscribed_terms,
    NormalWeighting.AREA: _area_terms,
    NormalWeighting.GAUSS_CURVATURE: _gauss_curvature_terms,
    NormalWeighting.MEAN_CURVATURE: _mean_curvature_terms,
}


def vertex_normal(vertex, weighting=NormalWeighting.EQUAL):
    """ Vertex normal.

    Parameters
    ----------
    vertex : Vertex
        Vertex of a triangle mesh.
    weighting : NormalWeighting, optional
        Selects the estimator.

    Raises
    ------
    InvariantViolation
        If an incident face is not a triangle.
    DegenerateGeometryError
        If the accumulated vector vanishes relative to the summed lengths
        of its terms, e.g., for isolated vertices or when using curvature
        weights at a flat vertex.

    Returns
    -------
    ~numpy.ndarray, shape (3, )
        Unit normal vector.
    """
    normal = np.zeros(3, dtype=float)
    scale = 0.0

    for term in _TERMS[weighting](vertex):
        normal += term
        scale += linalg.norm(term)

    return linalg.unit(normal, scale)


def vertex_normals(mesh, weighting=NormalWeighting.EQUAL):
    """ Vertex normals.

    Parameters
    ----------
    mesh : Mesh
        Triangle mesh without isolated vertices.
    weighting : NormalWeighting, optional
        Selects the estimator.

    Returns
    -------
    ~numpy.ndarray, shape (n, 3)
        Unit normal vectors indexed by vertex.
    """
    return np.array([vertex_normal(v, weighting) for v in mesh.vertices])


def vertex_normal_equally_weighted(vertex):
    """ Vertex normal from the unweighted sum of face normals. """
    return vertex_normal(vertex, NormalWeighting.EQUAL)


def vertex_normal_angle_weighted(vertex):
    """ Vertex normal from corner angle weighted face normals. """
    return vertex_normal(vertex, NormalWeighting.ANGLE)


def vertex_normal_sphere_inscribed(vertex):
    """ Vertex normal that is exact for vertices on a sphere. """
    return vertex_normal(vertex, NormalWeighting.SPHERE_INSCRIBED)


def vertex_normal_area_weighted(vertex):
    """ Vertex normal from area weighted face normals. """
    return vertex_normal(vertex, NormalWeighting.AREA)


def vertex_normal_gaussian_curvature(vertex):
    """ Vertex normal from the discrete Gaussian curvature vector. """
    return vertex_normal(vertex, NormalWeighting.GAUSS_CURVATURE)


def vertex_normal_mean_curvature(vertex):
    """ Vertex normal from the discrete mean curvature vector. """
    return vertex_normal(vertex, NormalWeighting.MEAN_CURVATURE)


def angle_defect(vertex):
    r""" Angle defect.

    For a vertex with :math:`k` incident angles :math:`\alpha_i`,
    the value :math:`2\pi - \sum_{i=1}^k \alpha_i` is called angular
    defect or discrete Gaussian curvature.

    Parameters
    ----------
    vertex : Vertex
        Vertex of a triangle mesh.

    Returns
    -------
    float
        Angle defect, zero for flat interior vertices.

    Note
    ----
    Values obtained for boundary vertices (when interpreted as discrete
    Gaussian curvature) are questionable.
    """
    return 2.0 * math.pi - sum(angle(c) for c in iterators.corners(vertex))


def total_angle_defect(mesh):
    """ Total angle defect.

    Equals ``2 * pi * euler_characteristic(mesh)`` for closed meshes.

    Parameters
    ----------
    mesh : Mesh
        Triangle mesh.

    Returns
    -------
    float
        Sum of all vertex angle defects.
    """
    return sum(angle_defect(v) for v in mesh.vertices)


def angle_defects(mesh):
    """ Angle defects of all vertices.

    Parameters
    ----------
    mesh : Mesh
        Triangle mesh.

    Returns
    -------
    ~numpy.ndarray, shape (n, )
        Angle defects indexed by vertex.
    """
    return np.array([angle_defect(v) for v in mesh.vertices], dtype=float)


def scalar_mean_curvature(vertex):
    """ Integrated mean curvature.

    Half the sum of edge length times dihedral angle over all edges
    incident to `vertex`.

    Parameters
    ----------
    vertex : Vertex
        Vertex of a triangle mesh.

    Returns
    -------
    float
        Integrated scalar mean curvature.
    """
    total = 0.0

    for h in iterators.halfs(vertex):
        total += geometry.edge_length(h) * dihedral_angle(h)

    return 0.5 * total


def scalar_mean_curvatures(mesh):
    """ Integrated mean curvature of all vertices.

    Parameters
    ----------
    mesh : Mesh
        Triangle mesh.

    Returns
    -------
    ~numpy.ndarray, shape (n, )
        Mean curvature values indexed by vertex.
    """
    return np.array([scalar_mean_curvature(v) for v in mesh.vertices],
                    dtype=float)


def principal_curvatures(vertex):
    r""" Principal curvatures.

    Pointwise mean curvature :math:`H` and Gaussian curvature :math:`K`
    are obtained by dividing the integrated values by the circumcentric
    dual area. The principal curvatures are the roots of
    :math:`\kappa^2 - 2H\kappa + K = 0`.

    Parameters
    ----------
    vertex : Vertex
        Vertex of a triangle mesh.

    Raises
    ------
    DegenerateGeometryError
        If the circumcentric dual area vanishes relative to the squared
        lengths of the incident edges.

    Returns
    -------
    kmin : float
        Minimal principal curvature.
    kmax : float
        Maximal principal curvature.

    Note
    ----
    A negative discriminant :math:`H^2 - K`, caused by discretization or
    rounding errors, is clamped to zero.
    """
    area = duals.circumcentric_dual_area(vertex)
    scale = sum(linalg.sqrd(h.vector) for h in iterators.halfs(vertex))

    # The dual area is measured against the squared lengths of the
    # incident edges.
    if abs(area) <= linalg.EPS * scale:
        raise linalg.DegenerateGeometryError(f'vertex #{vertex.index} has '
                                             f'vanishing dual area')

    H = scalar_mean_curvature(vertex) / area
    K = angle_defect(vertex) / area

    root = math.sqrt(max(H * H - K, 0.0))

    return H - root, H + root
