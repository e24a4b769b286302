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

""" Dual vertex areas.

The area of the surface assigned to a vertex, used to turn integrated
quantities (angle defect, mean curvature) into pointwise ones and as the
diagonal of mass matrices.
"""

import numpy as np

import ddgkit.geometry as geometry
import ddgkit.iterators as iterators


def barycentric_dual_area(vertex):
    """ Barycentric dual area.

    One third of the area of each incident triangle.

    Parameters
    ----------
    vertex : Vertex
        Vertex of a triangle mesh.

    Returns
    -------
    float
        Barycentric dual area.
    """
    return sum(geometry.face_area(f) for f in iterators.faces(vertex)) / 3.0


def circumcentric_dual_area(vertex):
    r""" Circumcentric dual area.

    Area of the Voronoi cell of a vertex,

    .. math::

       A_i = \frac{1}{8} \sum_{j} \ell_{ij}^2 (\cot \alpha_{ij} +
             \cot \beta_{ij}),

    where the sum runs over all outgoing halfedges.

    Parameters
    ----------
    vertex : Vertex
        Vertex of a triangle mesh.

    Returns
    -------
    float
        Circumcentric dual area.

    Note
    ----
    Obtuse triangles contribute negative terms, the result can be negative
    and is not clamped.
    """
    area = 0.0

    for h in iterators.halfs(vertex):
        length = geometry.edge_length(h)
        area += length * length * (geometry.cotan(h) + geometry.cotan(h.pair))

    return area / 8.0


def barycentric_dual_areas(mesh):
    """ Barycentric dual areas of all vertices.

    Parameters
    ----------
    mesh : Mesh
        Triangle mesh.

    Returns
    -------
    ~numpy.ndarray, shape (n, )
        Dual areas indexed by vertex.
    """
    return np.array([barycentric_dual_area(v) for v in mesh.vertices],
                    dtype=float)


def circumcentric_dual_areas(mesh):
    """ Circumcentric dual areas of all vertices.

    Parameters
    ----------
    mesh : Mesh
        Triangle mesh.

    Returns
    -------
    ~numpy.ndarray, shape (n, )
        Dual areas indexed by vertex.
    """
    return np.array([circumcentric_dual_area(v) for v in mesh.vertices],
                    dtype=float)
