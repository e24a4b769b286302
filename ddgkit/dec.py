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

""" Discrete exterior calculus.

Diagonal Hodge star operators and exterior derivatives of a triangle
mesh. Discrete k-forms are arrays indexed by vertices (k = 0), edges
(k = 1), or faces (k = 2). Every builder returns a new
:class:`~scipy.sparse.csr_matrix`.

The exterior derivatives satisfy ``d1 @ d0 == 0`` on any mesh.
"""

import ddgkit.duals as duals
import ddgkit.geometry as geometry
import ddgkit.iterators as iterators
import ddgkit.linalg as linalg
from ddgkit.sparse import TripletList


def hodge_star_0form(mesh):
    """ Hodge star on 0-forms.

    Parameters
    ----------
    mesh : Mesh
        Triangle mesh.

    Returns
    -------
    ~scipy.sparse.csr_matrix, shape (n, n)
        Diagonal matrix of barycentric dual vertex areas.
    """
    n = len(mesh.vertices)
    triplets = TripletList((n, n))

    for v in mesh.vertices:
        triplets.append(v, v, duals.barycentric_dual_area(v))

    return triplets.tocsr()


def hodge_star_1form(mesh):
    """ Hodge star on 1-forms.

    Ratio of dual to primal edge length, i.e., the cotangent edge weight.

    Parameters
    ----------
    mesh : Mesh
        Triangle mesh.

    Returns
    -------
    ~scipy.sparse.csr_matrix, shape (m, m)
        Diagonal matrix of cotangent edge weights.
    """
    m = len(mesh.edges)
    triplets = TripletList((m, m))

    for e in mesh.edges:
        triplets.append(e, e, geometry.edge_cotan_weight(e))

    return triplets.tocsr()


def hodge_star_2form(mesh):
    """ Hodge star on 2-forms.

    Parameters
    ----------
    mesh : Mesh
        Triangle mesh.

    Raises
    ------
    DegenerateGeometryError
        If the mesh contains degenerate faces, see
        :func:`~ddgkit.geometry.degenerate`.

    Returns
    -------
    ~scipy.sparse.csr_matrix, shape (k, k)
        Diagonal matrix of inverse face areas.
    """
    k = len(mesh.faces)
    triplets = TripletList((k, k))
    degenerate = []

    for f in mesh.faces:
        if geometry.degenerate(f):
            degenerate.append(f.index)
        else:
            triplets.append(f, f, 1.0 / geometry.face_area(f))

    if degenerate:
        raise linalg.DegenerateGeometryError(f'degenerate faces {degenerate}')

    return triplets.tocsr()


def exterior_derivative_0form(mesh):
    """ Exterior derivative on 0-forms.

    The discrete gradient, ``(d0 @ x)[e] = x[second] - x[first]`` for an
    edge ``e`` from its first to its second vertex.

    Parameters
    ----------
    mesh : Mesh
        A mesh.

    Returns
    -------
    ~scipy.sparse.csr_matrix, shape (m, n)
        Signed edge-vertex incidence matrix.
    """
    m, n = len(mesh.edges), len(mesh.vertices)
    triplets = TripletList((m, n))

    for e in mesh.edges:
        v, w = e

        triplets.append(e, v, -1.0)
        triplets.append(e, w, 1.0)

    return triplets.tocsr()


def exterior_derivative_1form(mesh):
    """ Exterior derivative on 1-forms.

    The discrete curl. Each face sums the values of its edges, with a
    negative sign for edges oriented against the face's halfedge loop.

    Parameters
    ----------
    mesh : Mesh
        A mesh.

    Returns
    -------
    ~scipy.sparse.csr_matrix, shape (k, m)
        Signed face-edge incidence matrix.
    """
    k, m = len(mesh.faces), len(mesh.edges)
    triplets = TripletList((k, m))

    for f in mesh.faces:
        for h in iterators.halfs(f):
            triplets.append(f, h.edge, 1.0 if h.orientation else -1.0)

    return triplets.tocsr()
