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

""" Cotangent Laplacian and mass matrix.

The Laplace matrices returned here are the **negative** of the usual
cotangent Laplacian with a small positive shift of the diagonal, which
makes them symmetric positive definite and suitable for Cholesky or
conjugate gradient solvers.
"""

import numpy as np

import ddgkit.duals as duals
import ddgkit.geometry as geometry
import ddgkit.iterators as iterators
from ddgkit.sparse import TripletList


LAPLACE_SHIFT = 1e-8
""" Diagonal shift of the Laplace matrices.
"""


def _assemble(mesh, shift, dtype):
    """ Assemble shifted cotangent Laplacian.

    Parameters
    ----------
    mesh : Mesh
        Triangle mesh.
    shift : float
        Added to each diagonal entry.
    dtype : data-type
        Data type of matrix entries.

    Returns
    -------
    ~scipy.sparse.csr_matrix
        The assembled matrix.
    """
    n = len(mesh.vertices)
    triplets = TripletList((n, n), dtype=dtype)

    for v in mesh.vertices:
        total = 0.0

        for h in iterators.halfs(v):
            weight = geometry.edge_cotan_weight(h.edge)
            total += weight

            triplets.append(v, h.target, -weight)

        triplets.append(v, v, total + shift)

    return triplets.tocsr()


def laplace_matrix(mesh, shift=LAPLACE_SHIFT):
    """ Positive definite cotangent Laplace matrix.

    Parameters
    ----------
    mesh : Mesh
        Triangle mesh.
    shift : float, optional
        Added to each diagonal entry.

    Returns
    -------
    ~scipy.sparse.csr_matrix, shape (n, n)
        Off-diagonal entries hold negated cotangent edge weights, each
        diagonal entry the sum of the weights of its row plus `shift`.
    """
    return _assemble(mesh, shift, float)


def complex_laplace_matrix(mesh, shift=LAPLACE_SHIFT):
    """ Complex positive definite cotangent Laplace matrix.

    Same entries as :func:`laplace_matrix` stored with a complex data
    type, for use with complex valued vertex functions.

    Parameters
    ----------
    mesh : Mesh
        Triangle mesh.
    shift : float, optional
        Added to each diagonal entry.

    Returns
    -------
    ~scipy.sparse.csr_matrix, shape (n, n)
        Complex matrix with vanishing imaginary part.
    """
    return _assemble(mesh, shift, np.complex128)


def mass_matrix(mesh):
    """ Diagonal mass matrix.

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
